"""Deletion plan model."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DeletionPlan:
    """Ordered set of paths to delete.

    Files carry no ordering constraint among themselves. Directories are
    ordered deepest first, so a descendant always precedes its ancestor.

    Attributes:
        files: Files to delete.
        dirs: Directories to delete, by descending path depth.
    """

    files: tuple[Path, ...] = ()
    dirs: tuple[Path, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True if the plan has nothing to delete."""
        return not self.files and not self.dirs

    def __len__(self) -> int:
        return len(self.files) + len(self.dirs)
