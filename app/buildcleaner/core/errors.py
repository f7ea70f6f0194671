"""Exception hierarchy for buildcleaner.

Per-item problems (a single file or directory that cannot be deleted)
are normally captured in a DeletionOutcome rather than raised. The
exceptions here are raised where a failure prevents the pipeline from
continuing, or internally by the executor before being converted into
a failure record.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from buildcleaner.models.outcome import DeletionOutcome


class CleanerError(Exception):
    """Base exception for buildcleaner errors."""


class PathNotFoundError(CleanerError):
    """Raised when a root path or deletion target does not exist."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Path not found: {self.path}")


class PermissionDeniedError(CleanerError):
    """Raised when a path cannot be accessed due to missing permissions."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Permission denied: {self.path}")


class EmptyRuleSetError(CleanerError):
    """Raised when the resolved configuration has no folder or file rules."""

    def __init__(self) -> None:
        super().__init__("At least one folder or file pattern must be specified")


class SafetyViolationError(CleanerError):
    """Raised when a deletion target fails the safety check."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(message)


class UserCancelledError(CleanerError):
    """Raised when an interactive run is aborted by the user.

    Attributes:
        partial: Outcome of the items processed before the abort.
            Already deleted items stay deleted.
    """

    def __init__(self, partial: DeletionOutcome) -> None:
        self.partial = partial
        super().__init__("Operation cancelled by user")
