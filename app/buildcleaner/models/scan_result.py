"""Scan result models.

This module defines the immutable result of one scan invocation and
the progress snapshot passed to progress callbacks.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class ScanProgress:
    """Snapshot of the running scan counters.

    Attributes:
        files_visited: Files counted so far.
        dirs_visited: Directories counted so far (matched ones included).
        files_matched: Files matched by a file rule so far.
        dirs_matched: Directories matched by a folder rule so far.
        matched_size: Bytes matched so far.
        current_path: Node that was just visited.
    """

    files_visited: int
    dirs_visited: int
    files_matched: int
    dirs_matched: int
    matched_size: int
    current_path: Path


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Result of scanning a set of root paths.

    No element of ``matched_folders`` is an ancestor or descendant of
    another: a matched folder terminates descent.

    Attributes:
        matched_folders: Directories matched by a folder rule, in visit order.
        matched_files: Files matched by a file rule, in visit order.
        total_matched_size: Combined size of matched files and the
            recursive size of matched folders, in bytes.
        total_dirs_visited: Directories visited, including matched ones.
        total_files_visited: Files visited, whether matched or not.
    """

    matched_folders: tuple[Path, ...] = ()
    matched_files: tuple[Path, ...] = ()
    total_matched_size: int = 0
    total_dirs_visited: int = 0
    total_files_visited: int = 0

    @property
    def is_empty(self) -> bool:
        """True if nothing was matched."""
        return not self.matched_folders and not self.matched_files

    @property
    def match_count(self) -> int:
        """Total number of matched entries."""
        return len(self.matched_folders) + len(self.matched_files)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "matched_folders": [str(p) for p in self.matched_folders],
            "matched_files": [str(p) for p in self.matched_files],
            "total_matched_size": self.total_matched_size,
            "total_dirs_visited": self.total_dirs_visited,
            "total_files_visited": self.total_files_visited,
        }
