"""Statistics model for cleanup reports."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any


@dataclass(frozen=True, slots=True)
class Stats:
    """Read-only summary of a scan and its execution.

    Attributes:
        files_scanned: Files visited during the scan.
        dirs_scanned: Directories visited during the scan.
        files_matched: Files matched by a file rule.
        dirs_matched: Directories matched by a folder rule.
        matched_size: Bytes matched during the scan.
        files_deleted: Files deleted (or that would be, in dry-run).
        dirs_deleted: Directories deleted (or that would be, in dry-run).
        files_failed: Files that could not be deleted.
        dirs_failed: Directories that could not be deleted.
        bytes_freed: Bytes freed (or that would be, in dry-run).
        elapsed: Wall time of the whole run.
        dry_run: Whether nothing was actually deleted.
    """

    files_scanned: int
    dirs_scanned: int
    files_matched: int
    dirs_matched: int
    matched_size: int
    files_deleted: int
    dirs_deleted: int
    files_failed: int
    dirs_failed: int
    bytes_freed: int
    elapsed: timedelta
    dry_run: bool = False

    @property
    def total_failed(self) -> int:
        """Number of failed items."""
        return self.files_failed + self.dirs_failed

    @property
    def total_deleted(self) -> int:
        """Number of deleted items."""
        return self.files_deleted + self.dirs_deleted

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "files_scanned": self.files_scanned,
            "dirs_scanned": self.dirs_scanned,
            "files_matched": self.files_matched,
            "dirs_matched": self.dirs_matched,
            "matched_size": self.matched_size,
            "files_deleted": self.files_deleted,
            "dirs_deleted": self.dirs_deleted,
            "files_failed": self.files_failed,
            "dirs_failed": self.dirs_failed,
            "bytes_freed": self.bytes_freed,
            "elapsed_seconds": self.elapsed.total_seconds(),
            "dry_run": self.dry_run,
        }
