"""Execution models for the deletion step.

This module defines the execution modes, the interactive decision
protocol, and the immutable outcome of one execution pass.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class ExecutionMode(Enum):
    """How a deletion plan is executed.

    Attributes:
        DRY_RUN: Compute what would be deleted without touching anything.
        BATCH: Delete every item, collecting per-item failures.
        INTERACTIVE: Ask for a decision before each deletion.
    """

    DRY_RUN = "dry_run"
    BATCH = "batch"
    INTERACTIVE = "interactive"


class Decision(Enum):
    """Answer returned by an interactive confirmation source.

    Attributes:
        CONFIRM: Delete this item.
        SKIP: Leave this item alone; it is not recorded anywhere.
        CONFIRM_ALL: Delete this item and every remaining item without asking.
        ABORT: Stop immediately, leaving the rest of the plan untouched.
    """

    CONFIRM = "confirm"
    SKIP = "skip"
    CONFIRM_ALL = "all"
    ABORT = "abort"


class ItemKind(Enum):
    """Kind of plan item."""

    FILE = "file"
    DIRECTORY = "directory"


class FailureReason(str, Enum):
    """Classification of a per-item deletion failure.

    Attributes:
        PATH_NOT_FOUND: The path disappeared between scan and delete.
        PERMISSION_DENIED: The path could not be accessed or moved.
        SAFETY_VIOLATION: The path failed the safety check and was never touched.
        OTHER: Any other OS-level error.
    """

    PATH_NOT_FOUND = "path_not_found"
    PERMISSION_DENIED = "permission_denied"
    SAFETY_VIOLATION = "safety_violation"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class PendingItem:
    """Item awaiting an interactive decision.

    Attributes:
        path: Path about to be deleted.
        kind: Whether the item is a file or a directory.
        size_bytes: Size measured before deletion (recursive for directories).
    """

    path: Path
    kind: ItemKind
    size_bytes: int


@dataclass(frozen=True, slots=True)
class FailedItem:
    """A plan item that could not be deleted.

    Attributes:
        path: Path that failed.
        reason: Failure classification.
        message: Underlying error message.
    """

    path: Path
    reason: FailureReason
    message: str = ""


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Result of one execution pass over a deletion plan.

    In dry-run mode, ``deleted_files``/``deleted_dirs`` list what would
    have been deleted and ``bytes_freed`` what would have been freed.

    Attributes:
        deleted_files: Files moved to recoverable storage.
        deleted_dirs: Directories moved to recoverable storage.
        failed_files: Files that could not be deleted.
        failed_dirs: Directories that could not be deleted.
        bytes_freed: Total size of deleted items.
        dry_run: Whether this outcome comes from a dry run.
    """

    deleted_files: tuple[Path, ...] = ()
    deleted_dirs: tuple[Path, ...] = ()
    failed_files: tuple[FailedItem, ...] = ()
    failed_dirs: tuple[FailedItem, ...] = ()
    bytes_freed: int = 0
    dry_run: bool = False

    @property
    def has_failures(self) -> bool:
        """True if any item failed."""
        return bool(self.failed_files or self.failed_dirs)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "deleted_files": [str(p) for p in self.deleted_files],
            "deleted_dirs": [str(p) for p in self.deleted_dirs],
            "failed_files": [_failure_to_dict(f) for f in self.failed_files],
            "failed_dirs": [_failure_to_dict(f) for f in self.failed_dirs],
            "bytes_freed": self.bytes_freed,
            "dry_run": self.dry_run,
        }


def _failure_to_dict(item: FailedItem) -> dict[str, str]:
    return {"path": str(item.path), "reason": item.reason.value, "message": item.message}
