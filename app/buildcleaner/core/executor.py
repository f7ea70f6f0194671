"""Deletion plan execution.

Executes a DeletionPlan in one of three modes:

- DRY_RUN: measure and report, never touch the filesystem.
- BATCH: safety-check and move every item to recoverable storage,
  collecting per-item failures without aborting.
- INTERACTIVE: like BATCH, but ask an injected confirmation source
  before each item. Answering "all" switches the rest of the run to
  BATCH; answering "abort" stops immediately with UserCancelledError.

Files are always processed before directories, and directories in
plan order (deepest first). Nothing is ever retried.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from buildcleaner.core.errors import SafetyViolationError, UserCancelledError
from buildcleaner.filesystem.protected import check_safety
from buildcleaner.filesystem.trash import RecoverableStorage, TrashStorage
from buildcleaner.filesystem.usage import directory_size, file_size
from buildcleaner.models.outcome import (
    Decision,
    DeletionOutcome,
    ExecutionMode,
    FailedItem,
    FailureReason,
    ItemKind,
    PendingItem,
)
from buildcleaner.models.plan import DeletionPlan

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[PendingItem], Decision]
SafetyCheck = Callable[[Path], object]


@dataclass(slots=True)
class _OutcomeBuilder:
    """Mutable collector for one execution pass."""

    deleted_files: list[Path] = field(default_factory=list)
    deleted_dirs: list[Path] = field(default_factory=list)
    failed_files: list[FailedItem] = field(default_factory=list)
    failed_dirs: list[FailedItem] = field(default_factory=list)
    bytes_freed: int = 0

    def deleted(self, kind: ItemKind, path: Path, size: int) -> None:
        target = self.deleted_files if kind is ItemKind.FILE else self.deleted_dirs
        target.append(path)
        self.bytes_freed += size

    def failed(self, kind: ItemKind, item: FailedItem) -> None:
        target = self.failed_files if kind is ItemKind.FILE else self.failed_dirs
        target.append(item)

    def freeze(self, dry_run: bool = False) -> DeletionOutcome:
        return DeletionOutcome(
            deleted_files=tuple(self.deleted_files),
            deleted_dirs=tuple(self.deleted_dirs),
            failed_files=tuple(self.failed_files),
            failed_dirs=tuple(self.failed_dirs),
            bytes_freed=self.bytes_freed,
            dry_run=dry_run,
        )


@dataclass(slots=True)
class _Session:
    """Interactive state: True while each item still needs a decision.

    Flips to False for good once the user answers CONFIRM_ALL.
    """

    awaiting_decision: bool


def classify_error(error: Exception) -> FailureReason:
    """Map an exception raised while deleting an item to a FailureReason."""
    if isinstance(error, SafetyViolationError):
        return FailureReason.SAFETY_VIOLATION
    if isinstance(error, FileNotFoundError):
        return FailureReason.PATH_NOT_FOUND
    if isinstance(error, PermissionError):
        return FailureReason.PERMISSION_DENIED
    return FailureReason.OTHER


class DeletionExecutor:
    """Executes deletion plans.

    Args:
        storage: Recoverable deletion backend. Defaults to the platform
            trash.
        confirm: Confirmation source for INTERACTIVE mode. Called once per
            item until it answers CONFIRM_ALL or ABORT.
        safety_check: Called on every target before a real deletion;
            must raise SafetyViolationError to reject it.
        follow_symlinks: Measure directory sizes through symlinks, matching
            the scan that produced the plan.
    """

    def __init__(
        self,
        storage: RecoverableStorage | None = None,
        confirm: ConfirmCallback | None = None,
        safety_check: SafetyCheck = check_safety,
        follow_symlinks: bool = False,
    ) -> None:
        self._storage = storage if storage is not None else TrashStorage()
        self._confirm = confirm
        self._safety_check = safety_check
        self._follow_symlinks = follow_symlinks

    def execute(self, plan: DeletionPlan, mode: ExecutionMode) -> DeletionOutcome:
        """Execute a plan in the given mode.

        Args:
            plan: Plan to execute.
            mode: Execution mode.

        Returns:
            DeletionOutcome for this pass.

        Raises:
            UserCancelledError: If an interactive run is aborted. The
                exception carries the partial outcome.
            ValueError: If INTERACTIVE is requested without a confirm callback.
        """
        if mode is ExecutionMode.DRY_RUN:
            return self._dry_run(plan)
        if mode is ExecutionMode.BATCH:
            return self._run(plan, interactive=False)
        if mode is ExecutionMode.INTERACTIVE:
            if self._confirm is None:
                msg = "Interactive mode requires a confirm callback"
                raise ValueError(msg)
            return self._run(plan, interactive=True)
        msg = f"Unknown execution mode: {mode!r}"
        raise ValueError(msg)

    def _dry_run(self, plan: DeletionPlan) -> DeletionOutcome:
        """Record every item as would-delete without touching anything."""
        builder = _OutcomeBuilder()

        for path in plan.files:
            size = file_size(path)
            logger.info("Dry-run: would delete file %s", path)
            builder.deleted(ItemKind.FILE, path, size)

        for path in plan.dirs:
            size = directory_size(path, follow_symlinks=self._follow_symlinks)
            logger.info("Dry-run: would delete directory %s", path)
            builder.deleted(ItemKind.DIRECTORY, path, size)

        return builder.freeze(dry_run=True)

    def _run(self, plan: DeletionPlan, interactive: bool) -> DeletionOutcome:
        builder = _OutcomeBuilder()
        session = _Session(awaiting_decision=interactive)

        for path in plan.files:
            self._process(path, ItemKind.FILE, builder, session)
        for path in plan.dirs:
            self._process(path, ItemKind.DIRECTORY, builder, session)

        return builder.freeze()

    def _process(
        self,
        path: Path,
        kind: ItemKind,
        builder: _OutcomeBuilder,
        session: _Session,
    ) -> None:
        """Safety-check, measure, optionally confirm, and delete one item.

        Failures are recorded in ``builder``; only an abort escapes.
        """
        try:
            self._safety_check(path)
            if kind is ItemKind.FILE:
                size = path.lstat().st_size
            else:
                size = directory_size(path, follow_symlinks=self._follow_symlinks)

            if session.awaiting_decision:
                decision = self._ask(PendingItem(path=path, kind=kind, size_bytes=size))
                if decision is Decision.SKIP:
                    logger.info("Skipped: %s", path)
                    return
                if decision is Decision.ABORT:
                    logger.info("Aborted by user at %s", path)
                    raise UserCancelledError(builder.freeze())
                if decision is Decision.CONFIRM_ALL:
                    session.awaiting_decision = False

            self._storage.move_to_recoverable_storage(path)
        except (SafetyViolationError, OSError) as e:
            reason = classify_error(e)
            logger.warning("Failed to delete %s (%s): %s", path, reason.value, e)
            builder.failed(kind, FailedItem(path=path, reason=reason, message=str(e)))
            return

        logger.info("Deleted %s %s", kind.value, path)
        builder.deleted(kind, path, size)

    def _ask(self, item: PendingItem) -> Decision:
        if self._confirm is None:
            msg = "Interactive mode requires a confirm callback"
            raise ValueError(msg)
        decision = self._confirm(item)
        if not isinstance(decision, Decision):
            msg = f"Confirm callback returned {decision!r}, expected a Decision"
            raise TypeError(msg)
        return decision


def execute(
    plan: DeletionPlan,
    mode: ExecutionMode,
    storage: RecoverableStorage | None = None,
    confirm: ConfirmCallback | None = None,
    follow_symlinks: bool = False,
) -> DeletionOutcome:
    """Functional shortcut for ``DeletionExecutor(...).execute(plan, mode)``."""
    return DeletionExecutor(
        storage=storage, confirm=confirm, follow_symlinks=follow_symlinks
    ).execute(plan, mode)
