"""End-to-end cleaning pipeline.

Runs rule resolution, scan, planning, execution and aggregation in
sequence. This is the entry point for callers that want the whole
flow; each stage is also usable on its own.
"""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from buildcleaner.core.config import ConfigResolver
from buildcleaner.core.executor import ConfirmCallback, DeletionExecutor
from buildcleaner.core.paths import prepare_roots
from buildcleaner.core.planner import build_plan
from buildcleaner.core.report import aggregate
from buildcleaner.core.scanner import ProgressCallback, Scanner
from buildcleaner.filesystem.trash import RecoverableStorage
from buildcleaner.models.outcome import DeletionOutcome, ExecutionMode
from buildcleaner.models.plan import DeletionPlan
from buildcleaner.models.rules import ResolvedConfig, RuleConfig
from buildcleaner.models.scan_result import ScanResult
from buildcleaner.models.stats import Stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CleanReport:
    """Everything produced by one pipeline run.

    Attributes:
        config: Resolved configuration that was applied.
        scan: Scan result.
        plan: Deletion plan derived from the scan.
        outcome: Execution outcome.
        stats: Aggregated statistics.
    """

    config: ResolvedConfig
    scan: ScanResult
    plan: DeletionPlan
    outcome: DeletionOutcome
    stats: Stats


def clean(
    root_paths: Sequence[str | Path],
    external_rules: RuleConfig | None = None,
    overrides: Sequence[str] = (),
    mode: ExecutionMode = ExecutionMode.DRY_RUN,
    *,
    storage: RecoverableStorage | None = None,
    confirm: ConfirmCallback | None = None,
    on_progress: ProgressCallback | None = None,
) -> CleanReport:
    """Resolve rules, scan, plan, execute and aggregate.

    The project type is detected from the first root path.

    Args:
        root_paths: One or more roots to clean; ``~`` is expanded.
        external_rules: Optional rule object merged over the defaults.
        overrides: Extra patterns; ``name/`` adds a folder rule.
        mode: Execution mode. Defaults to DRY_RUN.
        storage: Recoverable deletion backend (platform trash by default).
        confirm: Confirmation source, required for INTERACTIVE.
        on_progress: Optional scan progress callback.

    Returns:
        CleanReport for the run.

    Raises:
        ValueError: If no root path is given.
        PathNotFoundError: If a root path does not exist.
        PermissionDeniedError: If a root path cannot be read.
        EmptyRuleSetError: If the resolved rule set is empty.
        UserCancelledError: If an interactive run is aborted.
    """
    if not root_paths:
        msg = "At least one root path is required"
        raise ValueError(msg)

    start = time.monotonic()

    roots = prepare_roots(root_paths)
    config = ConfigResolver().resolve(roots[0], external_rules, overrides)

    scanner = Scanner(config.rules, config.exclusions, config.options)
    scan_result = scanner.scan(roots, on_progress)
    logger.debug(
        "Scan matched %d folders and %d files (%d bytes)",
        len(scan_result.matched_folders),
        len(scan_result.matched_files),
        scan_result.total_matched_size,
    )

    plan = build_plan(scan_result)
    executor = DeletionExecutor(
        storage=storage,
        confirm=confirm,
        follow_symlinks=config.options.follow_symlinks,
    )
    outcome = executor.execute(plan, mode)
    stats = aggregate(scan_result, outcome, time.monotonic() - start)

    return CleanReport(
        config=config,
        scan=scan_result,
        plan=plan,
        outcome=outcome,
        stats=stats,
    )
