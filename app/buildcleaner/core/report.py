"""Statistics aggregation for a completed run."""

from datetime import timedelta

from buildcleaner.models.outcome import DeletionOutcome
from buildcleaner.models.scan_result import ScanResult
from buildcleaner.models.stats import Stats


def aggregate(
    scan_result: ScanResult,
    outcome: DeletionOutcome,
    elapsed: timedelta | float,
) -> Stats:
    """Combine a scan result and a deletion outcome into Stats.

    Args:
        scan_result: Result of the scan.
        outcome: Result of executing the plan built from ``scan_result``.
        elapsed: Duration of the run, as a timedelta or in seconds.

    Returns:
        Immutable Stats.
    """
    if not isinstance(elapsed, timedelta):
        elapsed = timedelta(seconds=elapsed)

    return Stats(
        files_scanned=scan_result.total_files_visited,
        dirs_scanned=scan_result.total_dirs_visited,
        files_matched=len(scan_result.matched_files),
        dirs_matched=len(scan_result.matched_folders),
        matched_size=scan_result.total_matched_size,
        files_deleted=len(outcome.deleted_files),
        dirs_deleted=len(outcome.deleted_dirs),
        files_failed=len(outcome.failed_files),
        dirs_failed=len(outcome.failed_dirs),
        bytes_freed=outcome.bytes_freed,
        elapsed=elapsed,
        dry_run=outcome.dry_run,
    )
