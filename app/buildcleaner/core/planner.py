"""Deletion plan construction."""

from pathlib import Path

from buildcleaner.models.plan import DeletionPlan
from buildcleaner.models.scan_result import ScanResult


def path_depth(path: Path) -> int:
    """Number of path segments, counting the anchor (``/a/b`` is 3)."""
    return len(path.parts)


def build_plan(scan_result: ScanResult) -> DeletionPlan:
    """Convert a scan result into an ordered deletion plan.

    Files keep their scan order. Directories are ordered deepest first,
    with equal depths ordered lexicographically, so a descendant always
    precedes its ancestor even if the matched set was nested.

    Args:
        scan_result: Result of a scan.

    Returns:
        Immutable DeletionPlan.
    """
    dirs = sorted(scan_result.matched_folders, key=lambda d: (-path_depth(d), str(d)))
    return DeletionPlan(files=tuple(scan_result.matched_files), dirs=tuple(dirs))
