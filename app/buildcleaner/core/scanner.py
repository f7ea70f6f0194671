"""Filesystem scanner for disposable build artifacts.

Walks each root path depth-first, in the order given, and collects
directories matching a folder rule and files matching a file rule.
A matched directory is recorded as a single unit: the scanner never
descends into it, so nothing below it is visited, counted or matched.
"""

import logging
import os
import stat
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from buildcleaner.core.paths import is_within, normalize_path
from buildcleaner.core.patterns import matches_any
from buildcleaner.filesystem.usage import directory_size
from buildcleaner.models.rules import CleaningRule, RuleKind, ScanOptions
from buildcleaner.models.scan_result import ScanProgress, ScanResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ScanProgress], None]

_SECONDS_PER_DAY = 86400


@dataclass(slots=True)
class _Accumulator:
    """Running counters for one scan() call."""

    folders: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    matched_size: int = 0
    dirs_visited: int = 0
    files_visited: int = 0

    def snapshot(self, current: Path) -> ScanProgress:
        return ScanProgress(
            files_visited=self.files_visited,
            dirs_visited=self.dirs_visited,
            files_matched=len(self.files),
            dirs_matched=len(self.folders),
            matched_size=self.matched_size,
            current_path=current,
        )

    def freeze(self) -> ScanResult:
        return ScanResult(
            matched_folders=tuple(self.folders),
            matched_files=tuple(self.files),
            total_matched_size=self.matched_size,
            total_dirs_visited=self.dirs_visited,
            total_files_visited=self.files_visited,
        )


def outermost_roots(root_paths: Iterable[str | Path]) -> list[Path]:
    """Normalize roots and drop duplicates and roots nested under another root.

    Nesting is checked against every other root regardless of position, so
    no node is walked twice. The remaining roots keep caller order.
    """
    roots: list[Path] = []
    for raw_root in root_paths:
        root = normalize_path(raw_root)
        if root not in roots:
            roots.append(root)

    outermost: list[Path] = []
    for root in roots:
        if any(root != other and root.is_relative_to(other) for other in roots):
            logger.debug("Root already covered by another root: %s", root)
            continue
        outermost.append(root)
    return outermost


class Scanner:
    """Scans root paths for entries matching a set of cleaning rules.

    Args:
        rules: Folder and file rules to apply.
        exclusions: Paths that are skipped entirely, together with
            everything below them. ``~`` is expanded.
        options: Traversal and filter options.
        clock: Returns the current time as a UNIX timestamp; used for
            age filtering.
    """

    def __init__(
        self,
        rules: CleaningRule,
        exclusions: Iterable[str | Path] = (),
        options: ScanOptions | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._rules = rules
        self._exclusions = tuple(normalize_path(p) for p in exclusions)
        self._options = options or ScanOptions()
        self._clock = clock

    def scan(
        self,
        root_paths: Sequence[str | Path],
        on_progress: ProgressCallback | None = None,
    ) -> ScanResult:
        """Scan all root paths sequentially and return the matches.

        Unreadable entries never abort the scan; they only reduce the
        counts.

        Args:
            root_paths: Roots to scan, processed in order. A root nested
                under another root is covered by that root and not walked
                on its own.
            on_progress: Optional callback invoked after every visited node
                with a snapshot of the running counters.

        Returns:
            Immutable ScanResult for this invocation.
        """
        acc = _Accumulator()
        now = self._clock()

        for root in outermost_roots(root_paths):
            self._walk(root, acc, now, on_progress)

        return acc.freeze()

    def _walk(
        self,
        root: Path,
        acc: _Accumulator,
        now: float,
        on_progress: ProgressCallback | None,
    ) -> None:
        """Depth-first walk of a single root.

        Uses an explicit stack of (path, depth) so deep trees do not hit
        the interpreter's recursion limit. Children are pushed in reverse
        sorted order, which keeps visit order sorted.
        """
        max_depth = self._options.effective_max_depth
        entered: set[tuple[int, int]] = set()
        stack: list[tuple[Path, int]] = [(root, 0)]

        while stack:
            path, depth = stack.pop()

            if is_within(path, self._exclusions):
                logger.debug("Excluded: %s", path)
                continue

            st = self._stat(path, follow=depth == 0 or self._options.follow_symlinks)
            if st is None:
                continue

            if stat.S_ISDIR(st.st_mode):
                acc.dirs_visited += 1

                if matches_any(RuleKind.FOLDER, self._rules, path.name):
                    acc.folders.append(path)
                    acc.matched_size += directory_size(
                        path, follow_symlinks=self._options.follow_symlinks
                    )
                    self._report(acc, path, on_progress)
                    continue

                self._report(acc, path, on_progress)

                if max_depth is not None and depth >= max_depth:
                    continue
                if self._options.follow_symlinks:
                    key = (st.st_dev, st.st_ino)
                    if key in entered:
                        logger.debug("Symlink cycle, not descending: %s", path)
                        continue
                    entered.add(key)

                children = self._list_children(path)
                stack.extend((child, depth + 1) for child in reversed(children))
                continue

            # Regular files, and symlinks when they are not followed
            acc.files_visited += 1
            if self._passes_filters(st, now) and matches_any(
                RuleKind.FILE, self._rules, path.name
            ):
                acc.files.append(path)
                acc.matched_size += st.st_size
            self._report(acc, path, on_progress)

    @staticmethod
    def _stat(path: Path, follow: bool) -> os.stat_result | None:
        """Stat a node, or return None if it cannot be read.

        Roots are always followed; below them symlinks are followed only
        when the options say so.
        """
        try:
            return path.stat() if follow else path.lstat()
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
            return None

    @staticmethod
    def _list_children(path: Path) -> list[Path]:
        try:
            return sorted(path.iterdir())
        except OSError as e:
            logger.debug("Cannot list directory %s: %s", path, e)
            return []

    def _passes_filters(self, st: os.stat_result, now: float) -> bool:
        """Apply the inclusive size and age bounds."""
        opts = self._options

        if opts.min_size is not None and st.st_size < opts.min_size:
            return False
        if opts.max_size is not None and st.st_size > opts.max_size:
            return False

        if opts.min_age_days is None and opts.max_age_days is None:
            return True

        age_days = int(max(now - st.st_mtime, 0) // _SECONDS_PER_DAY)
        if opts.min_age_days is not None and age_days < opts.min_age_days:
            return False
        if opts.max_age_days is not None and age_days > opts.max_age_days:
            return False
        return True

    @staticmethod
    def _report(acc: _Accumulator, path: Path, on_progress: ProgressCallback | None) -> None:
        if on_progress is not None:
            on_progress(acc.snapshot(path))


def scan(
    root_paths: Sequence[str | Path],
    rules: CleaningRule,
    exclusions: Iterable[str | Path] = (),
    options: ScanOptions | None = None,
    on_progress: ProgressCallback | None = None,
) -> ScanResult:
    """Scan root paths with the given rules.

    Functional shortcut for ``Scanner(rules, exclusions, options).scan(...)``.
    """
    return Scanner(rules, exclusions, options).scan(root_paths, on_progress)
