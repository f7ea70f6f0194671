"""Unit tests for the filesystem scanner.

Tests matching, pruning of matched folders, visit counts, exclusions,
size and age filters, depth limits, symlink handling, and progress
reporting.
"""

import os
import time
from pathlib import Path

from buildcleaner.core.scanner import Scanner, outermost_roots, scan
from buildcleaner.models.rules import CleaningRule, ScanOptions
from buildcleaner.models.scan_result import ScanProgress

DAY = 86400

FOLDER_RULES = CleaningRule(folder_names=frozenset({"node_modules", "target"}))


def _rules(folders: tuple[str, ...] = (), files: tuple[str, ...] = ()) -> CleaningRule:
    return CleaningRule(folder_names=frozenset(folders), file_patterns=frozenset(files))


class TestFolderMatching:
    """Tests for folder rules and pruning."""

    def test_artifact_scenario(self, artifact_tree: Path) -> None:
        """Two matched folders, 200 bytes, internal files never visited."""
        result = Scanner(FOLDER_RULES).scan([artifact_tree])

        assert sorted(result.matched_folders) == [
            artifact_tree / "node_modules",
            artifact_tree / "target",
        ]
        assert result.total_matched_size == 200
        assert result.matched_files == ()
        assert result.total_files_visited == 1
        assert result.total_dirs_visited == 3

    def test_nothing_below_matched_folder(self, tmp_path: Path, make_file) -> None:
        """Nested matches inside a matched folder are not reported."""
        make_file(tmp_path / "node_modules" / "pkg" / "node_modules" / "x.log", 5)
        make_file(tmp_path / "node_modules" / "y.log", 5)

        result = Scanner(_rules(("node_modules",), ("*.log",))).scan([tmp_path])

        assert result.matched_folders == (tmp_path / "node_modules",)
        assert result.matched_files == ()
        for match in result.matched_files + result.matched_folders:
            for folder in result.matched_folders:
                assert match == folder or not match.is_relative_to(folder)

    def test_root_can_match(self, tmp_path: Path, make_file) -> None:
        """A root whose own name is a folder rule is matched as a unit."""
        root = tmp_path / "target"
        make_file(root / "a.o", 7)

        result = Scanner(_rules(("target",))).scan([root])

        assert result.matched_folders == (root,)
        assert result.total_matched_size == 7
        assert result.total_dirs_visited == 1
        assert result.total_files_visited == 0

    def test_matched_empty_folder(self, tmp_path: Path) -> None:
        """An empty matched folder contributes zero bytes."""
        (tmp_path / "dist").mkdir()

        result = Scanner(_rules(("dist",))).scan([tmp_path])

        assert result.matched_folders == (tmp_path / "dist",)
        assert result.total_matched_size == 0

    def test_folder_rule_does_not_match_file(self, tmp_path: Path) -> None:
        """A file named like a folder rule is not matched."""
        (tmp_path / "build").write_text("not a dir")

        result = Scanner(_rules(("build",))).scan([tmp_path])

        assert result.matched_folders == ()
        assert result.total_files_visited == 1


class TestFileMatching:
    """Tests for file rules."""

    def test_files_matched_in_visit_order(self, tmp_path: Path, make_file) -> None:
        """Matched files are reported in sorted depth-first order."""
        make_file(tmp_path / "b.log", 1)
        make_file(tmp_path / "a" / "z.log", 2)
        make_file(tmp_path / "a.log", 3)
        make_file(tmp_path / "keep.txt", 4)

        result = Scanner(_rules(files=("*.log",))).scan([tmp_path])

        assert result.matched_files == (
            tmp_path / "a" / "z.log",
            tmp_path / "a.log",
            tmp_path / "b.log",
        )
        assert result.total_matched_size == 6
        assert result.total_files_visited == 4
        assert result.total_dirs_visited == 2

    def test_file_root(self, tmp_path: Path, make_file) -> None:
        """A file given as a root is matched directly."""
        target = make_file(tmp_path / "debug.log", 9)

        result = Scanner(_rules(files=("*.log",))).scan([target])

        assert result.matched_files == (target,)
        assert result.total_files_visited == 1
        assert result.total_dirs_visited == 0

    def test_python_project(self, python_tree: Path) -> None:
        """__pycache__ folders are pruned and stray .pyc files matched."""
        result = Scanner(_rules(("__pycache__",), ("*.pyc",))).scan([python_tree])

        assert result.matched_folders == (
            python_tree / "pkg" / "__pycache__",
            python_tree / "pkg" / "sub" / "__pycache__",
        )
        assert result.matched_files == (python_tree / "pkg" / "stray.pyc",)
        assert result.total_matched_size == 100


class TestFilters:
    """Tests for size and age filters."""

    def test_size_bounds_inclusive(self, tmp_path: Path, make_file) -> None:
        """Files exactly at the bounds are kept."""
        for size in (5, 10, 15, 20, 25):
            make_file(tmp_path / f"f{size:02d}.log", size)

        options = ScanOptions(min_size=10, max_size=20)
        result = Scanner(_rules(files=("*.log",)), options=options).scan([tmp_path])

        assert [p.name for p in result.matched_files] == ["f10.log", "f15.log", "f20.log"]
        assert result.total_files_visited == 5

    def test_age_bounds(self, tmp_path: Path, make_file) -> None:
        """Age is measured in whole days against the injected clock."""
        now = 1_700_000_000.0
        for days in (0, 3, 10):
            path = make_file(tmp_path / f"age{days:02d}.log", 1)
            mtime = now - days * DAY - 60
            os.utime(path, (mtime, mtime))

        options = ScanOptions(min_age_days=3, max_age_days=9)
        result = Scanner(_rules(files=("*.log",)), options=options, clock=lambda: now).scan(
            [tmp_path]
        )

        assert [p.name for p in result.matched_files] == ["age03.log"]

    def test_filters_do_not_apply_to_folders(self, tmp_path: Path, make_file) -> None:
        """A matched folder is kept regardless of size and age bounds."""
        make_file(tmp_path / "dist" / "bundle.js", 1000)

        options = ScanOptions(max_size=1, min_age_days=365)
        result = Scanner(_rules(("dist",)), options=options).scan([tmp_path])

        assert result.matched_folders == (tmp_path / "dist",)
        assert result.total_matched_size == 1000

    def test_future_mtime_counts_as_new(self, tmp_path: Path, make_file) -> None:
        """A file modified in the future has age zero."""
        path = make_file(tmp_path / "x.log", 1)
        future = time.time() + 10 * DAY
        os.utime(path, (future, future))

        options = ScanOptions(max_age_days=0)
        result = Scanner(_rules(files=("*.log",)), options=options).scan([tmp_path])

        assert result.matched_files == (path,)


class TestExclusions:
    """Tests for excluded paths."""

    def test_excluded_subtree_not_visited(self, tmp_path: Path, make_file) -> None:
        """Nothing under an exclusion is visited or matched."""
        make_file(tmp_path / "keep" / "node_modules" / "a.js", 1)
        make_file(tmp_path / "keep" / "x.log", 1)
        make_file(tmp_path / "other" / "node_modules" / "b.js", 2)

        result = Scanner(
            _rules(("node_modules",), ("*.log",)),
            exclusions=[tmp_path / "keep"],
        ).scan([tmp_path])

        assert result.matched_folders == (tmp_path / "other" / "node_modules",)
        assert result.matched_files == ()
        assert result.total_files_visited == 0

    def test_excluded_root(self, tmp_path: Path, make_file) -> None:
        """An excluded root yields an empty result."""
        make_file(tmp_path / "a.log", 1)

        result = Scanner(_rules(files=("*.log",)), exclusions=[str(tmp_path)]).scan([tmp_path])

        assert result == type(result)()

    def test_similar_prefix_not_excluded(self, tmp_path: Path, make_file) -> None:
        """An exclusion does not cover siblings sharing a name prefix."""
        make_file(tmp_path / "keeper" / "a.log", 1)

        result = Scanner(_rules(files=("*.log",)), exclusions=[tmp_path / "keep"]).scan(
            [tmp_path]
        )

        assert result.matched_files == (tmp_path / "keeper" / "a.log",)


class TestDepth:
    """Tests for recursion and depth limits."""

    def test_non_recursive(self, tmp_path: Path, make_file) -> None:
        """recursive=False only visits the root's immediate children."""
        make_file(tmp_path / "top.log", 1)
        make_file(tmp_path / "sub" / "deep.log", 1)
        (tmp_path / "sub" / "dist").mkdir()
        (tmp_path / "dist").mkdir()

        options = ScanOptions(recursive=False)
        result = Scanner(_rules(("dist",), ("*.log",)), options=options).scan([tmp_path])

        assert result.matched_files == (tmp_path / "top.log",)
        assert result.matched_folders == (tmp_path / "dist",)
        assert result.total_dirs_visited == 3

    def test_max_depth(self, tmp_path: Path, make_file) -> None:
        """Entries deeper than max_depth are not visited."""
        make_file(tmp_path / "a" / "one.log", 1)
        make_file(tmp_path / "a" / "b" / "two.log", 1)

        options = ScanOptions(max_depth=2)
        result = Scanner(_rules(files=("*.log",)), options=options).scan([tmp_path])

        assert result.matched_files == (tmp_path / "a" / "one.log",)
        assert result.total_dirs_visited == 3

    def test_deep_tree(self, tmp_path: Path, make_file) -> None:
        """Very deep trees are walked without recursion errors."""
        deep = tmp_path
        for i in range(300):
            deep = deep / f"d{i}"
        make_file(deep / "bottom.log", 1)

        result = Scanner(_rules(files=("*.log",))).scan([tmp_path])

        assert result.matched_files == (deep / "bottom.log",)


class TestSymlinks:
    """Tests for symlink handling."""

    def test_symlinked_directory_not_followed(self, tmp_path: Path, make_file) -> None:
        """By default a symlinked directory is neither entered nor matched."""
        make_file(tmp_path / "real" / "x.log", 1)
        root = tmp_path / "root"
        root.mkdir()
        (root / "node_modules").symlink_to(tmp_path / "real", target_is_directory=True)

        result = Scanner(_rules(("node_modules",), ("*.log",))).scan([root])

        assert result.matched_folders == ()
        assert result.matched_files == ()
        assert result.total_files_visited == 1

    def test_symlinked_directory_followed(self, tmp_path: Path, make_file) -> None:
        """With follow_symlinks a symlinked directory is entered."""
        make_file(tmp_path / "real" / "x.log", 1)
        root = tmp_path / "root"
        root.mkdir()
        (root / "linked").symlink_to(tmp_path / "real", target_is_directory=True)

        options = ScanOptions(follow_symlinks=True)
        result = Scanner(_rules(files=("*.log",)), options=options).scan([root])

        assert result.matched_files == (root / "linked" / "x.log",)

    def test_symlink_cycle_terminates(self, tmp_path: Path, make_file) -> None:
        """A symlink loop is entered at most once."""
        make_file(tmp_path / "a" / "x.log", 1)
        (tmp_path / "a" / "loop").symlink_to(tmp_path, target_is_directory=True)

        options = ScanOptions(follow_symlinks=True)
        result = Scanner(_rules(files=("*.log",)), options=options).scan([tmp_path])

        assert result.matched_files == (tmp_path / "a" / "x.log",)

    def test_dangling_symlink_matched_as_file(self, tmp_path: Path) -> None:
        """A dangling link is a file node and may match a file rule."""
        link = tmp_path / "stale.log"
        link.symlink_to(tmp_path / "missing")

        result = Scanner(_rules(files=("*.log",))).scan([tmp_path])

        assert result.matched_files == (link,)


class TestRoots:
    """Tests for multiple and overlapping roots."""

    def test_roots_processed_in_order(self, tmp_path: Path, make_file) -> None:
        """Results follow the order of the roots."""
        make_file(tmp_path / "b" / "x.log", 1)
        make_file(tmp_path / "a" / "x.log", 1)

        result = Scanner(_rules(files=("*.log",))).scan([tmp_path / "b", tmp_path / "a"])

        assert result.matched_files == (tmp_path / "b" / "x.log", tmp_path / "a" / "x.log")

    def test_nested_root_not_scanned_twice(self, tmp_path: Path, make_file) -> None:
        """A root inside an earlier root is skipped."""
        make_file(tmp_path / "sub" / "x.log", 1)

        result = Scanner(_rules(files=("*.log",))).scan([tmp_path, tmp_path / "sub"])

        assert result.matched_files == (tmp_path / "sub" / "x.log",)
        assert result.total_files_visited == 1

    def test_inner_root_given_first_is_covered_by_outer_root(
        self, tmp_path: Path, make_file
    ) -> None:
        """An inner root listed before its outer root is not walked on its own."""
        make_file(tmp_path / "sub" / "x.log", 1)
        make_file(tmp_path / "y.log", 1)

        result = Scanner(_rules(files=("*.log",))).scan([tmp_path / "sub", tmp_path])

        assert result.matched_files == (tmp_path / "sub" / "x.log", tmp_path / "y.log")
        assert result.total_files_visited == 2

    def test_inner_folder_root_first_not_double_counted(
        self, tmp_path: Path, make_file
    ) -> None:
        """A matched folder inside a later root's match is reported once."""
        make_file(tmp_path / "node_modules" / "a" / "node_modules" / "x.js", 10)

        result = Scanner(_rules(folders=("node_modules",))).scan(
            [tmp_path / "node_modules" / "a" / "node_modules", tmp_path]
        )

        assert result.matched_folders == (tmp_path / "node_modules",)
        assert result.total_matched_size == 10

    def test_inner_root_first_inside_pruned_folder_matches_nothing_extra(
        self, tmp_path: Path, make_file
    ) -> None:
        """Files under an inner root are not matched when an outer root prunes them."""
        make_file(tmp_path / "node_modules" / "pkg" / "debug.log", 5)

        result = Scanner(_rules(folders=("node_modules",), files=("*.log",))).scan(
            [tmp_path / "node_modules" / "pkg", tmp_path]
        )

        assert result.matched_files == ()
        assert result.matched_folders == (tmp_path / "node_modules",)
        assert result.total_matched_size == 5

    def test_outermost_roots_keeps_order_and_drops_duplicates(self, tmp_path: Path) -> None:
        """Nested and repeated roots are dropped; the rest keep caller order."""
        roots = outermost_roots(
            [tmp_path / "b" / "inner", tmp_path / "b", tmp_path / "a", tmp_path / "b"]
        )

        assert roots == [tmp_path / "b", tmp_path / "a"]

    def test_missing_root_is_skipped(self, tmp_path: Path) -> None:
        """A root that cannot be read contributes nothing."""
        result = Scanner(_rules(files=("*.log",))).scan([tmp_path / "missing"])

        assert result.total_dirs_visited == 0
        assert result.total_files_visited == 0


class TestProgress:
    """Tests for progress reporting."""

    def test_progress_per_node(self, artifact_tree: Path) -> None:
        """One snapshot per visited node, with running counters."""
        snapshots: list[ScanProgress] = []

        result = Scanner(FOLDER_RULES).scan([artifact_tree], on_progress=snapshots.append)

        assert len(snapshots) == result.total_dirs_visited + result.total_files_visited
        assert [s.current_path.name for s in snapshots] == [
            "project",
            "keep.txt",
            "node_modules",
            "target",
        ]
        assert snapshots[-1].matched_size == result.total_matched_size
        assert snapshots[-1].dirs_matched == 2

    def test_repeat_scan_identical(self, artifact_tree: Path) -> None:
        """Scanning an unchanged tree twice gives the same result."""
        scanner = Scanner(FOLDER_RULES)

        assert scanner.scan([artifact_tree]) == scanner.scan([artifact_tree])

    def test_module_level_scan(self, artifact_tree: Path) -> None:
        """The functional shortcut matches the class API."""
        assert scan([artifact_tree], FOLDER_RULES) == Scanner(FOLDER_RULES).scan([artifact_tree])
