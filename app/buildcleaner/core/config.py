"""Rule resolution: project defaults merged with external rules and overrides.

The final rule set is built in three layers:

1. Built-in defaults for the project type detected in the root directory.
2. An optional external RuleConfig (from a rules file or a caller),
   whose rules and exclusions are unioned in and whose options
   override the defaults field by field.
3. CLI-style override patterns, which only ever add rules.
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import TypeVar

from buildcleaner.core.errors import EmptyRuleSetError
from buildcleaner.core.paths import normalize_path
from buildcleaner.models.rules import (
    CleaningRule,
    OptionsSection,
    ProjectType,
    ResolvedConfig,
    RuleConfig,
    ScanOptions,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Marker files checked in order; the first one present decides the type.
PROJECT_MARKERS: tuple[tuple[str, ProjectType], ...] = (
    ("package.json", ProjectType.NODE),
    ("Cargo.toml", ProjectType.RUST),
    ("go.mod", ProjectType.GO),
    ("pom.xml", ProjectType.JAVA),
    ("build.gradle", ProjectType.JAVA),
    ("requirements.txt", ProjectType.PYTHON),
    ("setup.py", ProjectType.PYTHON),
    ("pyproject.toml", ProjectType.PYTHON),
)

# Built-in (folders, files) per project type.
DEFAULT_RULES: dict[ProjectType, tuple[tuple[str, ...], tuple[str, ...]]] = {
    ProjectType.NODE: (("node_modules", "dist", "build", ".next"), ()),
    ProjectType.RUST: (("target",), ()),
    ProjectType.PYTHON: (("__pycache__",), ("*.pyc",)),
    ProjectType.GO: (("vendor", "bin"), ()),
    ProjectType.JAVA: (("target", "build"), ()),
    ProjectType.GENERIC: (("node_modules", "dist", "build", "target"), ()),
}

_SEPARATORS: tuple[str, ...] = tuple({"/", os.sep})


def detect_project_type(root_path: Path) -> ProjectType:
    """Detect the project type from marker files in the root directory.

    Only the immediate children of ``root_path`` are inspected. An
    unreadable or non-directory root yields GENERIC.

    Args:
        root_path: Project root directory.

    Returns:
        Detected ProjectType.
    """
    try:
        names = {entry.name for entry in root_path.iterdir()}
    except OSError as e:
        logger.debug("Cannot list %s for project detection: %s", root_path, e)
        return ProjectType.GENERIC

    for marker, project_type in PROJECT_MARKERS:
        if marker in names:
            return project_type
    return ProjectType.GENERIC


def default_config(project_type: ProjectType) -> ResolvedConfig:
    """Return the built-in configuration for a project type."""
    folders, files = DEFAULT_RULES[project_type]
    return ResolvedConfig(
        rules=CleaningRule(folder_names=frozenset(folders), file_patterns=frozenset(files)),
        exclusions=(),
        options=ScanOptions(),
        project_type=project_type,
    )


def merge_options(base: ScanOptions, overrides: OptionsSection) -> ScanOptions:
    """Override option fields that are set in ``overrides``.

    Args:
        base: Options to start from.
        overrides: External options; None fields keep the base value.

    Returns:
        New ScanOptions with the overrides applied.
    """
    return ScanOptions(
        recursive=_pick(overrides.recursive, base.recursive),
        follow_symlinks=_pick(overrides.follow_symlinks, base.follow_symlinks),
        min_size=_pick(overrides.min_size, base.min_size),
        max_size=_pick(overrides.max_size, base.max_size),
        min_age_days=_pick(overrides.min_age_days, base.min_age_days),
        max_age_days=_pick(overrides.max_age_days, base.max_age_days),
        max_depth=_pick(overrides.max_depth, base.max_depth),
    )


def _pick(override: T | None, default: T) -> T:
    return default if override is None else override


def split_override_patterns(patterns: Sequence[str]) -> tuple[set[str], set[str]]:
    """Split CLI-style patterns into folder and file rules.

    Entries ending in a separator are folder rules (one separator stripped);
    everything else is a file rule. Empty entries are ignored.

    Returns:
        Tuple of (folder names, file patterns).
    """
    folders: set[str] = set()
    files: set[str] = set()
    for pattern in patterns:
        if not pattern:
            continue
        if pattern.endswith(_SEPARATORS):
            folder = pattern[:-1]
            if folder:
                folders.add(folder)
        else:
            files.add(pattern)
    return folders, files


class ConfigResolver:
    """Produces the final rule set for a root directory."""

    def resolve(
        self,
        root_path: Path,
        external_rules: RuleConfig | None = None,
        cli_override_patterns: Sequence[str] = (),
    ) -> ResolvedConfig:
        """Resolve defaults, external rules and overrides into one config.

        Args:
            root_path: Root directory used for project type detection.
            external_rules: Optional validated rule object.
            cli_override_patterns: Additional patterns; ``name/`` adds a
                folder rule, anything else a file rule.

        Returns:
            The merged ResolvedConfig.

        Raises:
            EmptyRuleSetError: If no folder or file rule remains.
        """
        project_type = detect_project_type(root_path)
        base = default_config(project_type)
        logger.debug("Detected project type %s for %s", project_type.value, root_path)

        folders = set(base.rules.folder_names)
        files = set(base.rules.file_patterns)
        exclusions: list[Path] = list(base.exclusions)
        options = base.options

        if external_rules is not None:
            folders.update(external_rules.clean.folders)
            files.update(external_rules.clean.files)
            for entry in external_rules.exclude:
                excluded = normalize_path(entry)
                if excluded not in exclusions:
                    exclusions.append(excluded)
            options = merge_options(options, external_rules.options)

        override_folders, override_files = split_override_patterns(cli_override_patterns)
        folders.update(override_folders)
        files.update(override_files)

        rules = CleaningRule(folder_names=frozenset(folders), file_patterns=frozenset(files))
        if rules.is_empty:
            raise EmptyRuleSetError()

        return ResolvedConfig(
            rules=rules,
            exclusions=tuple(exclusions),
            options=options,
            project_type=project_type,
        )


def resolve(
    root_path: Path,
    external_rules: RuleConfig | None = None,
    cli_override_patterns: Sequence[str] = (),
) -> ResolvedConfig:
    """Module-level shortcut for :meth:`ConfigResolver.resolve`."""
    return ConfigResolver().resolve(root_path, external_rules, cli_override_patterns)
