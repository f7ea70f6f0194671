"""Path helpers and XDG-compliant locations for buildcleaner.

XDG defaults:
- Config: ~/.config/buildcleaner/
"""

import os
from collections.abc import Iterable
from pathlib import Path

from buildcleaner.core.errors import PathNotFoundError, PermissionDeniedError

# Application identifier for directory naming
APP_NAME = "buildcleaner"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/buildcleaner/ (or XDG_CONFIG_HOME/buildcleaner/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_rules_path() -> Path:
    """Get the default rules file path.

    Returns:
        Path to ~/.config/buildcleaner/rules.toml.
    """
    return get_config_dir() / "rules.toml"


def expand_path(path: str | Path) -> Path:
    """Expand ``~`` and ``~/...`` to the user's home directory.

    Other ``~user`` forms and plain paths are returned unchanged.
    """
    raw = str(path)
    if raw == "~":
        return Path.home()
    if raw.startswith(("~/", "~" + os.sep)):
        return Path.home() / raw[2:]
    return Path(raw)


def normalize_path(path: str | Path) -> Path:
    """Expand ``~`` and return an absolute, lexically normalized path.

    Symlinks are not resolved; exclusion and pruning decisions are made
    on the path as walked.
    """
    return Path(os.path.normpath(os.path.abspath(expand_path(path))))


def is_within(path: Path, prefixes: Iterable[Path]) -> bool:
    """Check whether ``path`` equals or is nested under any prefix.

    Both sides are expected to be normalized already.
    """
    return any(path.is_relative_to(prefix) for prefix in prefixes)


def validate_root(path: str | Path) -> Path:
    """Expand and validate a root path.

    Args:
        path: Root path, possibly starting with ``~``.

    Returns:
        The normalized path.

    Raises:
        PathNotFoundError: If the path does not exist or is neither a
            file nor a directory.
        PermissionDeniedError: If the path exists but cannot be read.
    """
    normalized = normalize_path(path)
    if not normalized.is_dir() and not normalized.is_file():
        raise PathNotFoundError(normalized)
    if not os.access(normalized, os.R_OK):
        raise PermissionDeniedError(normalized)
    return normalized


def prepare_roots(paths: Iterable[str | Path]) -> list[Path]:
    """Validate root paths, dropping duplicates while keeping order.

    Raises:
        PathNotFoundError: On the first path that does not exist.
        PermissionDeniedError: On the first path that cannot be read.
    """
    roots: list[Path] = []
    for path in paths:
        root = validate_root(path)
        if root not in roots:
            roots.append(root)
    return roots
