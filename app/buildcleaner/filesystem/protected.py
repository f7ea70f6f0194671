"""Protected filesystem locations that must never be deleted.

Every real deletion goes through :func:`check_safety`. A target is
rejected when its canonical path is a protected root or one of its
ancestors, when it lies inside a system tree, or when its raw path
still escapes upward through ``..`` after normalization.
"""

import fnmatch
import os
from pathlib import Path, PurePath

from buildcleaner.core.errors import SafetyViolationError

# Roots that may not be deleted, nor any of their ancestors.
# Entries starting with ~ are expanded to the user's home directory.
PROTECTED_ROOTS: list[str] = [
    "/",
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/lib",
    "/lib64",
    "/opt",
    "/proc",
    "/root",
    "/sbin",
    "/sys",
    "/usr",
    "/var",
    # macOS
    "/System",
    "/Library",
    "/Applications",
    # User home itself
    "~",
]

# System trees whose contents are never touched (glob-style).
PROTECTED_PATH_PATTERNS: list[str] = [
    "/bin/*",
    "/boot/*",
    "/dev/*",
    "/etc/*",
    "/lib/*",
    "/lib64/*",
    "/proc/*",
    "/sbin/*",
    "/sys/*",
    "/usr/*",
    "/System/*",
]


def _expand(entry: str) -> str:
    home = str(Path.home())
    if entry == "~":
        return home
    return home + entry[1:] if entry.startswith("~/") else entry


def is_protected_path(path: str) -> bool:
    """Check if a canonical path is protected.

    Args:
        path: Absolute, already canonicalized path.

    Returns:
        True if the path equals or is an ancestor of a protected root,
        or matches a protected system tree pattern.
    """
    candidate = PurePath(path)

    for entry in PROTECTED_ROOTS:
        root = PurePath(_expand(entry))
        if candidate == root or root.is_relative_to(candidate):
            return True

    return any(fnmatch.fnmatchcase(path, pattern) for pattern in PROTECTED_PATH_PATTERNS)


def has_parent_traversal(path: str | Path) -> bool:
    """Check if a path still contains ``..`` after lexical normalization."""
    return ".." in PurePath(os.path.normpath(str(path))).parts


def check_safety(path: Path) -> Path:
    """Check that a path may be deleted.

    Args:
        path: Deletion target as recorded in the plan.

    Returns:
        The canonical form of ``path``.

    Raises:
        SafetyViolationError: If the path is protected or contains a
            parent-directory traversal.
    """
    if has_parent_traversal(path):
        raise SafetyViolationError(path, f"Invalid path: contains '..': {path}")

    canonical = path.resolve(strict=False)
    if is_protected_path(str(canonical)):
        raise SafetyViolationError(path, f"Cannot delete protected path: {canonical}")

    return canonical
