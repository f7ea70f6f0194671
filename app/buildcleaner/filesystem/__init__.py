"""Filesystem safety and deletion backends.

This module provides the protected path list and safety check, the
recoverable deletion capability, and best-effort size measurement.
"""

from buildcleaner.filesystem.protected import (
    PROTECTED_PATH_PATTERNS,
    PROTECTED_ROOTS,
    check_safety,
    has_parent_traversal,
    is_protected_path,
)
from buildcleaner.filesystem.trash import RecoverableStorage, TrashStorage
from buildcleaner.filesystem.usage import directory_size, file_size

__all__ = [
    "PROTECTED_PATH_PATTERNS",
    "PROTECTED_ROOTS",
    "RecoverableStorage",
    "TrashStorage",
    "check_safety",
    "directory_size",
    "file_size",
    "has_parent_traversal",
    "is_protected_path",
]
