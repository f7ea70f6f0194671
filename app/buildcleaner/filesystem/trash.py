"""Recoverable deletion backends.

The executor never erases data itself; it hands each target to a
RecoverableStorage. The default backend moves paths to the desktop
trash (freedesktop.org Trash on Linux, Finder Trash on macOS, Recycle
Bin on Windows) through send2trash.
"""

import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from send2trash import send2trash

logger = logging.getLogger(__name__)


@runtime_checkable
class RecoverableStorage(Protocol):
    """Capability to move a path somewhere it can be restored from."""

    def move_to_recoverable_storage(self, path: Path) -> None:
        """Move a file or a whole directory tree to recoverable storage.

        Raises:
            OSError: If the path could not be moved. Implementations must
                never return normally without having moved the path.
        """
        ...


class TrashStorage:
    """RecoverableStorage backed by the platform trash via send2trash."""

    def move_to_recoverable_storage(self, path: Path) -> None:
        """Send a path to the trash.

        Args:
            path: File, directory or symlink to move.

        Raises:
            OSError: If send2trash fails, or if the path still exists
                afterwards.
        """
        send2trash(str(path))

        if os.path.lexists(path):
            msg = f"Path still exists after moving to trash: {path}"
            raise OSError(msg)

        logger.debug("Moved to trash: %s", path)
