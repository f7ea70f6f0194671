"""Best-effort disk usage measurement.

Unreadable entries are ignored rather than reported: sizes are used for
reporting and confirmation prompts, never for safety decisions.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def file_size(path: Path) -> int:
    """Return the size of a file (symlinks are not followed), or 0 on error."""
    try:
        return path.lstat().st_size
    except OSError:
        return 0


def directory_size(path: Path, follow_symlinks: bool = False) -> int:
    """Recursively sum the sizes of regular files under a directory.

    Args:
        path: Directory to measure.
        follow_symlinks: Descend into symlinked directories and count
            the targets of symlinked files.

    Returns:
        Total size in bytes; 0 if the directory cannot be read.
    """
    total = 0
    seen: set[tuple[int, int]] = set()
    stack = [path]

    if follow_symlinks:
        try:
            st = path.stat()
            seen.add((st.st_dev, st.st_ino))
        except OSError:
            return 0

    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                children = list(entries)
        except OSError as e:
            logger.debug("Cannot read %s while measuring size: %s", current, e)
            continue

        for entry in children:
            try:
                if entry.is_dir(follow_symlinks=follow_symlinks):
                    if follow_symlinks:
                        st = entry.stat()
                        key = (st.st_dev, st.st_ino)
                        if key in seen:
                            continue
                        seen.add(key)
                    stack.append(Path(entry.path))
                elif entry.is_file(follow_symlinks=follow_symlinks):
                    total += entry.stat(follow_symlinks=follow_symlinks).st_size
            except OSError:
                continue

    return total
