"""Path utilities for staging operations.

This module provides path expansion and directory helpers shared by the
staging primitives and the config loader.
"""

import os
import tempfile
import time
from pathlib import Path


def expand_path(path: str | Path, base: Path | None = None) -> Path:
    """Expand a configured path into an absolute path.

    ``~`` is expanded; relative paths are resolved against ``base``
    (the home directory by default).

    Args:
        path: Path as written in configuration
        base: Directory relative paths are anchored to

    Returns:
        Absolute path (not required to exist)
    """
    expanded = Path(os.path.expandvars(str(path))).expanduser()
    if expanded.is_absolute():
        return expanded
    if base is None:
        base = Path.home()
    return base / expanded


def ensure_dir(path: Path) -> None:
    """Ensure a directory exists.

    Raises:
        OSError: If the directory cannot be created
    """
    path.mkdir(parents=True, exist_ok=True)


def make_backup_dir(prefix: str) -> Path:
    """Create a fresh, uniquely named backup directory under the temp root.

    The millisecond timestamp keeps directories ordered for manual recovery;
    ``mkdtemp`` guarantees uniqueness across concurrent invocations.

    Args:
        prefix: Directory name prefix, e.g. ``nuch-delete-``

    Returns:
        Path to the newly created, empty directory
    """
    stamp = int(time.time() * 1000)
    return Path(tempfile.mkdtemp(prefix=f"{prefix}{stamp}-"))

