"""Reversible single-file staging operations.

These primitives are the building blocks of the publish/delete transaction
engine. Copies never overwrite an existing destination; removals and restores
used for rollback are best-effort and report every failure instead of stopping
at the first one.
"""

import shutil
from collections.abc import Iterable
from pathlib import Path

from nuch.core.constants import BACKUP_DIR_PREFIX
from nuch.core.errors import BackupFailure, DestinationConflict
from nuch.core.models import BackupRecord
from nuch.fs.paths import ensure_dir, make_backup_dir
from nuch.utils.debug import debug


def copy_no_overwrite(src: Path, dest_dir: Path) -> Path:
    """Copy a file into a directory, refusing to overwrite.

    The destination is opened in exclusive-create mode, so a file appearing
    between the existence check and the copy is still reported as a conflict.
    A partially written destination is removed before the error propagates.

    Args:
        src: File to copy
        dest_dir: Directory to copy into (created if missing)

    Returns:
        Path of the new copy (``dest_dir / src.name``)

    Raises:
        DestinationConflict: If the destination already exists
        OSError: If the directory cannot be created or the copy fails
    """
    ensure_dir(dest_dir)
    dest = dest_dir / src.name
    if dest.exists() or dest.is_symlink():
        raise DestinationConflict(dest)

    created = False
    try:
        with src.open("rb") as fsrc:
            try:
                fdst = dest.open("xb")
            except FileExistsError as exc:
                raise DestinationConflict(dest) from exc
            created = True
            with fdst:
                shutil.copyfileobj(fsrc, fdst)
        shutil.copymode(src, dest)
    except OSError:
        if created:
            dest.unlink(missing_ok=True)
        raise

    debug(f"Copied {src} -> {dest}")
    return dest


def remove_all_best_effort(paths: Iterable[Path]) -> list[str]:
    """Remove every existing path, continuing past failures.

    Args:
        paths: Files to remove; missing paths are ignored

    Returns:
        Human-readable descriptions of the removals that failed
    """
    failures: list[str] = []
    for path in paths:
        if not (path.exists() or path.is_symlink()):
            continue
        try:
            path.unlink()
            debug(f"Removed {path}")
        except OSError as e:
            failures.append(f"Failed to remove {path}: {e}")
    return failures


def backup_to_temp(
    paths: Iterable[Path], prefix: str = BACKUP_DIR_PREFIX
) -> tuple[Path, list[BackupRecord]]:
    """Copy files into a fresh temp directory so they can be restored later.

    Paths that do not exist are skipped. If two inputs share a file name the
    later one is stored under an index prefix.

    Args:
        paths: Files to preserve
        prefix: Name prefix for the temp directory

    Returns:
        Tuple of (backup directory, one record per preserved file)

    Raises:
        BackupFailure: If the directory cannot be created or a copy fails;
            any partial backup directory is removed first
    """
    try:
        backup_dir = make_backup_dir(prefix)
    except OSError as e:
        raise BackupFailure(f"Failed to create backup directory: {e}") from e

    records: list[BackupRecord] = []
    for index, original in enumerate(paths):
        if not original.is_file():
            continue
        target = backup_dir / original.name
        if target.exists():
            target = backup_dir / f"{index}-{original.name}"
        try:
            shutil.copy2(original, target)
        except OSError as e:
            cleanup_backup_dir(backup_dir)
            raise BackupFailure(f"Failed to backup {original}: {e}") from e
        records.append(BackupRecord(original_path=original, backup_path=target))
        debug(f"Backed up {original} -> {target}")

    return backup_dir, records


def restore_from_backups(records: Iterable[BackupRecord]) -> list[str]:
    """Copy every surviving backup over its original path.

    Restoration wins over a partial delete: existing originals are overwritten
    and missing parent directories are re-created.

    Args:
        records: Backups produced by :func:`backup_to_temp`

    Returns:
        Descriptions of the restores that failed (empty on full success)
    """
    failures: list[str] = []
    for record in records:
        if not record.backup_path.exists():
            continue
        try:
            ensure_dir(record.original_path.parent)
            shutil.copy2(record.backup_path, record.original_path)
            debug(f"Restored {record.original_path}")
        except OSError as e:
            failures.append(f"Failed to restore {record.original_path}: {e}")
    return failures


def cleanup_backup_dir(directory: Path | None) -> None:
    """Remove a backup directory and everything in it. Never raises."""
    if directory is None or not directory.is_dir():
        return
    shutil.rmtree(directory, ignore_errors=True)
    debug(f"Cleaned up backup directory {directory}")
