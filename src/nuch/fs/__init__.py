"""Filesystem operations for staging, backup and rollback.

This module provides the primitives the transaction engine is built from:
asset matching, no-overwrite copies, temp backups with restore, and the
Transaction journal that compensates a failed workflow.
"""

from nuch.fs.assets import (
    dir_has_content,
    find_matching_assets,
    list_content_files,
)
from nuch.fs.staging import (
    backup_to_temp,
    cleanup_backup_dir,
    copy_no_overwrite,
    remove_all_best_effort,
    restore_from_backups,
)
from nuch.fs.transaction import Transaction

__all__ = [
    "Transaction",
    "backup_to_temp",
    "cleanup_backup_dir",
    "copy_no_overwrite",
    "dir_has_content",
    "find_matching_assets",
    "list_content_files",
    "remove_all_best_effort",
    "restore_from_backups",
]
