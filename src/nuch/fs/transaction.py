"""In-memory transaction journal shared by the publish and delete workflows.

A Transaction records every filesystem mutation as a ``(path, kind)`` entry:

- ``created``: a file this transaction created; rollback removes it
- ``backup``: a file preserved before deletion; rollback restores it

Both workflows compensate through the single :meth:`Transaction.rollback`
operation, so bookkeeping cannot drift between them.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import structlog

from nuch.core.errors import NuchError
from nuch.core.models import BackupRecord, StagedFile
from nuch.fs.staging import (
    copy_no_overwrite,
    remove_all_best_effort,
    restore_from_backups,
)

EntryKind = Literal["created", "backup"]


@dataclass
class JournalEntry:
    """A single journalled mutation."""

    path: Path
    kind: EntryKind
    source: Path | None = None
    backup: BackupRecord | None = None


class Transaction:
    """Journal of filesystem mutations with one compensating rollback.

    Example:
        >>> txn = Transaction("publish")
        >>> txn.copy(draft, collection.files)
        >>> failures = txn.rollback()  # removes the copy again
    """

    def __init__(self, label: str, logger: Any = None) -> None:
        self.label = label
        self._entries: list[JournalEntry] = []
        self.rollback_failures: list[str] = []
        self._logger = logger or structlog.get_logger()

    def copy(self, src: Path, dest_dir: Path) -> Path:
        """Copy ``src`` into ``dest_dir`` without overwriting and journal it.

        Raises:
            DestinationConflict: If the destination already exists
            OSError: If the copy fails (nothing is journalled)
        """
        dest = copy_no_overwrite(src, dest_dir)
        self._entries.append(JournalEntry(path=dest, kind="created", source=src))
        return dest

    def record_created(self, path: Path, source: Path | None = None) -> None:
        self._entries.append(JournalEntry(path=path, kind="created", source=source))

    def record_backups(self, records: list[BackupRecord]) -> None:
        for record in records:
            self._entries.append(
                JournalEntry(path=record.original_path, kind="backup", backup=record)
            )

    @property
    def created_paths(self) -> list[Path]:
        return [e.path for e in self._entries if e.kind == "created"]

    @property
    def staged(self) -> list[StagedFile]:
        return [
            StagedFile(source_path=e.source, dest_path=e.path)
            for e in self._entries
            if e.kind == "created" and e.source is not None
        ]

    @property
    def backups(self) -> list[BackupRecord]:
        return [e.backup for e in self._entries if e.backup is not None]

    def __len__(self) -> int:
        return len(self._entries)

    def rollback(self) -> list[str]:
        """Undo every journalled mutation, best-effort.

        Created files are removed newest first, then backups are restored.
        Every step is attempted even if earlier ones fail.

        Returns:
            Descriptions of the compensating actions that failed
        """
        created = list(reversed(self.created_paths))
        backups = self.backups

        failures = remove_all_best_effort(created)
        failures.extend(restore_from_backups(backups))

        log = self._logger.warning if failures else self._logger.info
        log(
            "transaction.rollback",
            transaction=self.label,
            removed=len(created),
            restored=len(backups),
            failures=failures,
        )
        self._entries.clear()
        self.rollback_failures = failures
        return failures

    def commit(self) -> None:
        """Forget the journal once the change has landed."""
        self._entries.clear()

    def __enter__(self) -> "Transaction":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Roll back on any exception, appending compensation failures."""
        if exc_val is None or not self._entries:
            return
        failures = self.rollback()
        if isinstance(exc_val, NuchError):
            exc_val.add_rollback_failures(failures)
