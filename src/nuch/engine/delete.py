"""Delete workflow: retract a published file and its images from a collection.

Before anything is removed, the whole deletion set is copied into a private
temp directory. Removal failures and git failures restore every file from
there byte-for-byte. Optionally the operator can first keep a permanent copy
in the working area; that copy is independent of the rollback backups and is
kept even when the deletion is declined.
"""

from pathlib import Path
from typing import Any

from rich.console import Console

from nuch.core.constants import DELETE_COMMIT_TEMPLATE
from nuch.core.errors import (
    AssetConflict,
    AssetCopyFailure,
    CopyFailure,
    DestinationConflict,
    InvalidSelection,
    RemovalFailure,
    VersionControlFailure,
)
from nuch.core.models import (
    Collection,
    SelectedItem,
    TransactionOutcome,
    WorkingArea,
)
from nuch.engine.base import EngineBase, coerce_selection
from nuch.engine.confirm import Confirmer
from nuch.fs.assets import find_matching_assets
from nuch.fs.staging import backup_to_temp, cleanup_backup_dir
from nuch.fs.transaction import Transaction
from nuch.vcs.git_runner import VersionControlRunner, resolve_repo_root

DELETE_PROMPT = "Proceed with deletion and git steps?"
WORKING_BACKUP_PROMPT = "'{filename}' not found in working dir. Create backup in working dir?"


class DeleteEngine(EngineBase):
    """Removes a published file (and its images) and commits the removal."""

    def delete(
        self,
        selected: SelectedItem | Path,
        collection: Collection,
        working: WorkingArea,
    ) -> TransactionOutcome:
        """Delete a published file and its matching images from a collection.

        Args:
            selected: Content file inside ``collection.files``
            collection: Collection the file is published in
            working: Working area used for the optional safety copy

        Returns:
            TransactionOutcome with status ``deleted`` or ``aborted``

        Raises:
            InvalidSelection: The file is not inside the collection
            DestinationConflict / AssetConflict: The working-area backup
                would overwrite an existing file (that step is rolled back)
            CopyFailure / AssetCopyFailure: The working-area backup failed
            BackupFailure: The temp rollback backup could not be taken
            RemovalFailure: A file could not be removed (all restored)
            VersionControlFailure: git add/commit/push failed (all restored)
        """
        item = coerce_selection(selected)
        filename = item.filename
        log = self._logger.bind(
            action="delete", filename=filename, collection=collection.name
        )

        if item.path.resolve().parent != collection.files.resolve():
            raise InvalidSelection(
                f"{item.path} is not in collection '{collection.name}' "
                f"({collection.files})"
            )

        working_backups = self._backup_to_working(item, collection, working, log)

        deletion_set = [item.path, *find_matching_assets(item.stem, collection.images)]
        backup_dir, records = backup_to_temp(deletion_set)
        log.info(
            "delete.backed_up",
            backup_dir=str(backup_dir),
            paths=[str(p) for p in deletion_set],
        )

        self._show_paths("About to delete the following files:", deletion_set)
        self._ui.print(f"Backups created at: {backup_dir}", markup=False)

        if not self._confirm(DELETE_PROMPT):
            cleanup_backup_dir(backup_dir)
            log.info("delete.aborted", working_backups=[str(p) for p in working_backups])
            self._ui.print("Aborted by user; nothing was deleted.")
            return TransactionOutcome(
                action="delete",
                status="aborted",
                filename=filename,
                paths=deletion_set,
                working_backups=working_backups,
            )

        txn = Transaction("delete", logger=log)
        txn.record_backups(records)
        try:
            with txn:
                self._remove_all(deletion_set, log)
                repo_root = resolve_repo_root(collection.files)
                result = self._runner.run(
                    repo_root,
                    DELETE_COMMIT_TEMPLATE.format(filename=filename),
                    deletion_set,
                )
                if not result.ok:
                    raise VersionControlFailure(result.step, result.output)
                txn.commit()
        except BaseException:
            if txn.rollback_failures:
                # Restoration is incomplete; the backups are the only copy left.
                log.error(
                    "delete.restore_incomplete",
                    backup_dir=str(backup_dir),
                    failures=txn.rollback_failures,
                )
                self._ui.print(f"Backups kept at {backup_dir}", markup=False)
            else:
                cleanup_backup_dir(backup_dir)
            raise

        cleanup_backup_dir(backup_dir)
        log.info("delete.completed", repo_root=str(repo_root))
        self._ui.print(f"[green]Deleted {filename} and corresponding images[/green]")
        return TransactionOutcome(
            action="delete",
            status="deleted",
            filename=filename,
            paths=deletion_set,
            working_backups=working_backups,
        )

    def _remove_all(self, paths: list[Path], log: Any) -> None:
        for path in paths:
            if not path.exists():
                continue
            try:
                path.unlink()
            except OSError as e:
                log.warning("delete.removal_failed", path=str(path), error=str(e))
                raise RemovalFailure(path, str(e)) from e

    def _backup_to_working(
        self,
        item: SelectedItem,
        collection: Collection,
        working: WorkingArea,
        log: Any,
    ) -> list[Path]:
        """Optionally copy the file and its images back into the working area."""
        if (working.files / item.filename).exists():
            self._ui.print("File exists in working dir; skipping backup.")
            return []

        if not self._confirm(WORKING_BACKUP_PROMPT.format(filename=item.filename)):
            self._ui.print("Proceeding without backup.")
            return []

        with Transaction("working-backup", logger=log) as txn:
            try:
                txn.copy(item.path, working.files)
            except OSError as e:
                raise CopyFailure(item.path, working.files, str(e)) from e

            if collection.images is not None and working.images is not None:
                for asset in find_matching_assets(item.stem, collection.images):
                    try:
                        txn.copy(asset, working.images)
                    except DestinationConflict as exc:
                        raise AssetConflict(exc.path) from exc
                    except OSError as e:
                        raise AssetCopyFailure(asset, working.images, str(e)) from e

            copied = txn.created_paths
            txn.commit()

        log.info("delete.working_backup", paths=[str(p) for p in copied])
        self._ui.print(f"Backup created in {working.files}", markup=False)
        return copied


def delete(
    selected: SelectedItem | Path,
    collection: Collection,
    working: WorkingArea,
    *,
    runner: VersionControlRunner | None = None,
    confirm: Confirmer | None = None,
    logger: Any = None,
    ui: Console | None = None,
) -> TransactionOutcome:
    """Delete ``selected`` from ``collection``; see :meth:`DeleteEngine.delete`."""
    engine = DeleteEngine(runner=runner, confirm=confirm, logger=logger, ui=ui)
    return engine.delete(selected, collection, working)
