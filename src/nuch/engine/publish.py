"""Publish workflow: promote a draft and its images into a collection.

The workflow is atomic in effect. Either the content file, its matching
images and the git commit all land, or every file copied along the way is
removed again and the error (with any rollback failures appended) surfaces.
"""

from pathlib import Path
from typing import Any

from rich.console import Console

from nuch.core.constants import PUBLISH_COMMIT_TEMPLATE
from nuch.core.errors import (
    AssetConflict,
    AssetCopyFailure,
    CopyFailure,
    DestinationConflict,
    RollbackFailure,
    VersionControlFailure,
)
from nuch.core.models import Collection, SelectedItem, TransactionOutcome
from nuch.engine.base import EngineBase, coerce_selection
from nuch.engine.confirm import Confirmer
from nuch.fs.assets import find_matching_assets
from nuch.fs.transaction import Transaction
from nuch.vcs.git_runner import VersionControlRunner, resolve_repo_root

PUBLISH_PROMPT = "Proceed to run git add/commit/push?"


class PublishEngine(EngineBase):
    """Copies a selected draft into a collection and commits it."""

    def publish(
        self,
        selected: SelectedItem | Path,
        collection: Collection,
        working_images: Path | None = None,
    ) -> TransactionOutcome:
        """Publish a draft (plus matching images) into a collection.

        Args:
            selected: Draft content file in the working area
            collection: Destination collection
            working_images: Working-area images directory, if configured

        Returns:
            TransactionOutcome with status ``published`` or ``aborted``

        Raises:
            DestinationConflict: The content file already exists in the
                collection (nothing was written)
            AssetConflict: An image already exists at its destination
            CopyFailure / AssetCopyFailure: A copy failed with an I/O error
            RollbackFailure: The operator declined but the copies could not
                all be removed
            VersionControlFailure: git add/commit/push failed
        """
        item = coerce_selection(selected)
        filename = item.filename
        log = self._logger.bind(
            action="publish", filename=filename, collection=collection.name
        )

        dest_md = collection.files / filename
        if dest_md.exists():
            log.warning("publish.conflict", path=str(dest_md))
            raise DestinationConflict(dest_md)

        with Transaction("publish", logger=log) as txn:
            try:
                txn.copy(item.path, collection.files)
            except OSError as e:
                raise CopyFailure(item.path, collection.files, str(e)) from e

            if working_images is not None and collection.images is not None:
                self._stage_assets(txn, item.stem, working_images, collection.images)

            staged = txn.created_paths
            log.info(
                "publish.staged",
                files=[f.model_dump(mode="json") for f in txn.staged],
            )
            self._show_paths("About to commit the following files:", staged)

            if not self._confirm(PUBLISH_PROMPT):
                failures = txn.rollback()
                if failures:
                    raise RollbackFailure("Aborted by user", failures)
                log.info("publish.aborted")
                self._ui.print("Aborted by user; rolled back created files.")
                return TransactionOutcome(
                    action="publish", status="aborted", filename=filename, paths=staged
                )

            repo_root = resolve_repo_root(collection.files)
            result = self._runner.run(
                repo_root, PUBLISH_COMMIT_TEMPLATE.format(filename=filename), staged
            )
            if not result.ok:
                raise VersionControlFailure(result.step, result.output)
            txn.commit()

        log.info("publish.completed", repo_root=str(repo_root))
        self._ui.print(f"[green]Published {filename} successfully[/green]")
        return TransactionOutcome(
            action="publish", status="published", filename=filename, paths=staged
        )

    def _stage_assets(
        self, txn: Transaction, stem: str, source_dir: Path, dest_dir: Path
    ) -> None:
        for asset in find_matching_assets(stem, source_dir):
            try:
                txn.copy(asset, dest_dir)
            except DestinationConflict as exc:
                raise AssetConflict(exc.path) from exc
            except OSError as e:
                raise AssetCopyFailure(asset, dest_dir, str(e)) from e


def publish(
    selected: SelectedItem | Path,
    collection: Collection,
    working_images: Path | None = None,
    *,
    runner: VersionControlRunner | None = None,
    confirm: Confirmer | None = None,
    logger: Any = None,
    ui: Console | None = None,
) -> TransactionOutcome:
    """Publish ``selected`` into ``collection``; see :meth:`PublishEngine.publish`."""
    engine = PublishEngine(runner=runner, confirm=confirm, logger=logger, ui=ui)
    return engine.publish(selected, collection, working_images)
