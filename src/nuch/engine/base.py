"""Shared plumbing for the publish and delete engines."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError
from rich.console import Console

from nuch.core.errors import InvalidSelection
from nuch.core.models import SelectedItem
from nuch.engine.confirm import Confirmer, terminal_confirm
from nuch.vcs.git_runner import GitRunner, VersionControlRunner


def coerce_selection(selected: SelectedItem | Path | str) -> SelectedItem:
    """Accept a SelectedItem or a bare path, validating the latter.

    Raises:
        InvalidSelection: If the path is missing, not a file, or has no stem
    """
    if isinstance(selected, SelectedItem):
        return selected
    try:
        return SelectedItem(path=Path(selected))
    except ValidationError as exc:
        reason = exc.errors()[0].get("msg", str(exc))
        raise InvalidSelection(f"Cannot use {selected}: {reason}") from exc


class EngineBase:
    """Holds the collaborators every workflow needs.

    Args:
        runner: Version-control runner (defaults to :class:`GitRunner`)
        confirm: Confirmation boundary (defaults to a terminal prompt)
        logger: Optional structlog logger instance
        ui: Optional Rich console for operator output
    """

    def __init__(
        self,
        runner: VersionControlRunner | None = None,
        confirm: Confirmer | None = None,
        logger: Any = None,
        ui: Console | None = None,
    ) -> None:
        self._runner = runner or GitRunner()
        self._confirm = confirm or terminal_confirm
        self._logger = logger or structlog.get_logger()
        self._ui = ui or Console()

    def _show_paths(self, heading: str, paths: Sequence[Path]) -> None:
        self._ui.print(f"[bold]{heading}[/bold]")
        for path in paths:
            self._ui.print(f"  {path}", markup=False, highlight=False)
