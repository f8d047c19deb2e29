"""Confirmation boundary for the transaction engine.

The engine never talks to the terminal directly; it receives a ``Confirmer``
(``prompt -> bool``). Declining, or cancelling the prompt with Ctrl-C/EOF,
takes the engine's abort path.
"""

from collections.abc import Callable

import typer

Confirmer = Callable[[str], bool]


def terminal_confirm(prompt: str) -> bool:
    """Ask a yes/no question on the terminal (default: yes)."""
    try:
        return bool(typer.confirm(prompt, default=True))
    except typer.Abort:
        return False


def auto_confirm(answer: bool = True) -> Confirmer:
    """Build a confirmer that always gives the same answer."""

    def _confirm(prompt: str) -> bool:
        return answer

    return _confirm
