"""Interactive selection of a collection and a content file."""

from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from nuch.core.errors import ConfigError
from nuch.core.models import Collection
from nuch.fs.assets import list_content_files

QUIT_CHOICE = "q"


def default_collection(collections: Sequence[Collection]) -> Collection | None:
    """Return the only configured collection, or None when there is a choice."""
    if len(collections) == 1:
        return collections[0]
    return None


def find_collection(collections: Sequence[Collection], name: str) -> Collection:
    """Look up a collection by name.

    Raises:
        ConfigError: If no collection has that name
    """
    for collection in collections:
        if collection.name == name:
            return collection
    known = ", ".join(c.name for c in collections)
    raise ConfigError(f"Unknown collection '{name}'. Configured: {known}")


def prompt_choice(console: Console, title: str, labels: Sequence[str]) -> int | None:
    """Show a numbered list and ask for one entry.

    Returns:
        Zero-based index of the chosen entry, or None if the operator quit
        (``q``, Ctrl-C or end of input)
    """
    console.print(f"[bold]{title}[/bold]")
    for number, label in enumerate(labels, start=1):
        console.print(f"  {number}. {label}", markup=False, highlight=False)

    choices = [str(n) for n in range(1, len(labels) + 1)] + [QUIT_CHOICE]
    try:
        answer = Prompt.ask(
            f"Select 1-{len(labels)} ({QUIT_CHOICE} to quit)",
            choices=choices,
            show_choices=False,
            console=console,
        )
    except (KeyboardInterrupt, EOFError):
        return None
    if answer == QUIT_CHOICE:
        return None
    return int(answer) - 1


def choose_collection(
    collections: Sequence[Collection], console: Console, name: str | None = None
) -> Collection | None:
    """Resolve the collection for this invocation.

    An explicit ``name`` wins; a single configured collection is picked
    automatically; otherwise the operator is asked.
    """
    if name is not None:
        return find_collection(collections, name)

    only = default_collection(collections)
    if only is not None:
        return only

    index = prompt_choice(
        console, "First, select your collection:", [c.name for c in collections]
    )
    return None if index is None else collections[index]


def choose_file(
    directory: Path, console: Console, exclude: Path | None = None
) -> Path | None:
    """Ask the operator to pick a content file from ``directory``.

    Args:
        directory: Directory to list
        console: Console used for the listing and prompt
        exclude: Directory whose existing file names are hidden from the list

    Returns:
        The chosen path, or None if nothing was listed or the operator quit
    """
    files = list_content_files(directory, exclude=exclude)
    if not files:
        console.print("No supported files found.")
        return None

    index = prompt_choice(console, "Select a file:", [p.name for p in files])
    return None if index is None else files[index]
