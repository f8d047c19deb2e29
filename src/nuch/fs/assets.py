"""Asset matching and content listing.

Media assets travel with a content file when their name starts with the
content file's stem, e.g. ``post.md`` owns ``post.png`` and ``Post-hero.JPG``.
Nothing here touches the filesystem beyond reading directory entries.
"""

from pathlib import Path

from nuch.core.constants import CONTENT_EXTENSIONS, IMAGE_EXTENSIONS


def find_matching_assets(stem: str, directory: Path | None) -> list[Path]:
    """Find media assets in a directory that belong to a content stem.

    Matching is case-insensitive: an entry matches when it is a regular file,
    its lower-cased name starts with the lower-cased stem and ends with a
    recognised image extension. Subdirectories are not searched.

    Args:
        stem: File name without extension of the content file
        directory: Directory to search

    Returns:
        Matching asset paths sorted by name; empty if the directory is
        missing or not a directory
    """
    if directory is None or not directory.is_dir():
        return []

    stem_lower = stem.lower()
    matches: list[Path] = []
    for entry in directory.iterdir():
        if not entry.is_file():
            continue
        name_lower = entry.name.lower()
        if not name_lower.startswith(stem_lower):
            continue
        if name_lower.endswith(IMAGE_EXTENSIONS):
            matches.append(entry)

    return sorted(matches, key=lambda p: p.name)


def is_content_file(path: Path) -> bool:
    """Check whether a path is a regular file Nuxt Content can render."""
    return path.is_file() and path.suffix.lower() in CONTENT_EXTENSIONS


def list_content_files(directory: Path, exclude: Path | None = None) -> list[Path]:
    """List content files in a directory.

    Args:
        directory: Directory to list (not recursive)
        exclude: Optional directory; files whose name already exists there are
            skipped (used to hide drafts that are already published)

    Returns:
        Content file paths sorted by name
    """
    if not directory.is_dir():
        return []

    files = [
        entry
        for entry in directory.iterdir()
        if is_content_file(entry)
        and not (exclude is not None and (exclude / entry.name).exists())
    ]
    return sorted(files, key=lambda p: p.name)


def dir_has_content(directory: Path) -> bool:
    """Return True if the directory holds at least one content file."""
    if not directory.is_dir():
        return False
    return any(is_content_file(entry) for entry in directory.iterdir())
