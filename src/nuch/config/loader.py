"""Configuration loader for ~/.config/nuch/config.toml.

The loader resolves and validates every directory up front so the engine only
ever receives paths that exist. All problems found are reported together.
"""

import os
from pathlib import Path
from typing import Any

import structlog
import toml  # type: ignore[import-untyped]
from pydantic import ValidationError

from nuch.core.constants import CONFIG_APP_DIR, CONFIG_ENV_VAR, CONFIG_FILE_NAME
from nuch.core.errors import ConfigError
from nuch.core.models import AppConfig, Collection, WorkingArea
from nuch.fs.assets import dir_has_content
from nuch.fs.paths import expand_path

__all__ = [
    "SAMPLE_CONFIG",
    "config_file_path",
    "load_config",
    "parse_config",
    "write_sample_config",
]

logger = structlog.get_logger()

SAMPLE_CONFIG: dict[str, Any] = {
    "working_dir": "Documents/writings",
    "working_images_dir": "Documents/writings/images",
    "collections": [
        {
            "name": "blog",
            "files_dir": "your-site/content/blog",
            "images_dir": "your-site/public/images",
        }
    ],
}


def config_file_path() -> Path:
    """Resolve the config file location.

    Search order:
    1. $NUCH_CONFIG
    2. $XDG_CONFIG_HOME/nuch/config.toml
    3. ~/.config/nuch/config.toml
    """
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    xdg = os.getenv("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / CONFIG_APP_DIR / CONFIG_FILE_NAME


def write_sample_config(path: Path | None = None) -> bool:
    """Write a sample config file unless one already exists.

    Args:
        path: Target path (defaults to :func:`config_file_path`)

    Returns:
        True if a sample was written, False if a config already existed
    """
    path = path or config_file_path()
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        toml.dump(SAMPLE_CONFIG, f)
    return True


def load_config(path: Path | None = None, base: Path | None = None) -> AppConfig:
    """Load, parse and validate the config file.

    Args:
        path: Explicit config path (defaults to :func:`config_file_path`)
        base: Directory relative paths resolve against (default: home)

    Returns:
        AppConfig with resolved, existing directories

    Raises:
        ConfigError: If the file is missing, unparsable or invalid
    """
    path = path or config_file_path()
    if not path.exists():
        raise ConfigError(
            f"Config file not found at {path}. Run 'nuch config' to create one."
        )

    try:
        data = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigError(f"Failed to parse config {path}: {e}") from e

    return parse_config(data, base=base)


def _optional_str(
    table: dict[str, Any], key: str, where: str, errors: list[str]
) -> str | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        errors.append(f"'{key}' in {where} must be a non-empty string.")
        return None
    return value


def _required_str(
    table: dict[str, Any], key: str, where: str, errors: list[str]
) -> str | None:
    if key not in table:
        errors.append(f"'{key}' in {where} is missing.")
        return None
    value = table[key]
    if not isinstance(value, str) or not value.strip():
        errors.append(f"'{key}' in {where} is empty.")
        return None
    return value


def _existing_dir(
    raw: str | None, key: str, base: Path | None, errors: list[str]
) -> Path | None:
    if raw is None:
        return None
    resolved = expand_path(raw, base)
    if not resolved.is_dir():
        errors.append(f"{key} does not exist or is not a directory: {resolved}")
    return resolved


def parse_config(data: dict[str, Any], base: Path | None = None) -> AppConfig:
    """Validate raw TOML data into an AppConfig.

    Args:
        data: Parsed TOML document
        base: Directory relative paths resolve against (default: home)

    Raises:
        ConfigError: Listing every problem found
    """
    errors: list[str] = []

    working_files = _existing_dir(
        _required_str(data, "working_dir", "config", errors), "working_dir", base, errors
    )
    working_images = _existing_dir(
        _optional_str(data, "working_images_dir", "config", errors),
        "working_images_dir",
        base,
        errors,
    )

    raw_collections = data.get("collections", [])
    if not isinstance(raw_collections, list) or not raw_collections:
        errors.append("At least one [[collections]] entry is required.")
        raw_collections = []

    collections: list[dict[str, Any]] = []
    for index, table in enumerate(raw_collections):
        where = f"collections[{index}]"
        if not isinstance(table, dict):
            errors.append(f"{where} must be a table.")
            continue
        name = _required_str(table, "name", where, errors)
        files = _existing_dir(
            _required_str(table, "files_dir", where, errors),
            f"{where}.files_dir",
            base,
            errors,
        )
        images = _existing_dir(
            _optional_str(table, "images_dir", where, errors),
            f"{where}.images_dir",
            base,
            errors,
        )
        collections.append({"name": name, "files": files, "images": images})

    if errors:
        raise ConfigError("; ".join(errors))

    try:
        config = AppConfig(
            working=WorkingArea(files=working_files, images=working_images),
            collections=[Collection(**c) for c in collections],
        )
    except ValidationError as exc:
        messages = [err.get("msg", "") for err in exc.errors()]
        raise ConfigError("; ".join(messages)) from exc

    for directory in (config.working.files, *(c.files for c in config.collections)):
        if not dir_has_content(directory):
            logger.warning("config.no_content", directory=str(directory))

    return config
