"""Tests for config discovery, sample generation and validation."""

from pathlib import Path

import pytest
import toml
from structlog.testing import capture_logs

from nuch.config.loader import (
    SAMPLE_CONFIG,
    config_file_path,
    load_config,
    parse_config,
    write_sample_config,
)
from nuch.core.errors import ConfigError


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Directory tree the relative config paths resolve against."""
    for rel in ("writings/images", "site/content/blog", "site/public/images"):
        (tmp_path / rel).mkdir(parents=True)
    (tmp_path / "writings" / "draft.md").write_text("draft")
    (tmp_path / "site" / "content" / "blog" / "live.md").write_text("live")
    return tmp_path


def _data(**overrides: object) -> dict:
    data: dict = {
        "working_dir": "writings",
        "working_images_dir": "writings/images",
        "collections": [
            {
                "name": "blog",
                "files_dir": "site/content/blog",
                "images_dir": "site/public/images",
            }
        ],
    }
    data.update(overrides)
    return data


class TestConfigFilePath:
    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("NUCH_CONFIG", str(tmp_path / "custom.toml"))

        assert config_file_path() == tmp_path / "custom.toml"

    def test_xdg_config_home(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.delenv("NUCH_CONFIG", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert config_file_path() == tmp_path / "nuch" / "config.toml"

    def test_defaults_to_home_config(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.delenv("NUCH_CONFIG", raising=False)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        assert config_file_path() == tmp_path / ".config" / "nuch" / "config.toml"


class TestSampleConfig:
    def test_writes_sample_once(self, tmp_path: Path) -> None:
        path = tmp_path / "nuch" / "config.toml"

        assert write_sample_config(path) is True
        assert toml.load(path) == SAMPLE_CONFIG

        path.write_text("working_dir = 'mine'\n")
        assert write_sample_config(path) is False
        assert path.read_text() == "working_dir = 'mine'\n"


class TestParseConfig:
    def test_resolves_relative_paths(self, home: Path) -> None:
        config = parse_config(_data(), base=home)

        assert config.working.files == home / "writings"
        assert config.working.images == home / "writings" / "images"
        assert len(config.collections) == 1
        blog = config.collections[0]
        assert blog.name == "blog"
        assert blog.files == home / "site" / "content" / "blog"
        assert blog.images == home / "site" / "public" / "images"

    def test_absolute_paths_are_kept(self, home: Path) -> None:
        config = parse_config(
            _data(
                working_dir=str(home / "writings"),
                working_images_dir=None,
                collections=[
                    {"name": "blog", "files_dir": str(home / "site/content/blog")}
                ],
            ),
            base=Path("/nonexistent"),
        )

        assert config.working.files == home / "writings"
        assert config.working.images is None

    def test_image_directories_are_optional(self, home: Path) -> None:
        data = _data(collections=[{"name": "blog", "files_dir": "site/content/blog"}])
        del data["working_images_dir"]

        config = parse_config(data, base=home)

        assert config.working.images is None
        assert config.collections[0].images is None

    def test_reports_every_problem(self, home: Path) -> None:
        data = _data(
            working_dir="missing",
            collections=[
                {"files_dir": "site/content/blog"},
                {"name": "docs", "files_dir": "site/content/docs"},
                "not-a-table",
            ],
        )

        with pytest.raises(ConfigError) as exc_info:
            parse_config(data, base=home)

        message = str(exc_info.value)
        missing = home / "missing"
        assert f"working_dir does not exist or is not a directory: {missing}" in message
        assert "'name' in collections[0] is missing." in message
        assert "collections[1].files_dir does not exist" in message
        assert "collections[2] must be a table." in message

    def test_requires_a_collection(self, home: Path) -> None:
        with pytest.raises(ConfigError, match=r"At least one \[\[collections\]\]"):
            parse_config(_data(collections=[]), base=home)

    def test_empty_values_are_rejected(self, home: Path) -> None:
        with pytest.raises(ConfigError, match="'working_dir' in config is empty."):
            parse_config(_data(working_dir="  "), base=home)

    def test_duplicate_collection_names(self, home: Path) -> None:
        entry = {"name": "blog", "files_dir": "site/content/blog"}

        with pytest.raises(ConfigError, match="duplicate collection name: blog"):
            parse_config(_data(collections=[entry, entry]), base=home)

    def test_warns_about_empty_content_directory(self, home: Path) -> None:
        (home / "writings" / "draft.md").unlink()

        with capture_logs() as logs:
            config = parse_config(_data(), base=home)

        assert config.working.files == home / "writings"
        assert logs == [
            {
                "event": "config.no_content",
                "directory": str(home / "writings"),
                "log_level": "warning",
            }
        ]


class TestLoadConfig:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Run 'nuch config' to create one"):
            load_config(tmp_path / "absent.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("working_dir = \n")

        with pytest.raises(ConfigError, match="Failed to parse config"):
            load_config(path)

    def test_loads_file(self, home: Path) -> None:
        path = home / "config.toml"
        with path.open("w", encoding="utf-8") as f:
            toml.dump(_data(), f)

        config = load_config(path, base=home)

        assert [c.name for c in config.collections] == ["blog"]
