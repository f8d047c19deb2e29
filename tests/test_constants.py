"""Tests for core constants module.

Tests for file extensions, commit templates and environment defaults
used throughout the application.
"""


def test_constants_import() -> None:
    """Test that constants module can be imported."""
    from nuch.core import constants

    assert constants is not None


def test_image_extensions() -> None:
    """Test that image extensions are defined."""
    from nuch.core.constants import IMAGE_EXTENSIONS

    for ext in (".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg"):
        assert ext in IMAGE_EXTENSIONS

    # Should be lowercase for case-insensitive matching
    for ext in IMAGE_EXTENSIONS:
        assert ext.startswith(".")
        assert ext == ext.lower()


def test_content_extensions() -> None:
    """Test that content extensions are defined."""
    from nuch.core.constants import CONTENT_EXTENSIONS

    assert ".md" in CONTENT_EXTENSIONS
    assert ".yaml" in CONTENT_EXTENSIONS
    assert ".json" in CONTENT_EXTENSIONS
    assert not set(CONTENT_EXTENSIONS) & {".png", ".jpg"}


def test_commit_templates() -> None:
    """Test commit message templates."""
    from nuch.core.constants import DELETE_COMMIT_TEMPLATE, PUBLISH_COMMIT_TEMPLATE

    assert PUBLISH_COMMIT_TEMPLATE.format(filename="post.md") == "Add post.md to blog"
    assert (
        DELETE_COMMIT_TEMPLATE.format(filename="post.md") == "Remove post.md from blog"
    )


def test_environment_defaults() -> None:
    """Test configuration defaults."""
    from nuch.core.constants import (
        BACKUP_DIR_PREFIX,
        CONFIG_APP_DIR,
        CONFIG_ENV_VAR,
        CONFIG_FILE_NAME,
    )

    assert CONFIG_ENV_VAR == "NUCH_CONFIG"
    assert CONFIG_APP_DIR == "nuch"
    assert CONFIG_FILE_NAME == "config.toml"
    assert BACKUP_DIR_PREFIX == "nuch-delete-"
