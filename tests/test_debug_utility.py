"""Tests for the debug utility module.

The debug utility provides a single entrypoint for low-level tracing that can
be toggled via the NUCH_DEBUG environment variable.
"""

import importlib
from collections.abc import Callable, Iterator
from io import StringIO
from unittest.mock import patch

import pytest

from nuch.utils import debug as debug_module


@pytest.fixture
def load_debug(
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[Callable[[str], Callable[[object], None]]]:
    """Reload the debug module under a given NUCH_DEBUG value."""

    def _load(value: str) -> Callable[[object], None]:
        monkeypatch.setenv("NUCH_DEBUG", value)
        importlib.reload(debug_module)
        return debug_module.debug

    yield _load

    monkeypatch.delenv("NUCH_DEBUG", raising=False)
    importlib.reload(debug_module)


def test_debug_import() -> None:
    """Test that debug utility can be imported."""
    from nuch.utils.debug import debug

    assert callable(debug)


@pytest.mark.parametrize("value", ["1", "true", "True", "YES"])
def test_debug_enabled_for_truthy_values(load_debug, value: str) -> None:
    """Test that debug output is written to stderr when enabled."""
    debug = load_debug(value)

    with patch("sys.stderr", new=StringIO()) as fake_stderr:
        debug(f"Testing {value}")
        output = fake_stderr.getvalue()

    assert output == f"[DEBUG] Testing {value}\n"


@pytest.mark.parametrize("value", ["0", "false", "no", ""])
def test_debug_disabled_for_falsy_values(load_debug, value: str) -> None:
    """Test that debug is silent for falsy env var values."""
    debug = load_debug(value)

    with patch("sys.stderr", new=StringIO()) as fake_stderr:
        debug(f"Testing {value}")
        output = fake_stderr.getvalue()

    assert output == ""


def test_debug_multiple_messages(load_debug) -> None:
    """Test that multiple debug calls work correctly."""
    debug = load_debug("1")

    with patch("sys.stderr", new=StringIO()) as fake_stderr:
        debug("First message")
        debug("Second message")
        output = fake_stderr.getvalue()

    assert output.count("[DEBUG]") == 2
    assert "Second message" in output


def test_staging_steps_are_traced(load_debug, tmp_path) -> None:
    """Test that filesystem primitives emit debug traces when enabled."""
    from nuch.fs.staging import copy_no_overwrite

    load_debug("1")
    src = tmp_path / "post.md"
    src.write_text("x")

    with patch("sys.stderr", new=StringIO()) as fake_stderr:
        copy_no_overwrite(src, tmp_path / "out")

    assert f"Copied {src} -> {tmp_path / 'out' / 'post.md'}" in fake_stderr.getvalue()
