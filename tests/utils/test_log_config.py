"""Tests for structlog configuration."""

import structlog

from nuch.utils.log_config import configure_logging


def test_quiet_by_default_writes_warnings_to_stderr(capsys) -> None:
    configure_logging()
    log = structlog.get_logger()

    log.info("publish.staged", files=[])
    log.warning("publish.conflict", path="/site/content/blog/post.md")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "publish.staged" not in captured.err
    assert "publish.conflict" in captured.err
    assert "path=/site/content/blog/post.md" in captured.err


def test_verbose_emits_debug_events(capsys) -> None:
    configure_logging(verbose=True)

    structlog.get_logger().debug("git.command", step="add")

    assert "git.command" in capsys.readouterr().err
