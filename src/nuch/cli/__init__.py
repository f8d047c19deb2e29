"""CLI entrypoints for nuch."""

from nuch.cli.app import app, run_cli

__all__ = ["app", "run_cli"]
