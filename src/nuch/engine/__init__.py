"""Publish/delete transaction engine."""

from nuch.engine.confirm import Confirmer, auto_confirm, terminal_confirm
from nuch.engine.delete import DeleteEngine, delete
from nuch.engine.publish import PublishEngine, publish

__all__ = [
    "Confirmer",
    "DeleteEngine",
    "PublishEngine",
    "auto_confirm",
    "delete",
    "publish",
    "terminal_confirm",
]
