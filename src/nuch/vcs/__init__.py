"""Version-control integration (git add/commit/push)."""

from nuch.vcs.git_runner import (
    GitRunner,
    VcsResult,
    VersionControlRunner,
    relative_to_root,
    resolve_repo_root,
)

__all__ = [
    "GitRunner",
    "VcsResult",
    "VersionControlRunner",
    "relative_to_root",
    "resolve_repo_root",
]
