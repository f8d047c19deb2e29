"""Git add/commit/push runner.

The runner stages exactly the paths touched by one publish/delete, commits
them and pushes. It refuses to run on top of unrelated staged work and, when
a step after staging fails, unstages what it staged. It never touches files
in the working tree; filesystem rollback belongs to the transaction engine.
"""

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import structlog

from nuch.core.constants import CONTENT_DIR_NAME, GIT_TIMEOUT_SECONDS
from nuch.utils.debug import debug


@dataclass
class VcsResult:
    """Outcome of a git sequence.

    Attributes:
        ok: True when add, commit and push all succeeded
        step: Last step attempted (check, staged, add, commit, push, done)
        output: Diagnostic text captured from git on failure
    """

    ok: bool
    step: str
    output: str = ""


class VersionControlRunner(Protocol):
    """Anything that can durably commit a set of paths."""

    def run(self, repo_root: Path, message: str, paths: Sequence[Path]) -> VcsResult:
        ...


def resolve_repo_root(path: Path) -> Path:
    """Infer the site checkout from a collection directory.

    The nearest ancestor (``path`` included) named ``content`` marks the
    content root; its parent is the repository root. Without one, the
    immediate parent of ``path`` is used.

    Examples:
        ``~/site/content/blog`` -> ``~/site``
        ``~/site/posts`` -> ``~``
    """
    for ancestor in (path, *path.parents):
        if ancestor.name == CONTENT_DIR_NAME:
            return ancestor.parent
    return path.parent


def relative_to_root(repo_root: Path, paths: Sequence[Path]) -> list[str]:
    """Translate paths into repository-relative form for git arguments.

    Paths outside ``repo_root`` are passed through unchanged.
    """
    rels: list[str] = []
    for p in paths:
        try:
            rels.append(str(p.relative_to(repo_root)))
        except ValueError:
            rels.append(str(p))
    return rels


class GitRunner:
    """Runs the git add/commit/push sequence through the git executable."""

    def __init__(
        self,
        git: str = "git",
        timeout: float = GIT_TIMEOUT_SECONDS,
        push: bool = True,
        logger: Any = None,
    ) -> None:
        """Initialize git runner.

        Args:
            git: Name or path of the git executable
            timeout: Seconds allowed per git invocation
            push: Whether to push after committing
            logger: Optional structlog logger instance
        """
        self._git = git
        self._timeout = timeout
        self._push = push
        self._logger = logger or structlog.get_logger()

    def _git_cmd(
        self, repo_root: Path, *args: str
    ) -> subprocess.CompletedProcess[str]:
        cmd = [self._git, *args]
        debug(f"git: {' '.join(cmd)} (cwd={repo_root})")
        return subprocess.run(
            cmd,
            cwd=str(repo_root),
            capture_output=True,
            text=True,
            timeout=self._timeout,
            check=False,
        )

    @staticmethod
    def _diagnostic(proc: subprocess.CompletedProcess[str]) -> str:
        return (proc.stderr or "").strip() or (proc.stdout or "").strip()

    def _has_commit(self, repo_root: Path, rev: str) -> bool:
        try:
            proc = self._git_cmd(
                repo_root, "rev-parse", "-q", "--verify", f"{rev}^{{commit}}"
            )
        except (OSError, subprocess.TimeoutExpired):
            return False
        return proc.returncode == 0

    def _cleanup(self, repo_root: Path, event: str, *args: str) -> bool:
        try:
            proc = self._git_cmd(repo_root, *args)
        except (OSError, subprocess.TimeoutExpired) as e:
            self._logger.error(event, repo_root=str(repo_root), error=str(e))
            return False
        if proc.returncode != 0:
            self._logger.error(
                event, repo_root=str(repo_root), error=self._diagnostic(proc)
            )
            return False
        return True

    def _unstage(self, repo_root: Path, rels: list[str]) -> None:
        if self._has_commit(repo_root, "HEAD"):
            self._cleanup(
                repo_root, "git.unstage_failed", "reset", "-q", "HEAD", "--", *rels
            )
            return
        # Unborn branch: there is no HEAD to reset to, so drop the index entries.
        self._cleanup(
            repo_root,
            "git.unstage_failed",
            "rm",
            "-q",
            "--cached",
            "--ignore-unmatch",
            "--",
            *rels,
        )

    def _undo_commit(self, repo_root: Path, rels: list[str]) -> None:
        # The commit never left this machine; drop it and keep the tree.
        if self._has_commit(repo_root, "HEAD~1"):
            self._cleanup(
                repo_root,
                "git.undo_commit_failed",
                "reset",
                "-q",
                "--mixed",
                "HEAD~1",
            )
            return
        # Root commit: delete the branch ref, then empty the index again.
        deleted = self._cleanup(
            repo_root, "git.undo_commit_failed", "update-ref", "-d", "HEAD"
        )
        if deleted:
            self._unstage(repo_root, rels)

    def _fail(self, step: str, output: str, repo_root: Path) -> VcsResult:
        self._logger.warning(
            "git.step_failed", step=step, repo_root=str(repo_root), output=output
        )
        return VcsResult(ok=False, step=step, output=output)

    def run(self, repo_root: Path, message: str, paths: Sequence[Path]) -> VcsResult:
        """Stage ``paths``, commit with ``message`` and push.

        Args:
            repo_root: Working copy root used as the git working directory
            message: Commit message
            paths: Absolute paths affected by the operation (additions or
                removals)

        Returns:
            VcsResult; on failure ``output`` holds git's diagnostic text
        """
        try:
            check = self._git_cmd(repo_root, "rev-parse", "--git-dir")
        except (OSError, subprocess.TimeoutExpired) as e:
            return self._fail("check", f"could not run {self._git}: {e}", repo_root)
        if check.returncode != 0:
            return self._fail(
                "check",
                f"{repo_root} is not a git repository: {self._diagnostic(check)}",
                repo_root,
            )

        try:
            staged = self._git_cmd(repo_root, "diff", "--cached", "--quiet")
        except (OSError, subprocess.TimeoutExpired) as e:
            return self._fail("staged", str(e), repo_root)
        if staged.returncode == 1:
            return self._fail(
                "staged",
                f"repository {repo_root} has pre-existing staged changes; "
                "commit or reset them before running nuch",
                repo_root,
            )
        if staged.returncode != 0:
            return self._fail("staged", self._diagnostic(staged), repo_root)

        rels = relative_to_root(repo_root, paths)
        steps: list[tuple[str, list[str]]] = [
            ("add", ["add", "-A", "--", *rels]),
            ("commit", ["commit", "-m", message]),
        ]
        if self._push:
            steps.append(("push", ["push"]))

        for step, args in steps:
            try:
                proc = self._git_cmd(repo_root, *args)
            except (OSError, subprocess.TimeoutExpired) as e:
                output = str(e)
            else:
                if proc.returncode == 0:
                    continue
                output = self._diagnostic(proc)
            if step == "push":
                self._undo_commit(repo_root, rels)
            else:
                self._unstage(repo_root, rels)
            return self._fail(step, output, repo_root)

        self._logger.info(
            "git.committed", repo_root=str(repo_root), message=message, paths=rels
        )
        return VcsResult(ok=True, step="done")
