"""Pytest configuration and fixtures for nuch tests."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path

import pytest
import structlog
from rich.console import Console

from nuch.core.models import Collection, WorkingArea
from nuch.vcs.git_runner import VcsResult

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x01"
JPG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x02"


class ScriptedConfirmer:
    """Answers confirmation prompts from a fixed script and records them."""

    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected confirmation prompt: {prompt}")
        return self.answers.pop(0)


@dataclass
class RunnerCall:
    repo_root: Path
    message: str
    paths: list[Path]
    existed: dict[Path, bool]


@dataclass
class FakeRunner:
    """Version-control runner double that records what it was asked to commit."""

    result: VcsResult = field(default_factory=lambda: VcsResult(ok=True, step="done"))
    calls: list[RunnerCall] = field(default_factory=list)

    def run(self, repo_root: Path, message: str, paths: Sequence[Path]) -> VcsResult:
        self.calls.append(
            RunnerCall(
                repo_root=repo_root,
                message=message,
                paths=list(paths),
                existed={p: p.exists() for p in paths},
            )
        )
        return self.result


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a CLI invocation installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def ui() -> Console:
    """Console writing into a buffer; read it back with ``ui.file.getvalue()``."""
    return Console(file=StringIO(), width=200, color_system=None)


@pytest.fixture
def working(tmp_path: Path) -> WorkingArea:
    """Empty working area with a drafts and an images directory."""
    files = tmp_path / "writings"
    images = files / "images"
    images.mkdir(parents=True)
    return WorkingArea(files=files, images=images)


@pytest.fixture
def collection(tmp_path: Path) -> Collection:
    """Empty ``blog`` collection laid out like a Nuxt site checkout."""
    files = tmp_path / "site" / "content" / "blog"
    images = tmp_path / "site" / "public" / "images"
    files.mkdir(parents=True)
    images.mkdir(parents=True)
    return Collection(name="blog", files=files, images=images)


@pytest.fixture
def backup_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Pin the delete backup directory to a known location under tmp_path."""
    target = tmp_path / "backup"

    def _make(prefix: str) -> Path:
        target.mkdir()
        return target

    monkeypatch.setattr("nuch.fs.staging.make_backup_dir", _make)
    return target


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner double that reports success."""
    return FakeRunner()


@pytest.fixture
def failing_runner() -> FakeRunner:
    """Runner double whose push is rejected."""
    return FakeRunner(result=VcsResult(ok=False, step="push", output="rejected"))


@pytest.fixture
def scripted() -> type[ScriptedConfirmer]:
    """Factory for confirmers: ``scripted(True, False)``."""
    return ScriptedConfirmer
