from __future__ import annotations

import json
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from shipkit.release.model import ReleaseMetadata


@pytest.fixture
def metadata(tmp_path: Path) -> ReleaseMetadata:
    out = tmp_path / "release"
    out.mkdir()
    return ReleaseMetadata(version="2.3.0", output_dir=out, app_name="appname")


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    def _write(data: object, *, name: str = "package.json") -> Path:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


def _git(repo: Path, *args: str) -> None:
    subprocess.run(
        ["git", "-C", str(repo), *args],
        check=True,
        capture_output=True,
        text=True,
    )


@pytest.fixture
def git_repo(tmp_path: Path) -> Callable[..., Path]:
    """Create a real git repository; skips when git is not installed."""
    if shutil.which("git") is None:
        pytest.skip("git not available")

    def _make(
        commits: list[str],
        *,
        tag_after: int | None = None,
        tag: str = "v0.1.0",
        path: Path | None = None,
    ) -> Path:
        repo = path or (tmp_path / "repo")
        repo.mkdir(parents=True, exist_ok=True)
        _git(repo, "init", "-q")
        _git(repo, "config", "user.email", "ci@example.com")
        _git(repo, "config", "user.name", "CI")
        _git(repo, "config", "commit.gpgsign", "false")
        _git(repo, "config", "tag.gpgsign", "false")
        for i, subject in enumerate(commits, start=1):
            _git(repo, "commit", "-q", "--allow-empty", "-m", subject)
            if tag_after == i:
                _git(repo, "tag", tag)
        return repo

    return _make
