"""Tests for git/repository.py."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from shipkit.core.result import Err, Ok
from shipkit.git.repository import Repository
from shipkit.platform.process import ProcessError


def _process_error(stderr: str = "fatal: bad revision", returncode: int = 128) -> ProcessError:
    return ProcessError(command=("git",), returncode=returncode, stdout="", stderr=stderr)


class TestLastTag:
    """Tests for Repository.last_tag with a mocked git."""

    def test_returns_tag(self, tmp_path: Path) -> None:
        with patch("shipkit.git.repository.run_process", return_value=Ok("v2.2.0\n")) as run:
            assert Repository(tmp_path).last_tag() == "v2.2.0"

        cmd = run.call_args.args[0]
        assert cmd[:3] == ["git", "-C", str(tmp_path)]
        assert cmd[3:] == ["describe", "--tags", "--abbrev=0"]

    def test_no_tag_is_none(self, tmp_path: Path) -> None:
        err = Err(_process_error("fatal: No names found, cannot describe anything."))
        with patch("shipkit.git.repository.run_process", return_value=err):
            assert Repository(tmp_path).last_tag() is None

    def test_blank_output_is_none(self, tmp_path: Path) -> None:
        with patch("shipkit.git.repository.run_process", return_value=Ok("  \n")):
            assert Repository(tmp_path).last_tag() is None


class TestLogSubjects:
    """Tests for Repository.log_subjects with a mocked git."""

    def test_strips_and_drops_blank_lines(self, tmp_path: Path) -> None:
        out = Ok("feat: b\n\n  fix: a  \n\n")
        with patch("shipkit.git.repository.run_process", return_value=out) as run:
            result = Repository(tmp_path).log_subjects("v1..HEAD")

        assert result == Ok(["feat: b", "fix: a"])
        assert run.call_args.args[0][3:] == ["log", "v1..HEAD", "--pretty=format:%s"]

    def test_max_count_flag(self, tmp_path: Path) -> None:
        with patch("shipkit.git.repository.run_process", return_value=Ok("")) as run:
            result = Repository(tmp_path).log_subjects("HEAD", max_count=5)

        assert result == Ok([])
        assert run.call_args.args[0][-1] == "--max-count=5"

    def test_failure_maps_to_git_error(self, tmp_path: Path) -> None:
        with patch(
            "shipkit.git.repository.run_process",
            return_value=Err(_process_error("fatal: not a git repository")),
        ):
            result = Repository(tmp_path).log_subjects("HEAD")

        assert isinstance(result, Err)
        assert result.error.command == "log"
        assert result.error.returncode == 128
        assert "not a git repository" in result.error.message

    def test_failure_without_stderr_has_message(self, tmp_path: Path) -> None:
        with patch(
            "shipkit.git.repository.run_process", return_value=Err(_process_error(stderr=""))
        ):
            result = Repository(tmp_path).log_subjects("HEAD")

        assert isinstance(result, Err)
        assert result.error.message == "git log failed"


class TestRealGit:
    """Tests against a real repository."""

    def test_tag_and_range(self, git_repo: Callable[..., Path]) -> None:
        path = git_repo(
            ["chore: init", "feat: add battle log", "fix: crash on save"],
            tag_after=1,
            tag="v2.2.0",
        )
        repo = Repository(path)

        assert repo.last_tag() == "v2.2.0"
        assert repo.log_subjects("v2.2.0..HEAD") == Ok(
            ["fix: crash on save", "feat: add battle log"]
        )

    def test_no_tags(self, git_repo: Callable[..., Path]) -> None:
        repo = Repository(git_repo(["chore: init"]))
        assert repo.last_tag() is None

    def test_not_a_repository(self, tmp_path: Path) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()
        repo = Repository(plain)

        assert repo.last_tag() is None
        assert isinstance(repo.log_subjects("HEAD"), Err)
