"""Git repository abstraction.

Read-only queries used by the change log: the most recent reachable tag and
the commit subjects of a revision range.

Usage:
    repo = Repository(Path("/path/to/repo"))

    tag = repo.last_tag()  # "v2.2.0" or None
    match repo.log_subjects(f"{tag}..HEAD"):
        case Ok(subjects):
            print(subjects)
        case Err(e):
            print(f"History unavailable: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from shipkit.core.result import Err, Ok, Result
from shipkit.platform.process import ProcessError
from shipkit.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def last_tag(self) -> str | None:
        """Most recent tag reachable from HEAD.

        Returns None when there is no tag, no commit, or git is unavailable.
        """
        result = self._run(["describe", "--tags", "--abbrev=0"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def log_subjects(
        self, rev_range: str, *, max_count: int | None = None
    ) -> Result[list[str], GitError]:
        """Commit subjects for ``rev_range``, most recent first.

        Lines are stripped and blank lines dropped.

        Returns:
            Ok(subjects) on success (possibly empty)
            Err(GitError) if git fails (unknown revision, not a repository, ...)
        """
        args = ["log", rev_range, "--pretty=format:%s"]
        if max_count is not None:
            args.append(f"--max-count={max_count}")

        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="log",
                        message=e.stderr.strip() or "git log failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(_non_blank_lines(stdout))

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS
        )


def _non_blank_lines(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if line.strip()]
