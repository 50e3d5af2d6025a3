"""Git operations used by the release pipelines.

Usage:
    from shipkit.git import Repository

    repo = Repository(Path("/path/to/repo"))
    print(repo.last_tag())
"""

from shipkit.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
