"""Git operations used by the release pipeline.

Usage:
    from relkit.git import Repository

    repo = Repository(Path("."))
    if repo.ref_exists("v1.0.0"):
        print(repo.ref_commit("v1.0.0"))
"""

from relkit.git.repository import (
    GitError,
    Repository,
    RepositoryState,
    StatusEntry,
)

__all__ = [
    "GitError",
    "Repository",
    "RepositoryState",
    "StatusEntry",
]
