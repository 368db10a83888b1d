"""Git operations module.

Usage:
    from publicist.git import Repository

    repo = Repository(Path("/path/to/repo"))
    repo.fetch()
"""

from publicist.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
