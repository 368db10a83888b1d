"""The git commands a release needs, run against one working tree.

Each command returns ``Ok(stdout)`` or ``Err(GitError)``; nothing raises.
Only ``fetch`` talks to the network and gets the longer timeout.

    repo = Repository(root)
    if not repo.tag_exists("v1.2.4"):
        match repo.checkout("master"):
            case Err(e):
                print(e.command, e.message)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from publicist.core.result import Err, Ok, Result
from publicist.platform.process import ProcessError
from publicist.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0
# pre-commit and commit-msg hooks may run linters or test suites
_GIT_HOOK_TIMEOUT_SECONDS = 10 * 60.0
_TIMEOUTS = {"fetch": _GIT_NETWORK_TIMEOUT_SECONDS, "commit": _GIT_HOOK_TIMEOUT_SECONDS}

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """A git command that exited non-zero.

    ``command`` is the short form shown to the user (``checkout -b x``);
    ``message`` is git's own stderr, or stdout when stderr is empty.
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Working tree rooted at ``path``; every command runs as ``git -C path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if this is a valid git repository (.git dir or file)."""
        return (self.path / ".git").exists()

    def fetch(self) -> Result[str, GitError]:
        """Fetch from the default remote."""
        return self._git("fetch", ["fetch"])

    def checkout(self, branch: str) -> Result[str, GitError]:
        """Switch to an existing branch."""
        return self._git(f"checkout {branch}", ["checkout", branch])

    def checkout_new_branch(self, branch: str) -> Result[str, GitError]:
        """Create a branch at HEAD and switch to it."""
        return self._git(f"checkout -b {branch}", ["checkout", "-b", branch])

    def delete_branch(self, branch: str) -> Result[str, GitError]:
        """Force-delete a local branch, merged or not."""
        return self._git(f"branch -D {branch}", ["branch", "-D", branch])

    def add(self, paths: Sequence[Path]) -> Result[str, GitError]:
        """Stage the given paths."""
        rels = [self._relative(p) for p in paths]
        return self._git("add", ["add", "--", *rels])

    def commit(self, message: str) -> Result[str, GitError]:
        """Commit staged changes.

        "nothing to commit" is reported on stdout, so the error message
        falls back to it when stderr is empty.
        """
        return self._git("commit", ["commit", "-m", message])

    def tag(self, name: str) -> Result[str, GitError]:
        """Create a lightweight tag at HEAD."""
        return self._git(f"tag {name}", ["tag", name])

    def tag_exists(self, name: str) -> bool:
        result = self._run(["rev-parse", "-q", "--verify", f"refs/tags/{name}"])
        return isinstance(result, Ok)

    def _git(self, command: str, args: list[str]) -> Result[str, GitError]:
        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=command,
                        message=e.detail or f"git {command} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())

    def _relative(self, path: Path) -> str:
        if not path.is_absolute():
            return str(path)
        try:
            return str(path.relative_to(self.path))
        except ValueError:
            return str(path)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        timeout = _TIMEOUTS.get(args[0], _GIT_TIMEOUT_SECONDS) if args else _GIT_TIMEOUT_SECONDS
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
