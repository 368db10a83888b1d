"""Shared fixtures: an in-memory git standing in for the git binary."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from publicist.core.result import Err, Ok, Result
from publicist.platform.process import ProcessError


@dataclass
class FakeGit:
    """Enough of git's branch/commit/tag behaviour to follow a release.

    ``fail`` maps an argument prefix (e.g. ``("branch", "-D")``) to the
    stderr git should report for it.
    """

    current: str = "master"
    branches: set[str] = field(default_factory=lambda: {"master"})
    tags: dict[str, int] = field(default_factory=dict)
    commits: list[tuple[str, str, tuple[str, ...]]] = field(default_factory=list)
    staged: list[str] = field(default_factory=list)
    calls: list[list[str]] = field(default_factory=list)
    fail: dict[tuple[str, ...], str] = field(default_factory=dict)

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        assert cmd[:2] == ["git", "-C"]
        args = cmd[3:]
        self.calls.append(args)

        for prefix, stderr in self.fail.items():
            if tuple(args[: len(prefix)]) == prefix:
                return self._err(cmd, stderr)

        match args:
            case ["fetch"]:
                return Ok("")
            case ["checkout", "-b", name]:
                if name in self.branches:
                    return self._err(cmd, f"fatal: a branch named '{name}' already exists")
                self.branches.add(name)
                self.current = name
                return Ok("")
            case ["checkout", name]:
                if name not in self.branches:
                    return self._err(cmd, f"error: pathspec '{name}' did not match")
                self.current = name
                return Ok("")
            case ["branch", "-D", name]:
                if name == self.current:
                    return self._err(cmd, f"error: cannot delete branch '{name}' checked out")
                if name not in self.branches:
                    return self._err(cmd, f"error: branch '{name}' not found.")
                self.branches.remove(name)
                return Ok("")
            case ["add", "--", *paths]:
                self.staged.extend(paths)
                return Ok("")
            case ["commit", "-m", message]:
                if not self.staged:
                    return self._err(cmd, "", stdout="nothing to commit, working tree clean")
                self.commits.append((self.current, message, tuple(self.staged)))
                self.staged.clear()
                return Ok("")
            case ["tag", name]:
                self.tags[name] = len(self.commits) - 1
                return Ok("")
            case ["rev-parse", "-q", "--verify", ref] if ref.startswith("refs/tags/"):
                name = ref.removeprefix("refs/tags/")
                return Ok("abc123\n") if name in self.tags else self._err(cmd, "")
            case _:
                raise AssertionError(f"unexpected git command: {args}")

    @staticmethod
    def _err(cmd: list[str], stderr: str, *, stdout: str = "") -> Err[ProcessError]:
        return Err(ProcessError(command=tuple(cmd), returncode=1, stdout=stdout, stderr=stderr))

    def commit_messages(self) -> list[str]:
        return [message for _, message, _ in self.commits]


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch) -> FakeGit:
    import publicist.git.repository as repository_mod

    git = FakeGit()
    monkeypatch.setattr(repository_mod, "run_process", git)
    return git


@pytest.fixture
def package_repo(tmp_path: Path) -> Path:
    """A repository root with package.json and bower.json at 1.2.3."""
    (tmp_path / ".git").mkdir()
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "widget", "version": "1.2.3", "main": "lib/index.js"}, indent=2) + "\n",
        encoding="utf-8",
    )
    (tmp_path / "bower.json").write_text(
        json.dumps({"name": "widget", "version": "1.2.3"}, indent=2) + "\n",
        encoding="utf-8",
    )
    return tmp_path
