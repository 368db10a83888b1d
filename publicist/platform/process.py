"""Running external tools (git, the bundler).

``run`` never raises for a failing tool: a non-zero exit, a missing
executable and a timeout all come back as ``Err(ProcessError)`` carrying
whatever output was captured.

Usage:
    match run(["git", "fetch"], cwd=repo_root, timeout=180.0):
        case Ok(stdout):
            ...
        case Err(error):
            print(error, error.detail)
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from publicist.core.result import Err, Ok, Result

__all__ = ["NOT_STARTED", "ProcessError", "run", "run_bytes"]

# returncode used when no exit status exists (spawn failure, timeout)
NOT_STARTED = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A tool invocation that did not exit cleanly.

    Attributes:
        command: argv as executed
        returncode: exit status, or NOT_STARTED
        stdout: captured standard output
        stderr: captured standard error, or the spawn/timeout reason
        timed_out: killed after exceeding its timeout
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    def __str__(self) -> str:
        shown = " ".join(self.command[:3]) + (" ..." if len(self.command) > 3 else "")
        if self.timed_out:
            return f"{shown} timed out"
        if self.returncode == NOT_STARTED:
            return f"{shown} could not be started"
        return f"{shown} failed (exit {self.returncode})"

    @property
    def detail(self) -> str | None:
        """stderr if any, else stdout (git prints "nothing to commit" there)."""
        return self.stderr.strip() or self.stdout.strip() or None


def _as_text(data: str | bytes | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def _failure(
    cmd: Sequence[str],
    *,
    returncode: int = NOT_STARTED,
    stdout: str | bytes | None = "",
    stderr: str | bytes | None = "",
    timed_out: bool = False,
) -> Err[ProcessError]:
    return Err(
        ProcessError(
            command=tuple(cmd),
            returncode=returncode,
            stdout=_as_text(stdout),
            stderr=_as_text(stderr),
            timed_out=timed_out,
        )
    )


def _invoke(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None,
    timeout: float | None,
    *,
    text: bool,
) -> Result[Any, ProcessError]:
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=text,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return _failure(
            cmd,
            stdout=e.stdout,
            stderr=f"Command timed out after {timeout}s",
            timed_out=True,
        )
    except OSError as e:
        return _failure(cmd, stderr=str(e))

    if proc.returncode != 0:
        return _failure(cmd, returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)
    return Ok(proc.stdout)


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stdout as text.

    Args:
        cmd: argv; the first item is looked up on PATH
        cwd: working directory
        env: full environment, or None to inherit
        timeout: seconds before the process is killed, None for no limit
    """
    return _invoke(cmd, cwd, env, timeout, text=True)


def run_bytes(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[bytes, ProcessError]:
    """Like ``run``, but stdout comes back byte for byte.

    No decoding or newline translation happens, so ``\\r\\n`` and lone
    ``\\r`` survive. Use it when stdout is itself the artifact.
    """
    return _invoke(cmd, cwd, env, timeout, text=False)
