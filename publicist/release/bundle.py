"""Standalone bundle of a package entry point.

The bundler is an external command (``browserify`` by default) invoked as
``<command> --standalone <name> <entry>``. Its stdout is the bundle and is
written byte for byte.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from publicist.core.result import Err, Ok, Result
from publicist.platform.files import atomic_write_bytes, ensure_directory
from publicist.platform.process import run_bytes as run_process
from publicist.release.errors import ReleaseError

_BUNDLE_TIMEOUT_SECONDS = 10 * 60.0


def bundle_command(command: Sequence[str], *, entry: str, standalone: str) -> list[str]:
    return [*command, "--standalone", standalone, entry]


def ensure_release_dir(path: Path) -> Result[Path, ReleaseError]:
    """Create the release directory; an existing one is fine."""
    try:
        ensure_directory(path)
    except OSError as e:
        return Err(
            ReleaseError(
                kind="filesystem_failed",
                message=f"cannot create release directory: {path}",
                hint=str(e),
            )
        )
    return Ok(path)


def bundle(
    *,
    command: Sequence[str],
    entry: str,
    standalone: str,
    output: Path,
    cwd: Path,
) -> Result[Path, ReleaseError]:
    """Bundle ``entry`` into ``output``, exposing it as ``standalone``.

    Nothing is written when the bundler fails.
    """
    cmd = bundle_command(command, entry=entry, standalone=standalone)
    result = run_process(cmd, cwd=cwd, timeout=_BUNDLE_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        e = result.error
        return Err(
            ReleaseError(
                kind="bundle_failed",
                message=f"bundler failed: {e}",
                hint=e.detail,
            )
        )

    try:
        atomic_write_bytes(output, result.value)
    except OSError as e:
        return Err(
            ReleaseError(
                kind="filesystem_failed",
                message=f"failed to write bundle: {output}",
                hint=str(e),
            )
        )
    return Ok(output)
