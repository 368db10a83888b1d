"""Filesystem helpers."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

__all__ = ["atomic_write_bytes", "atomic_write_text", "ensure_directory"]


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Encode ``content`` and write it with ``atomic_write_bytes``; no newline translation."""
    atomic_write_bytes(path, content.encode(encoding))


def atomic_write_bytes(path: Path, content: bytes) -> None:
    """Replace ``path`` with ``content`` in a single rename.

    An existing file keeps its permission bits; a new one gets the usual
    0666 minus umask instead of mkstemp's 0600.
    """
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = 0o666 & ~_current_umask()

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        tmp_path.chmod(mode)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def ensure_directory(path: Path) -> bool:
    """Create a single directory, tolerating one that already exists.

    Returns:
        True if the directory was created, False if it was already there.

    Raises:
        FileExistsError: If something other than a directory occupies path.
        OSError: Any other creation failure (missing parent, permissions).
    """
    try:
        path.mkdir()
    except FileExistsError:
        if path.is_dir():
            return False
        raise
    return True
