"""Platform helpers: subprocesses and files."""

from publicist.platform.files import atomic_write_bytes, atomic_write_text, ensure_directory
from publicist.platform.process import ProcessError, run, run_bytes

__all__ = [
    "ProcessError",
    "atomic_write_bytes",
    "atomic_write_text",
    "ensure_directory",
    "run",
    "run_bytes",
]
