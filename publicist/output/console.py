"""Console output for a release run.

A run prints three kinds of lines:

    [publicist]: Bumping packages to 1.2.4     progress, name in cyan
    git checkout -b release-3f2a...            echoed commands, dimmed
    error: git fetch failed                    errors, warnings, hints: stderr

The release sequence only sees ``ConsoleProtocol``; ``RichConsole`` renders
to the terminal and ``MockConsole`` records lines for tests. Messages are
plain text: git output containing square brackets prints verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

from rich.console import Console
from rich.markup import escape

__all__ = [
    "LOG_NAME",
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "log_prefix",
]

LOG_NAME = "publicist"


class Style(Enum):
    DEFAULT = auto()
    DIM = auto()  # echoed commands
    HINT = auto()  # detail under an error or warning
    WARNING = auto()
    ERROR = auto()

    def __str__(self) -> str:
        return self.name.lower()


_RICH_STYLES: dict[Style, str | None] = {
    Style.DEFAULT: None,
    Style.DIM: "dim",
    Style.HINT: "dim",
    Style.WARNING: "yellow",
    Style.ERROR: "red bold",
}


def log_prefix(message: str, *, name: str = LOG_NAME) -> str:
    """``[name]: message`` as Rich markup; only the name is styled."""
    return f"\\[[cyan]{escape(name)}[/cyan]]: {escape(message)}"


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def log(self, message: str) -> None:
        """Progress line carrying the ``[publicist]`` prefix."""
        ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


class RichConsole:
    """Progress on stdout; errors, warnings and their hints on stderr."""

    def __init__(self) -> None:
        self._out = Console()
        self._err = Console(stderr=True)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        target = self._err if style in (Style.ERROR, Style.WARNING, Style.HINT) else self._out
        target.print(escape(message), style=_RICH_STYLES[style])

    def log(self, message: str) -> None:
        self._out.print(log_prefix(message))

    def error(self, message: str) -> None:
        self._err.print(f"[red bold]error:[/red bold] {escape(message)}")

    def warning(self, message: str) -> None:
        self._err.print(f"[yellow]warning:[/yellow] {escape(message)}")


@dataclass
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    """Records output instead of printing it."""

    outputs: list[OutputRecord] = field(default_factory=list)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def log(self, message: str) -> None:
        self.print(f"[{LOG_NAME}]: {message}")

    def error(self, message: str) -> None:
        self.print(f"error: {message}", Style.ERROR)

    def warning(self, message: str) -> None:
        self.print(f"warning: {message}", Style.WARNING)

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Outputs containing ``substring``."""
        return [o for o in self.outputs if substring in o.message]
