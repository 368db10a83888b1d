"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from publicist.core.errors import ErrorCode
from publicist.output.console import ConsoleProtocol, Style
from publicist.release.errors import ReleaseError


def fail(
    error: ReleaseError,
    console: ConsoleProtocol,
    error_code: ErrorCode = ErrorCode.USER_ERROR,
) -> NoReturn:
    """Report a failed release and exit.

    Prints the failure notice, the error and its detail, then exits with
    ``error_code``.
    """
    console.log("Release failed")
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.HINT)
    raise typer.Exit(code=int(error_code))
