from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from publicist.core.config import CONFIG_FILENAME, Config, load_config_or_default
from publicist.core.errors import ErrorCode
from publicist.core.result import Err
from publicist.git.repository import Repository
from publicist.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo: Repository
    config: Config
    console: ConsoleProtocol


def build_context(
    *,
    repo_path: Path | None = None,
    config_path: Path | None = None,
    console: ConsoleProtocol | None = None,
) -> CLIContext:
    """Resolve the repository and its configuration or exit with USER_ERROR."""
    try:
        root = (repo_path or Path.cwd()).expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --repo: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    repo = Repository(root)
    if not root.is_dir() or not repo.exists():
        typer.echo(f"error: not a git repository: {root}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config_result = load_config_or_default(config_path or root / CONFIG_FILENAME)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        repo=repo,
        config=config_result.value,
        console=console or RichConsole(),
    )
