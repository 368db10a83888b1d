from __future__ import annotations

from pathlib import Path

import typer

from publicist import __version__
from publicist.cli.context import build_context
from publicist.cli.helpers import fail
from publicist.core.result import Err
from publicist.output.console import RichConsole
from publicist.release.orchestrator import release
from publicist.release.semver import INCREMENTS
from publicist.release.target import parse_target


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    help="Increment packages and generate a tagged UMD build.",
)


@app.command()
def publish(
    target: str | None = typer.Argument(
        None,
        metavar="<version|increment>",
        help=f"Version to release, or one of: {', '.join(INCREMENTS)}.",
        show_default=False,
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the steps, change nothing."),
    preid: str | None = typer.Option(
        None,
        "--preid",
        help="Pre-release identifier for pre* increments (e.g. beta).",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: <repo>/.publicist.toml).",
    ),
    repo_path: Path | None = typer.Option(
        None,
        "--repo",
        help="Repository root (default: current directory).",
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Release a new version: [bold]publicist patch[/bold]."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    parsed = parse_target(target, preid=preid)
    if isinstance(parsed, Err):
        fail(parsed.error, RichConsole())

    ctx = build_context(repo_path=repo_path, config_path=config_path)

    result = release(
        repo=ctx.repo,
        target=parsed.value,
        config=ctx.config,
        console=ctx.console,
        dry_run=dry_run,
    )
    if isinstance(result, Err):
        fail(result.error, ctx.console)

    outcome = result.value
    if outcome.dry_run:
        ctx.console.log(f"Dry run: would release {outcome.name}@{outcome.version}")
    else:
        ctx.console.log(f"Released {outcome.name}@{outcome.version}")


def main() -> None:
    app()
