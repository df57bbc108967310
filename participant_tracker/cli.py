"""
CLI entry point for participant-tracker.
"""

import logging
from functools import wraps
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from participant_tracker.badges import BADGES, find_badge
from participant_tracker.config import (
    CONFIG_FILENAME,
    ROOT_ENV,
    Settings,
    load_settings,
    write_default_settings,
)
from participant_tracker.exceptions import ParticipantTrackerError, format_error_for_cli
from participant_tracker.util.cache import ParticipantCache
from participant_tracker.util.env import TokenUpdate, update_env_token
from participant_tracker.util.log import Logger, LogLevel

app = typer.Typer(
    name="participant-tracker",
    help="Support tooling for tracking GitHub participants: badges, cache and token setup",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def handle_errors(func):
    """Decorator to handle exceptions in CLI commands with nice formatting."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ParticipantTrackerError as e:
            console.print(format_error_for_cli(e))
            raise typer.Exit(1)
        except OSError as e:
            console.print(f"[red]File error:[/red] {e}")
            logger.error(f"File error in {func.__name__}: {e}")
            raise typer.Exit(1)

    return wrapper


token_app = typer.Typer(help="GITHUB_TOKEN management in the .env file")
app.add_typer(token_app, name="token")

cache_app = typer.Typer(help="Participant cache commands")
app.add_typer(cache_app, name="cache")


@app.callback()
def main(
    ctx: typer.Context,
    root: Path = typer.Option(
        None, "--root", envvar=ROOT_ENV, help="Application root (default: current directory)"
    ),
):
    """participant-tracker command line."""
    ctx.obj = root


def _settings(ctx: typer.Context) -> Settings:
    return load_settings(ctx.obj)


def _logger(settings: Settings) -> Logger:
    return Logger(settings.log_config(), console=console)


@app.command()
@handle_errors
def init(
    root_dir: str = typer.Argument(".", help="Directory to write the settings file into"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing settings file"),
):
    """Write a default participant-tracker.yaml."""
    target = Path(root_dir) / CONFIG_FILENAME
    if target.exists() and not force:
        console.print(f"[yellow]⚠ {target} already exists (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)

    path = write_default_settings(root_dir)
    console.print(f"[green]✓ Wrote configuration to {path}[/green]")


@app.command()
def badge(
    score: float = typer.Argument(..., help="Participant score"),
    show_all: bool = typer.Option(False, "--all", help="Also list every badge band"),
):
    """Show the badge for a score."""
    found = find_badge(score)
    if found:
        console.print(str(found))
    else:
        console.print(f"[yellow]No badge for score {score:g}[/yellow]")

    if show_all:
        table = Table(show_header=True, box=None, padding=(0, 2))
        table.add_column("Score", style="cyan")
        table.add_column("Badge", style="white")
        for band in BADGES:
            upper = "" if band.max == float("inf") else f"{band.max:g}"
            table.add_row(f"{band.min:g}-{upper}", str(band))
        console.print(table)


@app.command(name="log")
@handle_errors
def log_cmd(
    ctx: typer.Context,
    message: str = typer.Argument(..., help="Message to log"),
    level: str = typer.Option("LOG", "--level", "-l", help="LOG|DEBUG|INFO|WARN|ERROR"),
):
    """Print a message through the leveled logger."""
    settings = _settings(ctx)
    _logger(settings).log(message, level)


@token_app.command("set")
@handle_errors
def token_set(
    ctx: typer.Context,
    token: str = typer.Argument(..., help="GitHub personal access token"),
):
    """Store the token in the .env file."""
    settings = _settings(ctx)
    outcome = update_env_token(
        token, settings.env_path, key=settings.token_key, logger=_logger(settings)
    )
    if outcome is TokenUpdate.UNCHANGED:
        console.print(f"[dim]{settings.env_path} unchanged[/dim]")
    else:
        console.print(f"[green]✓ {settings.token_key} {outcome.value} in {settings.env_path}[/green]")


@cache_app.command("show")
@handle_errors
def cache_show(ctx: typer.Context):
    """Print the cached participant data."""
    settings = _settings(ctx)
    cache = ParticipantCache(settings.cache_path)
    if not len(cache):
        console.print(f"[yellow]No cached data in {settings.cache_path}[/yellow]")
        return

    console.print_json(data=cache.to_dict())
    stats = cache.get_stats()
    console.print(f"[dim]{stats['total_entries']} entries in {stats['cache_file']}[/dim]")


@cache_app.command("clear")
@handle_errors
def cache_clear(ctx: typer.Context):
    """Empty the participant cache."""
    settings = _settings(ctx)
    cache = ParticipantCache(settings.cache_path)
    removed = len(cache)
    cache.clear()
    _logger(settings).log(f"Cleared {removed} cache entries", LogLevel.INFO)
    console.print(f"[green]✓ Cleared {settings.cache_path}[/green]")


if __name__ == "__main__":
    app()
