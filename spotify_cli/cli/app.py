"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from spotify_cli import __version__
from spotify_cli.core.download_manager import DownloadManager
from spotify_cli.exceptions import AuthenticationError, ConfigurationError
from spotify_cli.media.downloader import close_connection_pool
from spotify_cli.models.config import DEFAULT_OUTPUT_TEMPLATE, DownloadConfig

from .formatters import format_error_with_suggestions, print_summary_panel

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("spotify_cli")

app = typer.Typer(
    name="spotify-cli",
    help=(
        "Download tracks, playlists, albums and artist discographies as tagged"
        " Ogg Vorbis files."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


async def open_client(username: str, password: str):
    """Logs in and returns a client implementing every pipeline collaborator."""
    from spotify_cli.api.client import SpotifyAPIClient

    return await SpotifyAPIClient.connect(username, password)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]spotify-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()


@app.command()
def download(
    ctx: typer.Context,
    references: list[str] | None = typer.Argument(  # noqa: B008
        None,
        help="Spotify URIs or open.spotify.com URLs, or files listing them.",
        metavar="URIs...",
        show_default=False,
    ),
    user: str | None = typer.Option(
        None,
        "-u",
        "--user",
        envvar="SPOTIFY_CLI_USER",
        help="User login name, required.",
        show_default=False,
    ),
    password: str | None = typer.Option(
        None,
        "-p",
        "--pass",
        envvar="SPOTIFY_CLI_PASS",
        help="User password, required.",
        show_default=False,
    ),
    output_template: str = typer.Option(
        DEFAULT_OUTPUT_TEMPLATE,
        "-f",
        "--format",
        help=(
            "Output path template. Available placeholders: {author}, {album}, {name}"
            " and {ext}. When a track has several artists, {author} is the first one"
            " (the file metadata still lists all of them)."
        ),
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(  # noqa: ARG001
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Download music from Spotify."""
    if not user or not password or not references:
        console.print(ctx.get_help())
        raise typer.Exit()

    if verbose >= 2:
        logging.getLogger("spotify_cli").setLevel("DEBUG")

    try:
        config = DownloadConfig(
            username=user,
            password=password,
            output_template=output_template,
            verbose=verbose,
            source_refs=references,
        )
    except ValidationError as e:
        error = ConfigurationError(str(e.errors()[0]["msg"]))
        console.print(format_error_with_suggestions(error))
        raise typer.Exit(code=1) from e

    try:
        asyncio.run(_download_async(config))
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user.[/yellow]")
        raise typer.Exit()


async def _download_async(config: DownloadConfig) -> None:
    client = None
    try:
        try:
            client = await open_client(config.username, config.password)
        except AuthenticationError as e:
            console.print(f"[bold red]error:[/] {escape(str(e))}")
            raise typer.Exit(code=1) from e

        console.print(
            f"[bold green]=>[/] Logged in as: [bright_blue]{escape(config.username)}[/]"
        )

        manager = DownloadManager(config, client, console=console)
        track_ids = await manager.collect_tracks()
        if not track_ids:
            console.print("\n[bold red]error:[/] didn't get any tracks, aborting...")
            raise typer.Exit()

        try:
            stats = await manager.execute_downloads(track_ids)
        except ConfigurationError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e

        print_summary_panel(stats, manager.elapsed, console)
    finally:
        await close_connection_pool()
        if client is not None:
            await client.close()
