"""
Functions for formatting and displaying data in the console using Rich.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from spotify_cli.models.stats import DownloadStats
from spotify_cli.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "AuthenticationError": [
            "• Verify the login name and password.",
            "• Check that the account has an active subscription.",
        ],
        "PathTemplateError": [
            "• The --format template must contain at least one '/'.",
            "• Example: {author}/{album}/{name}.{ext}",
        ],
        "DirectoryCreationError": [
            "• Check write permissions for the output folder.",
            "• Make sure the template does not point at a read-only location.",
        ],
        "ConfigurationError": [
            "• Run the command with --help to review the options.",
        ],
        "ModuleNotFoundError": [
            "• The streaming backend is an optional dependency.",
            "• Install it with: pip install 'spotify-cli[librespot]'",
        ],
        "TimeoutError": [
            "• The connection timed out, which may indicate network throttling.",
            "• Check your internet connection.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_summary_panel(
    stats: DownloadStats, duration_s: float, console: Console | None = None
):
    """Displays the tally of processed tracks."""
    console = console or Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 1))
    stats_table.add_column(style="bold yellow")
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("->", f"[bold red]{stats.tracks_failed}[/bold red] error")
    stats_table.add_row(
        "->", f"[yellow]{stats.tracks_skipped_exists}[/yellow] already downloaded"
    )
    stats_table.add_row("->", f"[bold green]{stats.tracks_downloaded}[/bold green] new")
    stats_table.add_row("->", f"[bold]{stats.total_tracks}[/bold] total processed")

    stats_table.add_row("", "")  # Spacer
    stats_table.add_row(
        "", f"Total size: [cyan]{format_size(stats.total_size_downloaded)}[/cyan]"
    )
    stats_table.add_row(
        "", f"Time elapsed: [blue]{format_duration(duration_s)}[/blue]"
    )

    console.print()
    console.print(
        Panel(
            stats_table,
            title="[bold green]=>[/] [bold]Processed tracks[/bold]",
            border_style="green",
            box=box.ROUNDED,
            expand=False,
            padding=(1, 2),
        )
    )
