"""
Process entry point. Runs the command and renders any error that escapes it.
"""

import logging
import sys

from rich.console import Console

from spotify_cli.cli.app import app
from spotify_cli.cli.formatters import format_error_with_suggestions
from spotify_cli.exceptions import SpotifyCliError

log = logging.getLogger("spotify_cli")


def main() -> None:
    console = Console()
    try:
        app()
    except SpotifyCliError as e:
        console.print()
        console.print(format_error_with_suggestions(e))
        sys.exit(1)
    except Exception as e:
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
