"""
The main orchestrator: turns input lines into a track set and processes it track by track.
"""

import logging
import time
from pathlib import Path
from typing import Iterable

from rich.console import Console
from rich.markup import escape

from spotify_cli.api.protocols import KeyProvider, MetadataProvider, StreamProvider
from spotify_cli.exceptions import ConfigurationError, MetadataFetchError, NoSuitableTrackError
from spotify_cli.models.config import DownloadConfig
from spotify_cli.models.stats import DownloadStats, TrackOutcome
from spotify_cli.models.track import Reference, SpotifyId
from spotify_cli.utils.formatting import format_track_label
from spotify_cli.utils.reference import parse_reference

from .format_resolver import FormatResolver
from .track_processor import TrackProcessor
from .track_resolver import TrackSetResolver

log = logging.getLogger(__name__)


def expand_sources(sources: Iterable[str]) -> list[str]:
    """
    Expands sources into reference lines. A source naming an existing file
    contributes its non-empty, non-comment lines. Duplicates are dropped.
    """
    expanded: list[str] = []
    for source in sources:
        source = source.strip()
        if Path(source).is_file():
            log.info(f"Reading references from file: [dim]{escape(source)}[/dim]")
            try:
                with open(source, "r", encoding="utf-8") as f:
                    expanded.extend(
                        line.strip()
                        for line in f
                        if line.strip() and not line.strip().startswith("#")
                    )
            except (IOError, UnicodeDecodeError) as e:
                log.error(f"[red]Could not read file {escape(source)}: {e}[/red]")
        elif source:
            expanded.append(source)

    unique = list(dict.fromkeys(expanded))
    if len(unique) < len(expanded):
        log.info(f"Removed {len(expanded) - len(unique)} duplicate references.")
    return unique


class DownloadManager:
    """
    Orchestrates one run: reference resolution first, then every track
    strictly one after another.
    """

    def __init__(
        self,
        config: DownloadConfig,
        client: MetadataProvider,
        keys: KeyProvider | None = None,
        streams: StreamProvider | None = None,
        console: Console | None = None,
    ):
        self.config = config
        self.console = console or Console()
        self.track_set_resolver = TrackSetResolver(client)
        self.format_resolver = FormatResolver(client)
        self.track_processor = TrackProcessor(
            config,
            keys if keys is not None else client,
            streams if streams is not None else client,
        )
        self.stats = DownloadStats()
        self.start_time = time.monotonic()

    def parse_references(self, lines: Iterable[str]) -> list[Reference]:
        """Classifies input lines, echoing each and warning about the rest."""
        references = []
        for line in lines:
            reference = parse_reference(line)
            if reference is None:
                self.console.print(
                    f" [bold yellow]-> warning:[/] unrecognized input: "
                    f"[bold]{escape(line)}[/bold], skipping..."
                )
                continue
            self.console.print(
                f" [bold yellow]->[/] {reference.kind.value}: {reference.matched}"
            )
            references.append(reference)
        return references

    async def collect_tracks(self, lines: Iterable[str] | None = None) -> set[SpotifyId]:
        """Resolves every input line into one deduplicated set of track ids."""
        sources = self.config.source_refs if lines is None else lines
        self.console.print("\n[bold green]=>[/] Input resources:")

        track_ids: set[SpotifyId] = set()
        for reference in self.parse_references(expand_sources(sources)):
            await self.track_set_resolver.add_reference(reference, track_ids)
        return track_ids

    async def execute_downloads(self, track_ids: set[SpotifyId]) -> DownloadStats:
        """Processes each track id in turn and returns the run's tally."""
        self.stats.total_tracks = len(track_ids)
        self.console.print(f"\n[bold green]=>[/] Parsed [bold]{len(track_ids)}[/bold] tracks:")

        for track_id in track_ids:
            outcome = await self._process_track_id(track_id)
            if outcome is not None:
                self.stats.record(outcome)
        return self.stats

    async def _process_track_id(self, track_id: SpotifyId) -> TrackOutcome | None:
        """
        Resolves and downloads one track. Only configuration errors escape;
        anything else is logged and the track counts as an error.
        """
        try:
            track, audio_file = await self.format_resolver.resolve_playable(track_id)
        except (MetadataFetchError, NoSuitableTrackError) as e:
            self.console.print(f" [bold yellow]->[/] [bold]??[/bold] ({track_id})")
            log.warning(
                f"   - [yellow]warning:[/yellow] cannot get track from id: {e}, "
                "skipping..."
            )
            return None
        except Exception as e:
            self.console.print(f" [bold yellow]->[/] [bold]??[/bold] ({track_id})")
            log.error(
                f"[red]   ✗ An unexpected error occurred while resolving track "
                f"{track_id}: {escape(str(e))}[/red]",
                exc_info=log.getEffectiveLevel() == logging.DEBUG,
            )
            return None

        label = format_track_label(track.name, str(track.id), str(track_id))
        self.console.print(f" [bold yellow]->[/] [bold]{escape(label)}[/bold]")

        try:
            return await self.track_processor.process_track(track_id, track, audio_file)
        except ConfigurationError:
            raise
        except Exception as e:
            log.error(
                f"[red]   ✗ An unexpected error occurred for track "
                f"'{escape(track.name)}': {e}[/red]",
                exc_info=log.getEffectiveLevel() == logging.DEBUG,
            )
            return TrackOutcome.skipped(str(e))

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.start_time
