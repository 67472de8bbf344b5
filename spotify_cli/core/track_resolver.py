"""
Expands track, playlist, album and artist references into a set of track ids.
"""

import logging
from typing import Awaitable, Callable, Iterable

from spotify_cli.api.protocols import MetadataProvider
from spotify_cli.exceptions import MetadataFetchError
from spotify_cli.models.track import Reference, ResourceKind, SpotifyId

log = logging.getLogger(__name__)

CollectionFetcher = Callable[[SpotifyId], Awaitable[list[SpotifyId]]]


class TrackSetResolver:
    """
    Flattens references into track ids, accumulating into a caller-owned set.

    A failing playlist or album only skips that reference. Inside an artist,
    a failing album aborts the whole artist and none of its tracks are kept.
    """

    def __init__(self, metadata: MetadataProvider):
        self.metadata = metadata

    async def resolve(
        self, references: Iterable[Reference], track_ids: set[SpotifyId] | None = None
    ) -> set[SpotifyId]:
        """Resolves references in order and returns the accumulated set."""
        track_ids = set() if track_ids is None else track_ids
        for reference in references:
            await self.add_reference(reference, track_ids)
        return track_ids

    async def add_reference(
        self, reference: Reference, track_ids: set[SpotifyId]
    ) -> bool:
        """
        Adds the tracks of one reference to ``track_ids``.

        Returns False when the reference was skipped because of a fetch error.
        """
        handlers = {
            ResourceKind.TRACK: self._add_track,
            ResourceKind.PLAYLIST: self._add_playlist,
            ResourceKind.ALBUM: self._add_album,
            ResourceKind.ARTIST: self._add_artist,
        }
        try:
            await handlers[reference.kind](reference.id, track_ids)
        except MetadataFetchError as e:
            log.warning(
                f"[yellow]warning:[/yellow] cannot get {reference.kind.value} "
                f"metadata: {e}, skipping..."
            )
            return False
        return True

    async def _add_track(self, track_id: SpotifyId, track_ids: set[SpotifyId]):
        track_ids.add(track_id)

    async def _add_playlist(self, playlist_id: SpotifyId, track_ids: set[SpotifyId]):
        await self._expand_collection(self.metadata.fetch_playlist, playlist_id, track_ids)

    async def _add_album(self, album_id: SpotifyId, track_ids: set[SpotifyId]):
        await self._expand_collection(self.metadata.fetch_album, album_id, track_ids)

    async def _add_artist(self, artist_id: SpotifyId, track_ids: set[SpotifyId]):
        artist = await self.metadata.fetch_artist(artist_id)
        collected: set[SpotifyId] = set()
        for album_id in artist.iter_album_ids():
            await self._add_album(album_id, collected)
        log.debug(
            f"Artist '{artist.name or artist_id}' expanded to {len(collected)} tracks."
        )
        track_ids.update(collected)

    async def _expand_collection(
        self,
        fetch: CollectionFetcher,
        collection_id: SpotifyId,
        track_ids: set[SpotifyId],
    ) -> None:
        """Fetches a track-bearing collection and inserts its ids in returned order."""
        for track_id in await fetch(collection_id):
            track_ids.add(track_id)
