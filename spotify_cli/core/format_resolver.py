"""
Finds a playable Vorbis file for a track, falling back to its alternatives.
"""

import logging
from collections import deque

from spotify_cli.api.protocols import MetadataProvider
from spotify_cli.exceptions import NoSuitableTrackError
from spotify_cli.models.track import AudioFile, SpotifyId, TrackRecord

log = logging.getLogger(__name__)


class FormatResolver:
    """Breadth-first search over a track's alternatives for a usable encoding."""

    def __init__(self, metadata: MetadataProvider):
        self.metadata = metadata

    async def resolve_playable(self, track_id: SpotifyId) -> tuple[TrackRecord, AudioFile]:
        """
        Returns the first record in breadth-first order that offers a Vorbis
        file, together with its best file.

        Raises:
            MetadataFetchError: As soon as any record in the search cannot be fetched.
            NoSuitableTrackError: When the search runs out of candidates.
        """
        queue: deque[SpotifyId] = deque([track_id])
        visited: set[SpotifyId] = set()

        while queue:
            candidate_id = queue.popleft()
            if candidate_id in visited:
                continue
            visited.add(candidate_id)

            track = await self.metadata.fetch_track(candidate_id)
            if audio_file := track.best_vorbis_file():
                log.debug(
                    f"Track {track_id} resolved to {track.id} "
                    f"({audio_file.format.name})."
                )
                return track, audio_file

            log.debug(
                f"Track {candidate_id} has no Vorbis file, "
                f"queueing {len(track.alternatives)} alternatives."
            )
            queue.extend(track.alternatives)

        raise NoSuitableTrackError("cannot find a suitable track")
