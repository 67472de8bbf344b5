"""
Async client over a librespot session, implementing the metadata, key and
stream collaborators of the download pipeline.
"""

import asyncio
import logging
from typing import Any, Callable, TypeVar

from librespot.metadata import AlbumId, ArtistId, PlaylistId, TrackId

from spotify_cli.exceptions import AudioKeyError, MetadataFetchError, StreamError
from spotify_cli.media.downloader import CdnStream, Downloader
from spotify_cli.models.track import (
    ArtistRecord,
    AudioFile,
    AudioFormat,
    ResourceKind,
    SpotifyId,
    TrackRecord,
)

from .auth import SpotifyAuthenticator

log = logging.getLogger(__name__)

P = TypeVar("P")
T = TypeVar("T")

# StorageResolveResponse.Result.CDN
_STORAGE_RESULT_CDN = 0


class SpotifyAPIClient:
    """
    Async facade over a librespot session.

    librespot is blocking, so every call runs in a worker thread. Protobuf
    messages are converted to the package's own records here.
    """

    def __init__(self, session: Any, downloader: Downloader | None = None):
        """
        Initializes the API client.

        Args:
            session: A connected librespot session.
            downloader: Fetches encrypted files from the CDN.
        """
        self.session = session
        self.downloader = downloader or Downloader()

    @classmethod
    async def connect(cls, username: str, password: str) -> "SpotifyAPIClient":
        """Logs in and returns a client bound to the new session."""
        session = await SpotifyAuthenticator().authenticate_with_credentials(
            username, password
        )
        return cls(session)

    async def close(self) -> None:
        """Gracefully closes the librespot session."""
        await asyncio.to_thread(self.session.close)

    async def _call(
        self, request: Callable[[], P], convert: Callable[[P], T], *, what: str
    ) -> T:
        """
        Runs a blocking request in a worker thread and converts its result.

        Building the request ids and converting the reply both happen inside
        the error wrapping, so a malformed record is a fetch failure too.
        """
        try:
            proto = await asyncio.to_thread(request)
            return convert(proto)
        except Exception as e:
            log.debug(f"API call for {what} failed: {e}")
            raise MetadataFetchError(f"{what}: {e}") from e

    # Metadata
    async def fetch_track(self, track_id: SpotifyId) -> TrackRecord:
        return await self._call(
            lambda: self.session.api().get_metadata_4_track(
                TrackId.from_base62(track_id.base62)
            ),
            self._track_from_proto,
            what=f"track {track_id}",
        )

    async def fetch_album(self, album_id: SpotifyId) -> list[SpotifyId]:
        return await self._call(
            lambda: self.session.api().get_metadata_4_album(
                AlbumId.from_base62(album_id.base62)
            ),
            lambda proto: [
                SpotifyId.from_gid(t.gid) for disc in proto.disc for t in disc.track
            ],
            what=f"album {album_id}",
        )

    async def fetch_playlist(self, playlist_id: SpotifyId) -> list[SpotifyId]:
        prefix = "spotify:track:"
        return await self._call(
            lambda: self.session.api().get_playlist(
                PlaylistId.from_uri(playlist_id.to_uri(ResourceKind.PLAYLIST))
            ),
            lambda proto: [
                SpotifyId(item.uri[len(prefix):])
                for item in proto.contents.items
                if item.uri.startswith(prefix)
            ],
            what=f"playlist {playlist_id}",
        )

    async def fetch_artist(self, artist_id: SpotifyId) -> ArtistRecord:
        return await self._call(
            lambda: self.session.api().get_metadata_4_artist(
                ArtistId.from_base62(artist_id.base62)
            ),
            lambda proto: ArtistRecord(
                id=artist_id,
                name=proto.name,
                albums=[
                    [SpotifyId.from_gid(a.gid) for a in group.album]
                    for group in proto.album_group
                ],
                singles=[
                    [SpotifyId.from_gid(a.gid) for a in group.album]
                    for group in proto.single_group
                ],
            ),
            what=f"artist {artist_id}",
        )

    @staticmethod
    def _track_from_proto(proto: Any) -> TrackRecord:
        files = {}
        for file in proto.file:
            try:
                audio_format = AudioFormat(file.format)
            except ValueError:
                continue
            files.setdefault(audio_format, AudioFile(bytes(file.file_id), audio_format))

        return TrackRecord(
            id=SpotifyId.from_gid(proto.gid),
            name=proto.name,
            album_name=proto.album.name,
            artists=[artist.name for artist in proto.artist],
            files=files,
            alternatives=[SpotifyId.from_gid(alt.gid) for alt in proto.alternative],
        )

    # Keys and streams
    async def request_key(self, track_id: SpotifyId, audio_file: AudioFile) -> bytes:
        try:
            return await asyncio.to_thread(
                self.session.audio_key().get_audio_key,
                track_id.gid,
                audio_file.file_id,
            )
        except Exception as e:
            raise AudioKeyError(str(e) or type(e).__name__) from e

    async def open(self, audio_file: AudioFile) -> CdnStream:
        try:
            response = await asyncio.to_thread(
                self.session.content_feeder().resolve_storage_interactive,
                audio_file.file_id,
                False,
            )
        except Exception as e:
            raise StreamError(f"cannot resolve storage for {audio_file.hex}: {e}") from e

        if response.result != _STORAGE_RESULT_CDN or not response.cdnurl:
            raise StreamError(f"file {audio_file.hex} is not available on the CDN")
        return CdnStream(response.cdnurl[0], self.downloader)
