"""
Interfaces of the collaborators the resolvers and the download pipeline depend on.

Any object with matching async methods can be used; the librespot-backed
client in ``spotify_cli.api.client`` implements all of them.
"""

from typing import Protocol, runtime_checkable

from spotify_cli.models.track import ArtistRecord, AudioFile, SpotifyId, TrackRecord


@runtime_checkable
class MetadataProvider(Protocol):
    """Looks up catalog records. Every method raises MetadataFetchError on failure."""

    async def fetch_track(self, track_id: SpotifyId) -> TrackRecord: ...

    async def fetch_playlist(self, playlist_id: SpotifyId) -> list[SpotifyId]: ...

    async def fetch_album(self, album_id: SpotifyId) -> list[SpotifyId]: ...

    async def fetch_artist(self, artist_id: SpotifyId) -> ArtistRecord: ...


@runtime_checkable
class KeyProvider(Protocol):
    async def request_key(self, track_id: SpotifyId, audio_file: AudioFile) -> bytes:
        """Returns the decryption key of a file. Raises AudioKeyError on failure."""
        ...


@runtime_checkable
class EncryptedStream(Protocol):
    async def read(self) -> bytes:
        """Reads the whole encrypted file. Raises StreamError on failure."""
        ...

    async def close(self) -> None: ...


@runtime_checkable
class StreamProvider(Protocol):
    async def open(self, audio_file: AudioFile) -> EncryptedStream:
        """Opens the encrypted byte stream of a file. Raises StreamError on failure."""
        ...
