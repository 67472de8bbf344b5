"""Test configuration and fixtures"""

import struct

import pytest
from mutagen.ogg import OggPage

from spotify_cli.exceptions import AudioKeyError, MetadataFetchError, StreamError
from spotify_cli.media.decryptor import AudioDecryptor
from spotify_cli.media.tagger import CONTAINER_PREAMBLE_SIZE
from spotify_cli.models.track import (
    ArtistRecord,
    AudioFile,
    AudioFormat,
    SpotifyId,
    TrackRecord,
)

AUDIO_KEY = bytes(range(16))


def sid(name: str) -> SpotifyId:
    """Builds a valid 22-character id from a short readable name."""
    return SpotifyId(name.rjust(22, "0"))


def _vorbis_comment_packet(vendor: str, comments: list[str]) -> bytes:
    data = [b"\x03vorbis"]
    vendor_bytes = vendor.encode("utf-8")
    data.append(struct.pack("<I", len(vendor_bytes)) + vendor_bytes)
    data.append(struct.pack("<I", len(comments)))
    for comment in comments:
        encoded = comment.encode("utf-8")
        data.append(struct.pack("<I", len(encoded)) + encoded)
    data.append(b"\x01")
    return b"".join(data)


def make_ogg_vorbis(comments: list[str] | None = None, serial: int = 1234) -> bytes:
    """
    Builds a minimal Ogg Vorbis stream: identification header, comment and
    setup headers, and one final audio page.
    """
    ident = b"\x01vorbis" + struct.pack("<IBIiiiBB", 0, 2, 44100, 0, 128000, 0, 0xB8, 1)
    comment = _vorbis_comment_packet("Xiph.Org libVorbis", comments or ["TITLE=old"])
    setup = b"\x05vorbis" + b"\x00" * 32

    first = OggPage()
    first.serial = serial
    first.sequence = 0
    first.first = True
    first.packets = [ident]

    headers = OggPage()
    headers.serial = serial
    headers.sequence = 1
    headers.packets = [comment, setup]

    audio = OggPage()
    audio.serial = serial
    audio.sequence = 2
    audio.position = 44100
    audio.last = True
    audio.packets = [b"\x2a" * 64]

    return first.write() + headers.write() + audio.write()


def make_spotify_payload(ogg: bytes | None = None) -> bytes:
    """Prefixes an Ogg stream with the proprietary preamble."""
    return b"\xff" * CONTAINER_PREAMBLE_SIZE + (ogg or make_ogg_vorbis())


def encrypt(key: bytes, data: bytes) -> bytes:
    # CTR mode: encryption and decryption are the same operation.
    return AudioDecryptor().decrypt(key, data)


class FakeStream:
    def __init__(self, data: bytes | None, fail_read: bool = False):
        self.data = data
        self.fail_read = fail_read
        self.closed = False

    async def read(self) -> bytes:
        if self.fail_read:
            raise StreamError("connection reset")
        return self.data

    async def close(self) -> None:
        self.closed = True


class FakeCatalog:
    """In-memory stand-in for the metadata, key and stream collaborators."""

    def __init__(self):
        self.tracks: dict[SpotifyId, TrackRecord] = {}
        self.playlists: dict[SpotifyId, list[SpotifyId]] = {}
        self.albums: dict[SpotifyId, list[SpotifyId]] = {}
        self.artists: dict[SpotifyId, ArtistRecord] = {}
        self.keys: dict[bytes, bytes] = {}
        self.files: dict[bytes, bytes] = {}
        self.unreadable: set[bytes] = set()
        self.fetched: list[tuple[str, SpotifyId]] = []
        self.streams: list[FakeStream] = []
        self.closed = False

    # Metadata
    async def fetch_track(self, track_id):
        self.fetched.append(("track", track_id))
        if track_id not in self.tracks:
            raise MetadataFetchError(f"track {track_id} not found")
        return self.tracks[track_id]

    async def fetch_playlist(self, playlist_id):
        self.fetched.append(("playlist", playlist_id))
        if playlist_id not in self.playlists:
            raise MetadataFetchError(f"playlist {playlist_id} not found")
        return list(self.playlists[playlist_id])

    async def fetch_album(self, album_id):
        self.fetched.append(("album", album_id))
        if album_id not in self.albums:
            raise MetadataFetchError(f"album {album_id} not found")
        return list(self.albums[album_id])

    async def fetch_artist(self, artist_id):
        self.fetched.append(("artist", artist_id))
        if artist_id not in self.artists:
            raise MetadataFetchError(f"artist {artist_id} not found")
        return self.artists[artist_id]

    # Keys and streams
    async def request_key(self, track_id, audio_file):
        if audio_file.file_id not in self.keys:
            raise AudioKeyError("key request denied")
        return self.keys[audio_file.file_id]

    async def open(self, audio_file):
        if audio_file.file_id not in self.files:
            raise StreamError("file not on CDN")
        stream = FakeStream(
            self.files[audio_file.file_id],
            fail_read=audio_file.file_id in self.unreadable,
        )
        self.streams.append(stream)
        return stream

    async def close(self):
        self.closed = True

    # Builders
    def add_track(
        self,
        name: str,
        formats: tuple[AudioFormat, ...] = (AudioFormat.OGG_VORBIS_160,),
        artists: list[str] | None = None,
        album: str = "Album",
        alternatives: list[SpotifyId] | None = None,
        title: str | None = None,
        track_id: SpotifyId | None = None,
    ) -> TrackRecord:
        """Registers a track whose files are downloadable and decryptable."""
        track_id = track_id or sid(name)
        files = {}
        for audio_format in formats:
            file_id = f"{track_id.base62}-{audio_format.name}".encode()
            files[audio_format] = AudioFile(file_id, audio_format)
            self.keys[file_id] = AUDIO_KEY
            self.files[file_id] = encrypt(AUDIO_KEY, make_spotify_payload())
        track = TrackRecord(
            id=track_id,
            name=title or name,
            album_name=album,
            artists=artists if artists is not None else ["Artist"],
            files=files,
            alternatives=alternatives or [],
        )
        self.tracks[track_id] = track
        return track


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def ogg_stream():
    return make_ogg_vorbis()
