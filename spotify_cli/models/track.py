"""
Catalog data structures shared by the resolvers and the download pipeline.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASE62_LENGTH = 22
GID_LENGTH = 16

_BASE62_RE = re.compile(rf"[0-9A-Za-z]{{{BASE62_LENGTH}}}")


class ResourceKind(str, Enum):
    """The four kinds of catalog resources a user can reference."""

    TRACK = "track"
    PLAYLIST = "playlist"
    ALBUM = "album"
    ARTIST = "artist"


@dataclass(frozen=True)
class SpotifyId:
    """
    An opaque catalog identifier in its 22-character base62 form.

    Equality and hashing only consider the base62 string, which makes the
    identifier the deduplication key for a whole run.
    """

    base62: str

    def __post_init__(self):
        if not isinstance(self.base62, str) or not _BASE62_RE.fullmatch(self.base62):
            raise ValueError(f"Invalid base62 id: {self.base62!r}")

    @classmethod
    def from_gid(cls, gid: bytes) -> "SpotifyId":
        """Builds an id from its 16-byte big-endian binary form."""
        if len(gid) != GID_LENGTH:
            raise ValueError(f"A gid must be {GID_LENGTH} bytes, got {len(gid)}")
        value = int.from_bytes(gid, "big")
        chars = []
        while value:
            value, rem = divmod(value, 62)
            chars.append(BASE62_ALPHABET[rem])
        return cls("".join(reversed(chars)).rjust(BASE62_LENGTH, "0"))

    @classmethod
    def from_hex(cls, hex_id: str) -> "SpotifyId":
        return cls.from_gid(bytes.fromhex(hex_id))

    @property
    def gid(self) -> bytes:
        value = 0
        for char in self.base62:
            value = value * 62 + BASE62_ALPHABET.index(char)
        return value.to_bytes(GID_LENGTH, "big")

    @property
    def hex(self) -> str:
        return self.gid.hex()

    def to_uri(self, kind: ResourceKind) -> str:
        return f"spotify:{kind.value}:{self.base62}"

    def __str__(self) -> str:
        return self.base62


@dataclass(frozen=True)
class Reference:
    """A classified user input: what kind of resource and which one."""

    kind: ResourceKind
    id: SpotifyId
    matched: str


class AudioFormat(Enum):
    """Encodings a track file can be offered in, keyed by the catalog's enum value."""

    OGG_VORBIS_96 = 0
    OGG_VORBIS_160 = 1
    OGG_VORBIS_320 = 2
    MP3_256 = 3
    MP3_320 = 4
    MP3_160 = 5
    MP3_96 = 6
    MP3_160_ENC = 7
    AAC_24 = 8
    AAC_48 = 9


# Highest Vorbis bitrate first; nothing else can be decrypted and tagged.
VORBIS_PREFERENCE = (
    AudioFormat.OGG_VORBIS_320,
    AudioFormat.OGG_VORBIS_160,
    AudioFormat.OGG_VORBIS_96,
)


@dataclass(frozen=True)
class AudioFile:
    """Handle to one encrypted audio blob of a track in one encoding."""

    file_id: bytes
    format: AudioFormat

    @property
    def hex(self) -> str:
        return self.file_id.hex()


@dataclass
class TrackRecord:
    """Track metadata as returned by the catalog, fetched fresh per resolution."""

    id: SpotifyId
    name: str
    album_name: str
    artists: list[str] = field(default_factory=list)
    files: dict[AudioFormat, AudioFile] = field(default_factory=dict)
    alternatives: list[SpotifyId] = field(default_factory=list)

    @property
    def main_artist(self) -> str:
        return self.artists[0] if self.artists else "Unknown Artist"

    def best_vorbis_file(self) -> AudioFile | None:
        """Returns the highest-bitrate Vorbis file, or None if there is none."""
        for audio_format in VORBIS_PREFERENCE:
            if audio_file := self.files.get(audio_format):
                return audio_file
        return None


@dataclass
class ArtistRecord:
    """An artist with album ids grouped the way the catalog returns them."""

    id: SpotifyId
    name: str = ""
    albums: list[list[SpotifyId]] = field(default_factory=list)
    singles: list[list[SpotifyId]] = field(default_factory=list)

    def iter_album_ids(self):
        """Yields album ids: every "albums" grouping, then every "singles" grouping."""
        for group in self.albums:
            yield from group
        for group in self.singles:
            yield from group
