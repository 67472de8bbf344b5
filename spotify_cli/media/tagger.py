"""
Builds Vorbis comment headers from catalog metadata and splices them into
decrypted Ogg containers.
"""

import logging
from dataclasses import dataclass, field
from io import BytesIO

from mutagen import MutagenError
from mutagen.oggvorbis import OggVorbis

from spotify_cli.exceptions import TagWriteError
from spotify_cli.models.track import TrackRecord

log = logging.getLogger(__name__)

# --- Constants ---
CONTAINER_PREAMBLE_SIZE = 0xA7  # proprietary header in front of the first Ogg page
COMMENT_VENDOR = "Ogg"


def strip_container_preamble(decrypted: bytes) -> bytes:
    """Drops the fixed-size preamble that precedes the Ogg payload."""
    return decrypted[CONTAINER_PREAMBLE_SIZE:]


@dataclass
class CommentHeader:
    """A Vorbis comment header: a vendor string and ordered, repeatable tags."""

    vendor: str = COMMENT_VENDOR
    tags: list[tuple[str, str]] = field(default_factory=list)

    def add_tag(self, key: str, value: str) -> None:
        self.tags.append((key, value))


class Tagger:
    """Writes track metadata into Ogg Vorbis comment headers."""

    def __init__(self, vendor: str = COMMENT_VENDOR):
        self.vendor = vendor

    def build_comment_header(self, track: TrackRecord) -> CommentHeader:
        """
        Creates a header with one title, one album and one artist tag per
        credited artist, in credit order.
        """
        header = CommentHeader(vendor=self.vendor)
        header.add_tag("title", track.name)
        header.add_tag("album", track.album_name)
        for artist in track.artists:
            header.add_tag("artist", artist)
        return header

    def splice(self, container: bytes, header: CommentHeader) -> bytes:
        """
        Replaces the comment header of an in-memory Ogg Vorbis stream.

        Every existing comment is dropped. Returns the rewritten stream.

        Raises:
            TagWriteError: If the bytes are not a parseable Ogg Vorbis stream.
        """
        buffer = BytesIO(container)
        try:
            audio = OggVorbis(buffer)
            audio.tags.clear()
            audio.tags.vendor = header.vendor
            for key, value in header.tags:
                audio.tags.append((key, value))
            audio.save(buffer)
        except (MutagenError, OSError, ValueError) as e:
            raise TagWriteError(f"cannot rewrite comment header: {e}") from e

        log.debug(f"Wrote {len(header.tags)} comments (vendor '{header.vendor}').")
        return buffer.getvalue()

    def tag_track(self, container: bytes, track: TrackRecord) -> bytes:
        """Builds the header for a track and splices it into the container."""
        return self.splice(container, self.build_comment_header(track))
