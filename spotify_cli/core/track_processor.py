"""
Handles the processing of a single track, from key request to the tagged file on disk.
"""

import asyncio
import logging
from pathlib import Path

import aiofiles
from rich.markup import escape

from spotify_cli.api.protocols import KeyProvider, StreamProvider
from spotify_cli.exceptions import (
    AudioKeyError,
    DecryptionError,
    DirectoryCreationError,
    OutputWriteError,
    StreamError,
    TagWriteError,
)
from spotify_cli.media import AudioDecryptor, Tagger, strip_container_preamble
from spotify_cli.models.config import DownloadConfig
from spotify_cli.models.stats import TrackOutcome
from spotify_cli.models.track import AudioFile, SpotifyId, TrackRecord
from spotify_cli.utils.path import PathFormatter, create_dir

log = logging.getLogger(__name__)


class TrackProcessor:
    """
    Downloads, decrypts, tags and saves one resolved track.

    Per-track failures become a skipped outcome. A template without a folder
    and a folder that cannot be created are raised, since no other track
    could succeed either.
    """

    def __init__(
        self,
        config: DownloadConfig,
        keys: KeyProvider,
        streams: StreamProvider,
        decryptor: AudioDecryptor | None = None,
        tagger: Tagger | None = None,
    ):
        self.config = config
        self.keys = keys
        self.streams = streams
        self.decryptor = decryptor or AudioDecryptor()
        self.tagger = tagger or Tagger()
        self.path_formatter = PathFormatter(config.output_template)

    async def process_track(
        self, requested_id: SpotifyId, track: TrackRecord, audio_file: AudioFile
    ) -> TrackOutcome:
        """
        Manages the complete lifecycle of downloading and saving a track.

        ``requested_id`` is the id the user asked for; ``track`` may be an
        alternative with a different id.
        """
        final_path = self.path_formatter.format_path(track)

        if final_path.exists():
            log.info(
                f"   - [blue]note:[/blue] output file \"{escape(str(final_path))}\" "
                "already exists, skipping..."
            )
            return TrackOutcome.already_exists(final_path)

        try:
            create_dir(final_path.parent)
        except OSError as e:
            raise DirectoryCreationError(
                f"cannot create folders: {final_path.parent} ({e})"
            ) from e

        try:
            key = await self.keys.request_key(track.id, audio_file)
        except AudioKeyError as e:
            return self._skip(f"cannot get audio key: {e}", final_path)

        log.info("   - getting encrypted audio file")
        try:
            stream = await self.streams.open(audio_file)
        except StreamError as e:
            return self._skip(f"cannot get audio file: {e}", final_path)

        try:
            encrypted = await stream.read()
        except StreamError as e:
            return self._skip(f"cannot get track file audio: {e}", final_path)
        finally:
            await stream.close()

        log.info("   - decrypting audio")
        try:
            decrypted = await asyncio.to_thread(self.decryptor.decrypt, key, encrypted)
        except DecryptionError as e:
            return self._skip(f"cannot decrypt audio file: {e}", final_path)

        log.info("   - writing output file")
        try:
            tagged = await asyncio.to_thread(
                self.tagger.tag_track, strip_container_preamble(decrypted), track
            )
        except TagWriteError as e:
            return self._skip(str(e), final_path)

        try:
            await self._write_file(final_path, tagged)
        except OutputWriteError as e:
            return self._skip(str(e), final_path)

        log.info(f"   - wrote \"{escape(str(final_path))}\"")
        if requested_id != track.id:
            log.debug(f"Saved alternative {track.id} for requested track {requested_id}.")
        return TrackOutcome.written(final_path, size=len(tagged))

    @staticmethod
    async def _write_file(path: Path, data: bytes) -> None:
        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(data)
        except OSError as e:
            raise OutputWriteError(f"cannot write {path}: {e}") from e

    @staticmethod
    def _skip(reason: str, path: Path) -> TrackOutcome:
        log.warning(f"   - [yellow]warning:[/yellow] {escape(reason)}, skipping...")
        return TrackOutcome.skipped(reason, path)
