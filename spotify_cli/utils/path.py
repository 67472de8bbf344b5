"""
Utilities for deriving output paths from the user template.
"""

import os
from pathlib import Path

from pathvalidate import sanitize_filepath

from spotify_cli.exceptions import PathTemplateError
from spotify_cli.models.track import TrackRecord

OUTPUT_EXTENSION = "ogg"


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


class PathFormatter:
    """
    Formats an output path template string using track metadata.

    Placeholders: ``{author}`` (first artist), ``{album}``, ``{name}`` (with
    path separators replaced by spaces) and ``{ext}``.
    """

    def __init__(self, template: str) -> None:
        self.template = template

    def format_path(self, track: TrackRecord, file_extension: str = OUTPUT_EXTENSION) -> Path:
        """
        Generates the destination path of a track from the template.

        Raises:
            PathTemplateError: If the substituted template has no folder part.
        """
        formatted_str = self.template
        for placeholder, value in self._get_template_vars(track, file_extension).items():
            formatted_str = formatted_str.replace(placeholder, value)

        if not any(sep in formatted_str for sep in {"/", os.sep}):
            raise PathTemplateError(
                f"Invalid format string '{self.template}': it must contain a folder."
            )
        return Path(sanitize_filepath(formatted_str, platform="auto"))

    @staticmethod
    def _get_template_vars(track: TrackRecord, ext: str) -> dict[str, str]:
        """Builds the placeholder substitutions for one track."""
        return {
            "{author}": track.main_artist,
            "{album}": track.album_name,
            "{name}": track.name.replace("/", " ").replace(os.sep, " "),
            "{ext}": ext,
        }
