"""
Data Models Layer.

This package contains the catalog records, the Pydantic run configuration,
and the per-track outcome and statistics structures.
"""

from .config import DownloadConfig
from .stats import DownloadStats, TrackOutcome, TrackStatus
from .track import (
    ArtistRecord,
    AudioFile,
    AudioFormat,
    Reference,
    ResourceKind,
    SpotifyId,
    TrackRecord,
)

__all__ = [
    "ArtistRecord",
    "AudioFile",
    "AudioFormat",
    "DownloadConfig",
    "DownloadStats",
    "Reference",
    "ResourceKind",
    "SpotifyId",
    "TrackOutcome",
    "TrackRecord",
    "TrackStatus",
]
