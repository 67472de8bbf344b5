"""
Per-track outcomes and the tally of a download run.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class TrackStatus(str, Enum):
    WRITTEN = "written"
    ALREADY_EXISTS = "already_exists"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class TrackOutcome:
    """What happened to one track in the download pipeline."""

    status: TrackStatus
    path: Path | None = None
    reason: str | None = None
    size: int = 0

    @classmethod
    def written(cls, path: Path, size: int = 0) -> "TrackOutcome":
        return cls(TrackStatus.WRITTEN, path, size=size)

    @classmethod
    def already_exists(cls, path: Path) -> "TrackOutcome":
        return cls(TrackStatus.ALREADY_EXISTS, path)

    @classmethod
    def skipped(cls, reason: str, path: Path | None = None) -> "TrackOutcome":
        return cls(TrackStatus.SKIPPED, path, reason)


@dataclass
class DownloadStats:
    """Tracks statistics for a download run."""

    total_tracks: int = 0
    tracks_downloaded: int = 0
    tracks_skipped_exists: int = 0
    total_size_downloaded: int = 0
    outcomes: list[TrackOutcome] = field(default_factory=list, repr=False)

    def record(self, outcome: TrackOutcome) -> None:
        """Aggregates the outcome of one processed track."""
        self.outcomes.append(outcome)
        if outcome.status is TrackStatus.WRITTEN:
            self.tracks_downloaded += 1
            self.total_size_downloaded += outcome.size
        elif outcome.status is TrackStatus.ALREADY_EXISTS:
            self.tracks_skipped_exists += 1

    @property
    def tracks_failed(self) -> int:
        """
        Every track that was neither written nor found on disk counts as an
        error, whether it failed during resolution or in the pipeline.
        """
        return self.total_tracks - self.tracks_downloaded - self.tracks_skipped_exists
