from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from ..types import JobStatus, RESTING_STATUSES


def utc_now():
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LogEntry:
    message: str
    timestamp: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class JobSnapshot:
    """
    Immutable, consistent view of a Job handed to the presentation layer.
    """
    source_uri: Optional[str]
    staged_path: Optional[Path]
    thumbnail_path: Optional[Path]
    output_path: Optional[Path]
    status: JobStatus
    log: Tuple[LogEntry, ...]

    @property
    def is_busy(self) -> bool:
        return self.status not in RESTING_STATUSES

    @property
    def log_lines(self) -> List[str]:
        return [entry.message for entry in self.log]


@dataclass
class Job:
    """
    The single mutable aggregate of a "pick -> operate on a video" session.
    Only JobController mutates it.
    """
    source_uri: Optional[str] = None
    staged_path: Optional[Path] = None
    thumbnail_path: Optional[Path] = None
    output_path: Optional[Path] = None
    status: JobStatus = JobStatus.IDLE
    log: List[LogEntry] = field(default_factory=lambda: [LogEntry("Log started")])

    @property
    def is_busy(self) -> bool:
        return self.status not in RESTING_STATUSES

    def clear_derived_paths(self) -> None:
        self.staged_path = None
        self.thumbnail_path = None
        self.output_path = None

    def snapshot(self) -> JobSnapshot:
        return JobSnapshot(
            source_uri=self.source_uri,
            staged_path=self.staged_path,
            thumbnail_path=self.thumbnail_path,
            output_path=self.output_path,
            status=self.status,
            log=tuple(self.log),
        )
