from dataclasses import dataclass
from datetime import datetime
from enum import Enum, unique
from pathlib import Path
from typing import Optional
from uuid import UUID

from mediajob.core.common.enums import FileType


@unique
class PersistStatus(str, Enum):
    SAVED = "saved"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class PersistOutcome:
    """
    Result of a persist call.
    SKIPPED is a degraded success (e.g. no permission), not an error.
    """
    status: PersistStatus
    path: Optional[Path] = None
    item_id: Optional[UUID] = None
    reason: Optional[str] = None

    @classmethod
    def saved(cls, path: Path, item_id: UUID) -> "PersistOutcome":
        return cls(PersistStatus.SAVED, path=path, item_id=item_id)

    @classmethod
    def skipped(cls, reason: str) -> "PersistOutcome":
        return cls(PersistStatus.SKIPPED, reason=reason)

    @property
    def is_saved(self) -> bool:
        return self.status == PersistStatus.SAVED


@dataclass
class LibraryItem:
    """
    Represents a physical file stored in the media library.
    """
    id: UUID
    path: Path
    hash: str
    size_bytes: int
    file_type: FileType
    created_at: datetime
