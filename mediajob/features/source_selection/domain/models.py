from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional


@unique
class SourceResultKind(str, Enum):
    PICKED = "picked"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class SourceResult:
    """
    Outcome of asking the user for a source.
    A PICKED result may still carry an empty uri; resolution decides what that means.
    """
    kind: SourceResultKind
    uri: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def picked(cls, uri: Optional[str]) -> "SourceResult":
        return cls(SourceResultKind.PICKED, uri=uri)

    @classmethod
    def cancelled(cls) -> "SourceResult":
        return cls(SourceResultKind.CANCELLED)

    @classmethod
    def failed(cls, message: str) -> "SourceResult":
        return cls(SourceResultKind.FAILED, message=message)
