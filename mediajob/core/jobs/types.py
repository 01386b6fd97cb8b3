from enum import Enum

class JobStatus(str, Enum):
    IDLE = "idle"
    PICKING = "picking"
    RESOLVING = "resolving"
    PROBING = "probing"
    EXTRACTING_FRAME = "extracting_frame"
    TRANSCODING = "transcoding"
    PERSISTING = "persisting"
    READY = "ready"
    FAILED = "failed"

# Statuses from which a new operation may start
RESTING_STATUSES = frozenset({JobStatus.IDLE, JobStatus.READY, JobStatus.FAILED})
