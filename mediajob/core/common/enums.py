# File: mediajob/core/common/enums.py

from enum import Enum, unique

@unique
class FileType(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"
    IMAGE = "image"
    UNKNOWN = "unknown"

@unique
class OperationKind(str, Enum):
    PROBE = "probe"
    EXTRACT_FRAME = "extract_frame"
    TRANSCODE = "transcode"

@unique
class AudioPolicy(str, Enum):
    COPY = "copy"
    REENCODE = "reencode"
