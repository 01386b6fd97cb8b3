import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from mediajob.core.common.enums import AudioPolicy, OperationKind
from mediajob.core.config.settings import settings


@dataclass(frozen=True)
class TranscodeProfile:
    """
    Engine binaries plus the fixed quality/preset tradeoff used for transcodes.
    Defaults come from settings so builders stay pure functions of their arguments.
    """
    ffmpeg_binary: str = settings.FFMPEG_BINARY
    ffprobe_binary: str = settings.FFPROBE_BINARY
    video_codec: str = settings.VIDEO_CODEC
    crf: int = settings.CRF
    preset: str = settings.PRESET
    audio_policy: AudioPolicy = AudioPolicy(settings.AUDIO_POLICY)
    audio_bitrate: str = settings.AUDIO_BITRATE


@dataclass(frozen=True)
class Invocation:
    """
    A single, fully-specified request to the transcoding engine.
    """
    kind: OperationKind
    executable: str
    args: Tuple[str, ...]
    output_path: Optional[Path] = None
    overwrite: bool = False

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.args]

    @property
    def command_line(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class EngineResult:
    status_code: Any
    structured_output: Optional[Dict[str, Any]] = None
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        # Only an integer zero counts; bools and None are erroneous statuses
        return type(self.status_code) is int and self.status_code == 0
