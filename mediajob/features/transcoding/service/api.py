from pathlib import Path
from typing import Any, Dict

from mediajob.core.common.exceptions import EngineError
from ..data.command_builder import build_probe, build_extract_frame, build_transcode
from ..data.ffmpeg_adapter import FFmpegEngine
from ..domain.models import Invocation

def probe_media(video_path: str) -> Dict[str, Any]:
    """
    Standalone API: Returns the media properties of a video file.
    Does NOT touch any Job state.
    """
    result = _run(build_probe(Path(video_path)))
    return result.structured_output or {}

def extract_frame(video_path: str, frame_index: int, dest_path: str) -> Path:
    """
    Standalone API: Writes the frame at `frame_index` to `dest_path`.
    """
    invocation = build_extract_frame(Path(video_path), frame_index, Path(dest_path))
    _run(invocation)
    return invocation.output_path

def transcode_video(video_path: str, target_height: int, dest_path: str) -> Path:
    """
    Standalone API: Rescales and re-encodes `video_path` into `dest_path`.
    """
    invocation = build_transcode(Path(video_path), target_height, Path(dest_path))
    _run(invocation)
    return invocation.output_path

def _run(invocation: Invocation):
    result = FFmpegEngine().execute(invocation)
    if not result.succeeded:
        raise EngineError(
            f"{invocation.kind.value} failed with status {result.status_code}: {result.stderr.strip()}",
            status_code=result.status_code
        )
    return result
