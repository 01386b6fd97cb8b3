"""
Pure builders turning a pipeline intent into an engine Invocation.

Nothing here touches the filesystem or runs a process, so every builder
can be tested without ffmpeg installed.
"""

from pathlib import Path
from typing import List

from mediajob.core.common.enums import AudioPolicy, OperationKind
from ..domain.models import Invocation, TranscodeProfile

DEFAULT_PROFILE = TranscodeProfile()


def build_probe(local_path: Path, profile: TranscodeProfile = DEFAULT_PROFILE) -> Invocation:
    """Media property extraction. Declares no output; the engine returns the JSON 'format' section."""
    args = (
        "-v", "error",
        "-print_format", "json",
        "-show_format",
        str(local_path),
    )
    return Invocation(
        kind=OperationKind.PROBE,
        executable=profile.ffprobe_binary,
        args=args,
    )


def build_extract_frame(local_path: Path,
                        frame_index: int,
                        output_path: Path,
                        profile: TranscodeProfile = DEFAULT_PROFILE) -> Invocation:
    """
    Selects exactly the frame at zero-based `frame_index` and writes one still image.
    Whether the source has that many frames is an engine-time failure.
    """
    if isinstance(frame_index, bool) or not isinstance(frame_index, int) or frame_index < 0:
        raise ValueError(f"frame_index must be a non-negative integer, got {frame_index!r}")

    # -y: Overwrite output files without asking
    # select=eq(n\,N): the comma is escaped inside the filtergraph
    # -frames:v 1: Stop after the single selected frame
    args = (
        "-y",
        "-i", str(local_path),
        "-vf", f"select=eq(n\\,{frame_index})",
        "-frames:v", "1",
        str(output_path),
    )
    return Invocation(
        kind=OperationKind.EXTRACT_FRAME,
        executable=profile.ffmpeg_binary,
        args=args,
        output_path=Path(output_path),
        overwrite=True,
    )


def build_transcode(local_path: Path,
                    target_height: int,
                    output_path: Path,
                    profile: TranscodeProfile = DEFAULT_PROFILE) -> Invocation:
    """
    Rescales to `target_height` keeping aspect ratio and re-encodes the video stream.
    Audio is copied or re-encoded according to the profile's audio policy.
    """
    if isinstance(target_height, bool) or not isinstance(target_height, int) or target_height <= 0:
        raise ValueError(f"target_height must be a positive integer, got {target_height!r}")

    # scale=-2:H: width follows the aspect ratio, rounded to an even value
    args = (
        "-y",
        "-i", str(local_path),
        "-vf", f"scale=-2:{target_height}",
        "-c:v", profile.video_codec,
        "-crf", str(profile.crf),
        "-preset", profile.preset,
        *_audio_args(profile),
        str(output_path),
    )
    return Invocation(
        kind=OperationKind.TRANSCODE,
        executable=profile.ffmpeg_binary,
        args=args,
        output_path=Path(output_path),
        overwrite=True,
    )


def _audio_args(profile: TranscodeProfile) -> List[str]:
    if profile.audio_policy == AudioPolicy.COPY:
        return ["-c:a", "copy"]
    return ["-c:a", "aac", "-b:a", profile.audio_bitrate]
