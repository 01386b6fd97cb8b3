import json
import subprocess
import logging
from typing import Any, Dict

from mediajob.core.common.enums import OperationKind
from mediajob.core.common.exceptions import EngineError
from mediajob.core.shared_types import MediaFile
from ..domain.interfaces import ITranscodingEngine
from ..domain.models import Invocation, EngineResult

logger = logging.getLogger(__name__)

class FFmpegEngine(ITranscodingEngine):
    """
    Concrete implementation of ITranscodingEngine running ffmpeg/ffprobe as subprocesses.
    Reports the exit status as-is; interpreting it is the caller's business.
    """

    def execute(self, invocation: Invocation) -> EngineResult:
        # 1. Pre-clear the declared output so a stale artifact is never reused
        if invocation.output_path is not None:
            output = MediaFile(invocation.output_path)
            try:
                output.ensure_parent_dir()
                if invocation.overwrite:
                    output.clear()
            except OSError as e:
                logger.error(f"Could not prepare output {invocation.output_path}: {e}")
                raise EngineError(f"Output path is not writable: {e}") from e

        logger.info(f"Executing {invocation.kind.value}: {invocation.command_line}")

        # 2. Execute
        # errors="replace": stderr may echo metadata or file names that are not UTF-8
        try:
            completed = subprocess.run(
                invocation.argv,
                capture_output=True,
                text=True,
                errors="replace"
            )
        except OSError as e:
            logger.error(f"Could not start {invocation.executable}: {e}")
            raise EngineError(f"Engine could not be started: {e}") from e

        if completed.returncode != 0:
            error_message = completed.stderr.strip() if completed.stderr else "Unknown FFmpeg error"
            logger.error(f"FFmpeg {invocation.kind.value} failed ({completed.returncode}). STDERR: {error_message}")
            return EngineResult(status_code=completed.returncode, stderr=completed.stderr or "")

        # 3. Probe results carry structured output on stdout
        structured = None
        if invocation.kind == OperationKind.PROBE:
            structured = self._parse_probe_output(completed.stdout)

        return EngineResult(
            status_code=completed.returncode,
            structured_output=structured,
            stderr=completed.stderr or ""
        )

    @staticmethod
    def _parse_probe_output(stdout: str) -> Dict[str, Any]:
        """Extracts the 'format' section (the media properties) from ffprobe JSON."""
        try:
            payload = json.loads(stdout or "{}")
        except json.JSONDecodeError as e:
            logger.error(f"Unreadable ffprobe output: {stdout[:200]!r}")
            raise EngineError(f"Probe output is not valid JSON: {e}") from e

        properties = payload.get("format", {}) if isinstance(payload, dict) else None
        if not isinstance(properties, dict):
            logger.error(f"Unexpected ffprobe output shape: {stdout[:200]!r}")
            raise EngineError("Probe output has no 'format' object")
        return properties
