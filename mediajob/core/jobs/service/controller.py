# File: mediajob/core/jobs/service/controller.py

import json
import logging
from pathlib import Path
from threading import RLock
from typing import Any, Callable, List, Optional

from mediajob.core.config.settings import settings
from mediajob.core.common.exceptions import EngineError, PersistError, ResolutionError
from mediajob.features.source_resolution.domain.interfaces import IPathResolver
from mediajob.features.source_resolution.data.staging_resolver import StagingPathResolver
from mediajob.features.source_selection.domain.interfaces import ISourceSelector
from mediajob.features.source_selection.domain.models import SourceResultKind
from mediajob.features.storage.domain.interfaces import IPersister
from mediajob.features.storage.service.api import MediaLibraryPersister
from mediajob.features.transcoding.domain.interfaces import ITranscodingEngine
from mediajob.features.transcoding.domain.models import EngineResult, Invocation, TranscodeProfile
from mediajob.features.transcoding.data.command_builder import (
    DEFAULT_PROFILE, build_probe, build_extract_frame, build_transcode
)
from mediajob.features.transcoding.data.ffmpeg_adapter import FFmpegEngine

from ..domain.models import Job, JobSnapshot, LogEntry
from ..types import JobStatus

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[JobSnapshot], None]


class JobController:
    """
    The state machine of the media-job pipeline.

    Owns the Job and sequences resolver -> command builder -> engine -> persister.
    Every collaborator failure is caught here and becomes a FAILED transition
    plus a log line; nothing is re-raised to the caller.

    Requests arriving while the Job is busy are ignored (return False).
    External calls run outside the lock, so snapshot() never blocks on the engine.
    """

    def __init__(self,
                 resolver: IPathResolver = None,
                 engine: ITranscodingEngine = None,
                 persister: IPersister = None,
                 caches_dir: Path = None,
                 profile: TranscodeProfile = DEFAULT_PROFILE):
        self.resolver = resolver or StagingPathResolver()
        self.engine = engine or FFmpegEngine()
        self.persister = persister or MediaLibraryPersister()
        self.caches_dir = Path(caches_dir or settings.CACHES_DIR)
        self.profile = profile

        self._job = Job()
        self._lock = RLock()
        self._listeners: List[SnapshotListener] = []

    # --- Observation ---

    def snapshot(self) -> JobSnapshot:
        with self._lock:
            return self._job.snapshot()

    def add_listener(self, listener: SnapshotListener) -> None:
        """Registers a callback receiving a snapshot after every transition."""
        self._listeners.append(listener)

    # --- Source selection ---

    def pick_source(self, selector: ISourceSelector) -> bool:
        """
        Asks the selector for a source. Cancellation and a reported selector
        failure return the Job to the status it had before picking; a selector
        that raises moves it to FAILED.
        """
        with self._lock:
            if self._reject_if_busy("pick"):
                return False
            previous = self._job.status
            self._transition(JobStatus.PICKING, "Picking a video")

        try:
            result = selector.pick_source()
        except Exception as e:
            logger.exception(f"Source selector failed: {e}")
            with self._lock:
                self._transition(JobStatus.FAILED, f"Video selection failed: {e}")
            return True

        if result.kind == SourceResultKind.PICKED:
            with self._lock:
                self._begin_resolution(result.uri)
            self._resolve(result.uri)
        elif result.kind == SourceResultKind.CANCELLED:
            with self._lock:
                self._transition(previous, "Video selection cancelled")
        else:
            with self._lock:
                self._transition(previous, f"Video selection failed: {result.message}")
        return True

    def select_source(self, source_uri: Optional[str]) -> bool:
        """
        The "source picked" event: clears every derived path, then resolves.
        """
        with self._lock:
            if self._reject_if_busy("select source"):
                return False
            self._begin_resolution(source_uri)
        self._resolve(source_uri)
        return True

    def _begin_resolution(self, source_uri: Optional[str]) -> None:
        self._job.source_uri = source_uri
        self._job.clear_derived_paths()
        self._transition(JobStatus.RESOLVING, f"Video uri: {source_uri}")

    def _resolve(self, source_uri: Optional[str]) -> None:
        try:
            staged_path = self.resolver.resolve(source_uri)
        except ResolutionError as e:
            with self._lock:
                self._transition(JobStatus.FAILED, f"Resolution failed: {e}")
            return
        except Exception as e:
            logger.exception(f"Unexpected error resolving {source_uri!r}")
            with self._lock:
                self._transition(JobStatus.FAILED, f"Resolution failed: {e}")
            return

        with self._lock:
            self._job.staged_path = staged_path
            self._transition(JobStatus.IDLE, f"Video path: {staged_path}")

    # --- Operations ---

    def request_probe(self) -> bool:
        with self._lock:
            if self._reject_operation("probe"):
                return False
            invocation = build_probe(self._job.staged_path, self.profile)
            self._transition(JobStatus.PROBING, f"Probing {self._job.staged_path}")

        result = self._execute(invocation)

        with self._lock:
            if not result.succeeded:
                self._fail("Video info", result)
                return True

            properties = result.structured_output or {}
            if not properties:
                self._transition(JobStatus.IDLE, "Video info: no properties reported")
                return True

            lines = [f"{key}: {self._display_value(value)}" for key, value in properties.items()]
            self._transition(JobStatus.IDLE, *lines)
        return True

    def request_extract_frame(self, frame_index: int = settings.DEFAULT_FRAME_INDEX) -> bool:
        with self._lock:
            if self._reject_operation("extract frame"):
                return False
            output_path = self.caches_dir / settings.THUMBNAIL_FILENAME
            invocation = build_extract_frame(self._job.staged_path, frame_index, output_path, self.profile)
            self._transition(JobStatus.EXTRACTING_FRAME, f"Frame result path: {output_path}")

        result = self._execute(invocation)

        with self._lock:
            if not result.succeeded:
                # The previous thumbnail was pre-cleared by the engine
                self._job.thumbnail_path = None
                self._fail("Frame", result)
                return True

            self._job.thumbnail_path = output_path
            self._transition(JobStatus.READY, f"Frame result: {result.status_code}")
        return True

    def request_transcode(self, target_height: int = settings.DEFAULT_TARGET_HEIGHT) -> bool:
        with self._lock:
            if self._reject_operation("transcode"):
                return False
            output_path = self.caches_dir / settings.TRANSCODE_FILENAME
            invocation = build_transcode(self._job.staged_path, target_height, output_path, self.profile)
            self._transition(JobStatus.TRANSCODING, f"Transcode result path: {output_path}")

        result = self._execute(invocation)

        with self._lock:
            if not result.succeeded:
                self._fail("Transcode", result)
                return True
            self._transition(JobStatus.PERSISTING, f"Transcode result: {result.status_code}")

        self._persist(output_path)
        return True

    def _persist(self, artifact: Path) -> None:
        try:
            outcome = self.persister.persist(artifact)
        except PersistError as e:
            with self._lock:
                self._transition(JobStatus.FAILED, f"Saving to media library failed: {e}")
            return
        except Exception as e:
            logger.exception(f"Unexpected error persisting {artifact}")
            with self._lock:
                self._transition(JobStatus.FAILED, f"Saving to media library failed: {e}")
            return

        with self._lock:
            if outcome.is_saved:
                self._job.output_path = outcome.path
                self._transition(JobStatus.READY, f"Saved to media library: {outcome.path}")
            else:
                self._transition(JobStatus.READY, f"Persist skipped: {outcome.reason}")

    # --- Internals ---

    def _execute(self, invocation: Invocation) -> EngineResult:
        try:
            return self.engine.execute(invocation)
        except EngineError as e:
            return EngineResult(status_code=e.status_code, stderr=str(e))
        except Exception as e:
            logger.exception(f"Unexpected engine error running {invocation.kind.value}")
            return EngineResult(status_code=None, stderr=f"{type(e).__name__}: {e}")

    def _fail(self, label: str, result: EngineResult) -> None:
        lines = [f"{label} result: {result.status_code}"]
        if result.stderr.strip():
            lines.append(f"{label} error: {result.stderr.strip().splitlines()[-1]}")
        self._transition(JobStatus.FAILED, *lines)

    def _reject_if_busy(self, request: str) -> bool:
        if self._job.is_busy:
            logger.debug(f"Ignoring '{request}' request while {self._job.status.value}")
            return True
        return False

    def _reject_operation(self, request: str) -> bool:
        if self._reject_if_busy(request):
            return True
        if self._job.staged_path is None:
            logger.debug(f"Ignoring '{request}' request: no staged video")
            return True
        return False

    def _transition(self, status: JobStatus, *messages: str) -> None:
        """Applies a status change with its log lines, then notifies listeners."""
        self._job.status = status
        for message in messages:
            logger.info(f"[{status.value}] {message}")
            self._job.log.append(LogEntry(message))

        snapshot = self._job.snapshot()
        for listener in self._listeners:
            try:
                listener(snapshot)
            except Exception:
                # A broken observer must not leave the Job stuck in a busy status
                logger.exception(f"Snapshot listener {listener!r} failed")

    @staticmethod
    def _display_value(value: Any) -> str:
        if isinstance(value, str):
            return value
        return json.dumps(value, default=str)
