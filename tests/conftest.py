# File: tests/conftest.py

import pytest
import os
import sys
import shutil
import subprocess
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import database_exists, create_database

# 1. Add project root to path
sys.path.append(os.getcwd())

from mediajob.core.database.connection import init_db
from mediajob.features.storage.domain.interfaces import IPersister, IPermissionGate
from mediajob.features.storage.domain.models import PersistOutcome
from mediajob.features.transcoding.domain.interfaces import ITranscodingEngine
from mediajob.features.transcoding.domain.models import EngineResult

FFMPEG_AVAILABLE = shutil.which("ffmpeg") is not None and shutil.which("ffprobe") is not None


class FakeEngine(ITranscodingEngine):
    """
    Stands in for ffmpeg. Records every invocation and, on success,
    writes a small file at the declared output path.
    """

    def __init__(self):
        self.status_code = 0
        self.structured_output = None
        self.stderr = ""
        self.raises = None
        self.on_execute = None
        self.invocations = []

    def execute(self, invocation):
        self.invocations.append(invocation)
        if self.on_execute:
            self.on_execute(invocation)
        if self.raises:
            raise self.raises
        if invocation.output_path is not None and self.status_code == 0:
            invocation.output_path.parent.mkdir(parents=True, exist_ok=True)
            invocation.output_path.write_bytes(f"run-{len(self.invocations)}".encode())
        return EngineResult(
            status_code=self.status_code,
            structured_output=self.structured_output,
            stderr=self.stderr
        )


class FakePersister(IPersister):
    def __init__(self):
        self.outcome = None
        self.error = None
        self.calls = []

    def persist(self, path):
        self.calls.append(path)
        if self.error:
            raise self.error
        return self.outcome or PersistOutcome.skipped("no permission")


class CountingGate(IPermissionGate):
    def __init__(self, granted: bool):
        self.granted = granted
        self.calls = 0

    def ensure_write_permission(self) -> bool:
        self.calls += 1
        return self.granted


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def fake_persister():
    return FakePersister()


@pytest.fixture
def counting_gate():
    """Factory: counting_gate(granted) -> CountingGate"""
    return CountingGate


@pytest.fixture
def staging_dir(tmp_path):
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def caches_dir(tmp_path):
    path = tmp_path / "caches"
    path.mkdir()
    return path


@pytest.fixture
def library_session_factory(tmp_path):
    """
    Provides a sessionmaker bound to a throwaway SQLite catalog.
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'library.db'}")
    if not database_exists(engine.url):
        create_database(engine.url)
    init_db(bind=engine)

    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)

    engine.dispose()


@pytest.fixture(scope="module")
def sample_video(tmp_path_factory):
    """
    Creates a synthetic 1-second video (30 frames, with audio) using FFmpeg.
    """
    if not FFMPEG_AVAILABLE:
        pytest.skip("ffmpeg/ffprobe not installed")

    path = tmp_path_factory.mktemp("media") / "sample.mp4"
    cmd = [
        "ffmpeg", "-y",
        "-f", "lavfi", "-i", "testsrc=duration=1:size=320x240:rate=30",
        "-f", "lavfi", "-i", "sine=frequency=1000:duration=1",
        "-c:v", "libx264", "-c:a", "aac",
        "-map", "0:v", "-map", "1:a",
        str(path)
    ]
    # We use subprocess directly here so the TEST SETUP is independent of our app code.
    subprocess.run(cmd, check=True, capture_output=True)
    return path
