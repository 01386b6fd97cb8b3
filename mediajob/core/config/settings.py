# File: mediajob/core/config/settings.py

import os
import shutil
import tempfile
from pathlib import Path


class Settings:
    # --- Paths ---
    # mediajob/core/config/settings.py -> mediajob/core/config -> mediajob/core -> mediajob -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("MEDIAJOB_DATA_DIR", str(BASE_DIR / "data")))

    # Ephemeral: the platform may clear it between sessions
    STAGING_DIR: Path = Path(os.getenv("MEDIAJOB_STAGING_DIR", str(Path(tempfile.gettempdir()) / "mediajob")))

    # Semi-persistent intermediate artifacts, overwritten on reuse
    CACHES_DIR: Path = DATA_DIR / "caches"

    # Permanent media library (hash sharded)
    LIBRARY_DIR: Path = DATA_DIR / "library"

    # Backing store for content://<authority>/<path> references
    CONTENT_ROOT: Path = Path(os.getenv("MEDIAJOB_CONTENT_ROOT", str(DATA_DIR / "content")))

    # --- Artifact names ---
    THUMBNAIL_FILENAME: str = "thumbnail.png"
    TRANSCODE_FILENAME: str = "video.mp4"

    # --- Database (media library catalog) ---
    @property
    def DATABASE_URL(self) -> str:
        return os.getenv("MEDIAJOB_DATABASE_URL", f"sqlite:///{self.DATA_DIR / 'library.db'}")

    # --- External Tools ---
    # Auto-detect ffmpeg/ffprobe or use env var
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    FFPROBE_BINARY: str = os.getenv("FFPROBE_BINARY_PATH", shutil.which("ffprobe") or "ffprobe")

    # --- Transcode profile ---
    # Fixed quality/preset tradeoff: x264 CRF 23 at preset "slower"
    VIDEO_CODEC: str = os.getenv("MEDIAJOB_VIDEO_CODEC", "libx264")
    CRF: int = int(os.getenv("MEDIAJOB_CRF", "23"))
    PRESET: str = os.getenv("MEDIAJOB_PRESET", "slower")
    AUDIO_POLICY: str = os.getenv("MEDIAJOB_AUDIO_POLICY", "copy")
    AUDIO_BITRATE: str = os.getenv("MEDIAJOB_AUDIO_BITRATE", "128k")

    # --- Pipeline defaults ---
    DEFAULT_FRAME_INDEX: int = 500
    DEFAULT_TARGET_HEIGHT: int = 720

    # --- Media library permission: granted | denied | prompt ---
    LIBRARY_PERMISSION: str = os.getenv("MEDIAJOB_LIBRARY_PERMISSION", "prompt")

    LOG_LEVEL: str = os.getenv("MEDIAJOB_LOG_LEVEL", "INFO")

    def ensure_dirs(self):
        """Creates necessary data directories if they don't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)
        self.STAGING_DIR.mkdir(parents=True, exist_ok=True)
        self.CACHES_DIR.mkdir(parents=True, exist_ok=True)
        self.LIBRARY_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
