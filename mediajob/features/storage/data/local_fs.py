import shutil
import mimetypes
from pathlib import Path
from typing import Tuple
from mediajob.core.config.settings import settings
from mediajob.core.common.enums import FileType
from ..domain.interfaces import IFileSystem

class LocalFileSystem(IFileSystem):
    def __init__(self, library_dir: Path = None):
        self.library_dir = Path(library_dir or settings.LIBRARY_DIR)

    def copy_to_library(self, source: Path, file_hash: str) -> Tuple[Path, int]:
        """
        Copies the artifact to: library/{first_2_chars_of_hash}/{full_hash}.ext
        Sharding keeps any single directory small.
        The source stays in the caches directory; it is overwritten on the next run.
        """
        file_size = source.stat().st_size

        extension = source.suffix.lower()
        sub_dir = self.library_dir / file_hash[:2]
        sub_dir.mkdir(parents=True, exist_ok=True)

        destination = sub_dir / f"{file_hash}{extension}"

        # Identical content is already in the library
        if destination.exists():
            return destination, destination.stat().st_size

        shutil.copy2(str(source), str(destination))

        return destination, file_size

    def determine_file_type(self, path: Path) -> FileType:
        mime, _ = mimetypes.guess_type(path)
        if not mime:
            return FileType.UNKNOWN

        if mime.startswith("video"):
            return FileType.VIDEO
        if mime.startswith("audio"):
            return FileType.AUDIO
        if mime.startswith("image"):
            return FileType.IMAGE

        return FileType.UNKNOWN
