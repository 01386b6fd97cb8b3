from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple
from mediajob.core.common.enums import FileType
from .models import LibraryItem, PersistOutcome

class IHasher(ABC):
    @abstractmethod
    def calculate_sha256(self, file_path: Path) -> str:
        """Calculates the SHA256 hash of a file."""
        pass

class IFileSystem(ABC):
    @abstractmethod
    def copy_to_library(self, source: Path, file_hash: str) -> Tuple[Path, int]:
        """
        Copies the file into the media library, leaving the source in place.
        Returns: (library_path, file_size_bytes)
        """
        pass

    @abstractmethod
    def determine_file_type(self, path: Path) -> FileType:
        """Determines if file is VIDEO, AUDIO, etc."""
        pass

class IMediaLibraryRepository(ABC):
    @abstractmethod
    def get_item_by_hash(self, file_hash: str) -> Optional[LibraryItem]:
        """Checks if a file with this hash is already in the library."""
        pass

    @abstractmethod
    def add_item(self, file_data: dict) -> LibraryItem:
        """
        Records a library file. Returns the existing item when the hash is already known.
        """
        pass

class IPermissionGate(ABC):
    @abstractmethod
    def ensure_write_permission(self) -> bool:
        """
        Returns True if writing to the media library is allowed.
        May prompt the user, at most once per call.
        """
        pass

class IPersister(ABC):
    @abstractmethod
    def persist(self, path: Path) -> PersistOutcome:
        """
        Writes a finished artifact into permanent storage.

        Returns:
            PersistOutcome.saved(...) or PersistOutcome.skipped(reason).

        Raises:
            PersistError: If the write fails for a reason other than missing permission.
        """
        pass
