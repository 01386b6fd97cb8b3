import logging
from pathlib import Path
from sqlalchemy.exc import SQLAlchemyError

from mediajob.core.config.settings import settings
from mediajob.core.common.exceptions import PersistError
from ..domain.interfaces import IPermissionGate, IPersister, IHasher, IFileSystem, IMediaLibraryRepository
from ..domain.models import PersistOutcome
from ..data.hasher import SHA256Hasher
from ..data.local_fs import LocalFileSystem
from ..data.repository import SqlMediaLibraryRepo
from ..data.permission_gate import build_permission_gate

logger = logging.getLogger(__name__)

NO_PERMISSION = "no permission"


class MediaLibraryPersister(IPersister):
    """
    Facade for the Storage Feature.
    Orchestrates the permission check, hashing, the library copy and the catalog row.
    """

    def __init__(self,
                 gate: IPermissionGate = None,
                 hasher: IHasher = None,
                 fs: IFileSystem = None,
                 repo: IMediaLibraryRepository = None):
        self.gate = gate or build_permission_gate(settings.LIBRARY_PERMISSION)
        self.hasher = hasher or SHA256Hasher()
        self.fs = fs or LocalFileSystem()
        self.repo = repo or SqlMediaLibraryRepo()

    def persist(self, path: Path) -> PersistOutcome:
        """
        Saves a finished artifact into the media library.
        - Asks the permission gate (exactly once).
        - Calculates Hash.
        - Copies into the sharded library folder.
        - Records the catalog entry (deduplicated by hash).
        """
        # 1. Permission
        if not self.gate.ensure_write_permission():
            logger.info(f"Not persisting {path}: {NO_PERMISSION}")
            return PersistOutcome.skipped(NO_PERMISSION)

        path = Path(path)
        if not path.is_file():
            raise PersistError(f"Artifact not found: {path}")

        try:
            # 2. Calculate Hash
            file_hash = self.hasher.calculate_sha256(path)

            # 3. Copy to Library
            library_path, file_size = self.fs.copy_to_library(path, file_hash)

            # 4. Catalog
            item = self.repo.add_item({
                "file_path": str(library_path),
                "file_size_bytes": file_size,
                "file_hash": file_hash,
                "file_type": self.fs.determine_file_type(library_path)
            })
        except (OSError, SQLAlchemyError) as e:
            logger.error(f"Persisting {path} failed: {e}")
            raise PersistError(f"Could not save {path.name} to the media library: {e}") from e

        logger.info(f"Persisted {path} as library item {item.id}")
        return PersistOutcome.saved(item.path, item.id)
