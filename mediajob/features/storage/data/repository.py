from pathlib import Path
from typing import Optional
from sqlalchemy.orm import sessionmaker
from mediajob.core.database.connection import SessionLocal
from .sql_models import MediaItemModel
from ..domain.interfaces import IMediaLibraryRepository
from ..domain.models import LibraryItem

class SqlMediaLibraryRepo(IMediaLibraryRepository):
    def __init__(self, session_factory: sessionmaker = None):
        self.session_factory = session_factory or SessionLocal

    def get_item_by_hash(self, file_hash: str) -> Optional[LibraryItem]:
        with self.session_factory() as db:
            row = db.query(MediaItemModel).filter(MediaItemModel.file_hash == file_hash).first()
            return self._to_domain(row) if row else None

    def add_item(self, file_data: dict) -> LibraryItem:
        """
        Transactional logic:
        1. Check if the hash is already cataloged (Deduplication).
        2. If not, insert it.
        """
        with self.session_factory() as db:
            try:
                existing = db.query(MediaItemModel).filter(
                    MediaItemModel.file_hash == file_data["file_hash"]
                ).first()

                if existing:
                    return self._to_domain(existing)

                item = MediaItemModel(**file_data)
                db.add(item)
                db.commit()
                db.refresh(item)

                return self._to_domain(item)
            except Exception:
                db.rollback()
                raise

    @staticmethod
    def _to_domain(row: MediaItemModel) -> LibraryItem:
        return LibraryItem(
            id=row.id,
            path=Path(row.file_path),
            hash=row.file_hash,
            size_bytes=row.file_size_bytes,
            file_type=row.file_type,
            created_at=row.created_at
        )
