import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, Uuid, Enum as SQLEnum
from mediajob.core.database.base import Base
from mediajob.core.common.enums import FileType

def utc_now():
    return datetime.now(timezone.utc)

class MediaItemModel(Base):
    """
    Catalog row for a file persisted into the media library.
    One row per distinct content hash.
    """
    __tablename__ = "media_items"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    file_path = Column(String, nullable=False, unique=True)
    file_size_bytes = Column(Integer, nullable=False)
    file_hash = Column(String, nullable=False, unique=True, index=True)
    file_type = Column(SQLEnum(FileType), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
