# File: mediajob/core/database/connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from mediajob.core.config.settings import settings
from .base import Base

# check_same_thread=False is needed only for SQLite
connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Creates the catalog tables if they don't exist yet."""
    # Import models so they register on Base.metadata
    import mediajob.features.storage.data.sql_models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
