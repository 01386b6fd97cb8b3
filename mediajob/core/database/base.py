# File: mediajob/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. The media library catalog models inherit from this.
Base = declarative_base()
