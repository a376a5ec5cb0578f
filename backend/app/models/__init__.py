"""
models package
- Purpose: Import all ORM models so metadata.create_all sees every table.
"""

from app.models.base import Base
from app.models.document import Document

__all__ = ["Base", "Document"]
