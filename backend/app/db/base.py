"""
db/base.py
- Purpose: Provide Base with every model registered on its metadata.
"""

from app.models import Base  # noqa: F401  (importing app.models registers tables)

__all__ = ["Base"]
