"""
document/read.py
- Purpose: Read-side DB operations for Document.
- Design: Keeps query access patterns centralized.
"""

from sqlalchemy.orm import Session
from app.models.document import Document

class DocumentReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, document_id) -> Document | None:
        return self.db.query(Document).filter(Document.id == document_id).first()

    def list_recent(self, group_id: str | None = None, limit: int = 50) -> list[Document]:
        """Newest first; every document unless a group is given."""
        q = self.db.query(Document)
        if group_id:
            q = q.filter(Document.group_id == group_id)
        return q.order_by(Document.created_at.desc()).limit(limit).all()
