"""
document/write.py
- Purpose: Write-side DB operations for Document.
- Design: No business logic; persistence only.
"""

from sqlalchemy.orm import Session
from app.models.document import Document
from app.constants.statuses import DocumentStatus


class DocumentWriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_document(
        self,
        *,
        name: str,
        uploader: str,
        status: DocumentStatus,
        full_text: str,
        extraction_tier: str,
        group_id: str | None = None,
        keywords: list[str] | None = None,
        ai_keywords: list[str] | None = None,
        ai_summary: str | None = None,
        original_filename: str | None = None,
    ) -> Document:
        doc = Document(
            name=name,
            type="pdf",
            uploader=uploader,
            group_id=group_id,
            keywords=list(keywords or []),
            ai_keywords=list(ai_keywords or []),
            ai_summary=ai_summary,
            full_text=full_text,
            extraction_tier=extraction_tier,
            status=status.value if hasattr(status, "value") else str(status),
            original_filename=original_filename,
        )
        self.db.add(doc)
        self.db.commit()
        self.db.refresh(doc)
        return doc
