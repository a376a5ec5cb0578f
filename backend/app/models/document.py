"""
document.py
- Purpose: One uploaded PDF plus everything extracted from it.
- Each upload creates a new row; extraction results are never rewritten in place.
"""

import uuid
from datetime import datetime
from sqlalchemy import JSON, String, Text, DateTime, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, utcnow


class Document(Base):
    __tablename__ = "documents"

    __table_args__ = (
        Index("ix_documents_group_id", "group_id"),
        Index("ix_documents_uploader_created_at", "uploader", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False, default="pdf")
    uploader: Mapped[str] = mapped_column(Text, nullable=False)
    group_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    original_filename: Mapped[str | None] = mapped_column(Text, nullable=True)

    # user supplied vs. AI extracted
    keywords: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    ai_keywords: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    ai_summary: Mapped[str | None] = mapped_column(Text, nullable=True)

    full_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    extraction_tier: Mapped[str] = mapped_column(String(32), nullable=False, default="none")
    status: Mapped[str] = mapped_column(String(32), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
