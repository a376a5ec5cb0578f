"""
document.py (schemas)
- Purpose: Request/response DTOs for the document domain.
- Design: Keep API DTOs stable; include helper constructors for DRY mapping.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.pdf.types import ExtractionResult


class DocumentResponse(BaseModel):
    id: UUID
    name: str
    type: str
    uploader: str
    group_id: Optional[str] = None
    original_filename: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)
    ai_keywords: list[str] = Field(default_factory=list)
    ai_summary: Optional[str] = None
    full_text: str = ""
    extraction_tier: str
    status: str
    created_at: datetime

    @classmethod
    def from_document(cls, doc) -> "DocumentResponse":
        """
        DRY mapper from ORM model -> response DTO.
        """
        return cls(
            id=doc.id,
            name=doc.name,
            type=doc.type,
            uploader=doc.uploader,
            group_id=doc.group_id,
            original_filename=doc.original_filename,
            keywords=doc.keywords or [],
            ai_keywords=doc.ai_keywords or [],
            ai_summary=doc.ai_summary,
            full_text=doc.full_text or "",
            extraction_tier=doc.extraction_tier,
            status=doc.status,
            created_at=doc.created_at,
        )


class ExtractTextResponse(BaseModel):
    text: str
    tier: str
    length: int

    @classmethod
    def from_result(cls, result: ExtractionResult) -> "ExtractTextResponse":
        return cls(text=result.text, tier=result.tier.value, length=len(result.text))


class DocumentKeywords(BaseModel):
    """Structured LLM output for keyword extraction."""
    keywords: list[str] = Field(default_factory=list)
