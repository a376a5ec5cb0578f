# app/services/document_service.py
"""
document_service.py
- Purpose: Orchestrates the "upload a PDF" workflow end-to-end.
- Owns: validation, text extraction (with OCR fallback), AI summary,
  document record creation.
- Design: Thick service; routers remain thin and easy to reason about.
"""


import logging
import re
import uuid

from fastapi import UploadFile
from sqlalchemy.orm import Session

from app.constants.statuses import DocumentStatus
from app.core import AppError, ErrorCode, ErrorReason
from app.core.config import settings
from app.core.request_context import set_context
from app.pdf.ocr import OcrEngine
from app.pdf.pipeline import PdfTextExtractor, extract_document_text
from app.pdf.types import ExtractionConfig, ExtractionResult
from app.repos.document.read import DocumentReadRepo
from app.repos.document.write import DocumentWriteRepo
from app.schemas.document import DocumentResponse
from app.services.summary_service import SummaryService
from app.validations.file_validators import read_pdf_bytes, validate_pdf_upload, validate_uploader

logger = logging.getLogger("app.document_service")

NO_TEXT_SUMMARY = "No textual content extracted (PDF may be image-only or encrypted)."

_PDF_SUFFIX_RE = re.compile(r"\.pdf$", re.IGNORECASE)


def document_name(filename: str | None, override_name: str | None = None) -> str:
    raw = override_name.strip() if override_name and override_name.strip() else (filename or "")
    # drop folder prefixes from either separator style
    base = re.split(r"[\\/]", raw)[-1]
    return _PDF_SUFFIX_RE.sub("", base) or "untitled"


def split_keywords(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [k.strip() for k in raw.split(",") if k.strip()]


class DocumentService:
    def __init__(
        self,
        db: Session,
        *,
        config: ExtractionConfig | None = None,
        extractor: PdfTextExtractor | None = None,
        ocr_engine: OcrEngine | None = None,
        summarizer: SummaryService | None = None,
    ):
        self.db = db
        self.config = config or ExtractionConfig.from_settings(settings)
        self.extractor = extractor or PdfTextExtractor(self.config)
        self.ocr_engine = ocr_engine or OcrEngine(page_limit=self.config.ocr_page_limit, scale=self.config.ocr_scale)
        self.summarizer = summarizer or SummaryService()

        self.doc_write = DocumentWriteRepo(db)
        self.doc_read = DocumentReadRepo(db)

    def extract_text(self, pdf_bytes: bytes) -> ExtractionResult:
        return extract_document_text(
            pdf_bytes,
            self.config,
            extractor=self.extractor,
            ocr_engine=self.ocr_engine,
        )

    def extract_from_upload(self, pdf: UploadFile) -> ExtractionResult:
        """Diagnostics: run extraction without storing anything."""
        validate_pdf_upload(pdf)
        return self.extract_text(read_pdf_bytes(pdf))

    def create_document_from_upload(
        self,
        pdf: UploadFile,
        uploader: str,
        *,
        group_id: str | None = None,
        keywords: str | None = None,
        override_name: str | None = None,
    ) -> DocumentResponse:
        validate_pdf_upload(pdf)
        uploader = validate_uploader(uploader)
        set_context(uploader=uploader)

        pdf_bytes = read_pdf_bytes(pdf)
        result = self.extract_text(pdf_bytes)

        stored_text = result.text[: settings.AI_TEXT_PREFIX_CHARS] if not result.is_empty else ""

        if stored_text:
            insights = self.summarizer.summarize(stored_text)
            summary, ai_keywords = insights.summary, insights.keywords
            status = DocumentStatus.TEXT_EXTRACTED
        else:
            summary, ai_keywords = NO_TEXT_SUMMARY, []
            status = DocumentStatus.NO_TEXT

        doc = self.doc_write.create_document(
            name=document_name(pdf.filename, override_name),
            uploader=uploader,
            status=status,
            full_text=stored_text,
            extraction_tier=result.tier.value,
            group_id=group_id or None,
            keywords=split_keywords(keywords),
            ai_keywords=ai_keywords,
            ai_summary=summary,
            original_filename=pdf.filename,
        )

        set_context(document_id=str(doc.id))
        logger.info(
            "document.created",
            extra={"tier": result.tier.value, "text_length": len(stored_text), "status": doc.status},
        )
        return DocumentResponse.from_document(doc)

    def get_document(self, document_id: str) -> DocumentResponse:
        try:
            doc_uuid = uuid.UUID(str(document_id))
        except ValueError:
            doc_uuid = None

        doc = self.doc_read.get_by_id(doc_uuid) if doc_uuid else None
        if not doc:
            raise AppError(
                code=ErrorCode.NOT_FOUND,
                reason=ErrorReason.RESOURCE_NOT_FOUND.value,
                message="Document not found",
                status_code=404,
            )
        return DocumentResponse.from_document(doc)

    def list_documents(self, group_id: str | None = None, limit: int = 50) -> list[DocumentResponse]:
        return [DocumentResponse.from_document(d) for d in self.doc_read.list_recent(group_id, limit=limit)]
