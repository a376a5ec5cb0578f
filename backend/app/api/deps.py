from functools import lru_cache
from typing import Generator, NamedTuple

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import SessionLocal
from app.pdf.ocr import OcrEngine
from app.pdf.pipeline import PdfTextExtractor
from app.pdf.types import ExtractionConfig
from app.services.document_service import DocumentService


class ExtractionComponents(NamedTuple):
    config: ExtractionConfig
    extractor: PdfTextExtractor
    ocr_engine: OcrEngine


def get_db() -> Generator[Session, None, None]:
    """
    Yields a DB session per request.
    Ensures the session is closed even on exceptions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache(maxsize=1)
def get_extraction_components() -> ExtractionComponents:
    """
    One set per process. The backend probes (parser libraries, converter
    binary, tesseract) are cached on these objects after first use.
    """
    config = ExtractionConfig.from_settings(settings)
    return ExtractionComponents(
        config=config,
        extractor=PdfTextExtractor(config),
        ocr_engine=OcrEngine(page_limit=config.ocr_page_limit, scale=config.ocr_scale),
    )


def get_document_service(db: Session = Depends(get_db)) -> DocumentService:
    """
    Service dependency for document flows.
    Sessions are per request; extraction components are shared.
    """
    components = get_extraction_components()
    return DocumentService(
        db=db,
        config=components.config,
        extractor=components.extractor,
        ocr_engine=components.ocr_engine,
    )
