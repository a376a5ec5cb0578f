from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.api.deps import get_db, get_extraction_components

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/db/health")
def db_health(db: Session = Depends(get_db)):
    db.execute(text("select 1"))
    return {"status": "ok", "db": "connected"}


@router.get("/extraction/health")
def extraction_health():
    """Which optional extraction backends this process can actually use."""
    components = get_extraction_components()
    return {
        "structured_backends": components.extractor.structured.backends,
        "external_converter": components.extractor.converter.available,
        "ocr": components.ocr_engine.available,
    }
