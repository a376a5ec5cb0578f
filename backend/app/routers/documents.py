"""
documents.py
- Purpose: API routes for uploading PDFs and reading back extracted documents.
- Design: Keep router thin. Delegate business logic to services.

Routes are plain `def`: FastAPI runs them in its threadpool, so the blocking
extraction tiers (converter process, OCR) never stall the event loop.
"""

from fastapi import APIRouter, Depends, UploadFile, File, Form, Query, status

from app.schemas.document import DocumentResponse, ExtractTextResponse
from app.services.document_service import DocumentService
from app.api.deps import get_document_service

router = APIRouter(prefix="/api/documents", tags=["Documents"])

@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
def upload_document(
    file: UploadFile = File(...),
    uploader: str = Form(...),
    group_id: str | None = Form(None),
    keywords: str | None = Form(None),
    override_name: str | None = Form(None),
    svc: DocumentService = Depends(get_document_service),
):
    return svc.create_document_from_upload(
        file,
        uploader,
        group_id=group_id,
        keywords=keywords,
        override_name=override_name,
    )

@router.get("", response_model=list[DocumentResponse])
def list_documents(
    group_id: str | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    svc: DocumentService = Depends(get_document_service),
):
    return svc.list_documents(group_id, limit=limit)

@router.post("/extract-text", response_model=ExtractTextResponse)
def extract_text(file: UploadFile = File(...), svc: DocumentService = Depends(get_document_service)):
    """Dev-only: run the extraction tiers and return {text, tier} without storing."""
    return ExtractTextResponse.from_result(svc.extract_from_upload(file))

@router.get("/{document_id}", response_model=DocumentResponse)
def get_document(document_id: str, svc: DocumentService = Depends(get_document_service)):
    return svc.get_document(document_id)
