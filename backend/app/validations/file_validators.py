"""
file_validators.py
- Purpose: Centralized validation for file uploads (PDF constraints).
- Design: Raise AppError with stable error codes for UI + logs.
"""

from fastapi import UploadFile

from app.core import AppError, ErrorCode, ErrorReason
from app.core.config import settings

PDF_CONTENT_TYPE = "application/pdf"


def validate_pdf_upload(pdf: UploadFile | None) -> None:
    # Basic presence check
    if pdf is None or not pdf.filename:
        raise AppError(code=ErrorCode.FILE_MISSING, reason=ErrorReason.FILE_REQUIRED.value, status_code=400)

    content_type = (pdf.content_type or "").lower()
    if content_type != PDF_CONTENT_TYPE:
        raise AppError(
            code=ErrorCode.INVALID_FILE_TYPE,
            reason=ErrorReason.PDF_ONLY.value,
            status_code=400,
            details={"content_type": content_type},
        )


def validate_uploader(uploader: str | None) -> str:
    who = (uploader or "").strip()
    if not who:
        raise AppError(code=ErrorCode.UPLOADER_MISSING, reason=ErrorReason.UPLOADER_REQUIRED.value, status_code=400)
    return who


def read_pdf_bytes(pdf: UploadFile, max_bytes: int | None = None) -> bytes:
    """Read the upload into memory, refusing anything over the size limit."""
    limit = max_bytes if max_bytes is not None else settings.MAX_UPLOAD_BYTES

    # UploadFile doesn't reliably expose size; read one byte past the limit instead
    data = pdf.file.read(limit + 1)
    if len(data) > limit:
        raise AppError(
            code=ErrorCode.FILE_TOO_LARGE,
            reason=ErrorReason.FILE_TOO_LARGE.value,
            status_code=413,
            details={"max_bytes": limit},
        )
    if not data:
        raise AppError(
            code=ErrorCode.FILE_EMPTY,
            reason=ErrorReason.PDF_INVALID.value,
            message="Empty PDF bytes",
            status_code=400,
        )
    return data
