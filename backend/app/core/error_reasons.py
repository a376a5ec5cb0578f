"""
error_reasons.py
- Purpose: Human-friendly "reason" strings.
- Keep these stable; they may be surfaced in UI.
"""

from enum import Enum


class ErrorReason(str, Enum):
    UNKNOWN = "Unknown error"

    INVALID_INPUT = "Invalid input"
    RESOURCE_NOT_FOUND = "Resource not found"

    DATABASE_UNAVAILABLE = "Database unavailable"
    PDF_INVALID = "Invalid PDF"
    PDF_ONLY = "Only PDF accepted"
    FILE_REQUIRED = "File required"
    FILE_TOO_LARGE = "File too large"
    UPLOADER_REQUIRED = "Uploader required"
    INTERNAL_ERROR = "Internal server error"
