"""
statuses.py
- Purpose: Central source of truth for document extraction statuses.
- Design: Keep FE-facing statuses stable and explicit.
"""

from enum import Enum


class DocumentStatus(str, Enum):
    TEXT_EXTRACTED = "TEXT_EXTRACTED"
    NO_TEXT = "NO_TEXT"  # image-only / encrypted / empty; not an error
