"""
Request context helpers.

A small context (request_id, document_id, uploader) lives in ContextVars.
The HTTP middleware and the upload service set these values so every log
line emitted during an extraction can be tied back to its upload.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Dict, Optional


_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
_document_id: ContextVar[Optional[str]] = ContextVar("document_id", default=None)
_uploader: ContextVar[Optional[str]] = ContextVar("uploader", default=None)


def set_context(
    *,
    request_id: Optional[str] = None,
    document_id: Optional[str] = None,
    uploader: Optional[str] = None,
) -> None:
    if request_id is not None:
        _request_id.set(request_id)
    if document_id is not None:
        _document_id.set(document_id)
    if uploader is not None:
        _uploader.set(uploader)


def clear_context() -> None:
    _request_id.set(None)
    _document_id.set(None)
    _uploader.set(None)


def get_context() -> Dict[str, Any]:
    ctx: Dict[str, Any] = {}
    rid = _request_id.get()
    did = _document_id.get()
    who = _uploader.get()

    if rid:
        ctx["request_id"] = rid
    if did:
        ctx["document_id"] = did
    if who:
        ctx["uploader"] = who
    return ctx
