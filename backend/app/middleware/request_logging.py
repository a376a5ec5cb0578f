from __future__ import annotations

import time
import uuid
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.core.request_context import set_context, clear_context


logger = logging.getLogger("app.http")

REQUEST_ID_HEADER = "x-request-id"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One line in, one line out per request; every line in between carries the request id."""

    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        set_context(request_id=rid)

        started = time.perf_counter()
        try:
            # uploads are the expensive path; their size is the useful number
            logger.info(
                "http.request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "content_length": request.headers.get("content-length"),
                },
            )
            response: Response = await call_next(request)

            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.log(
                logging.WARNING if response.status_code >= 500 else logging.INFO,
                "http.response",
                extra={"path": request.url.path, "status_code": response.status_code, "duration_ms": elapsed_ms},
            )

            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            clear_context()
