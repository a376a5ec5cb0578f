# app/llm/providers/gemini.py
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import httpx
from google import genai
from google.genai import types

from app.core.config import settings
from app.llm.errors import LLMDisabledError, LLMRetryableError, LLMNonRetryableError
from app.llm.types import LLMRequest, LLMResponse


_RETRYABLE_MARKERS = ("429", "rate", "quota", "500", "503", "temporarily", "unavailable")


@dataclass
class GeminiProvider:
    """
    Gemini provider using Google Gen AI SDK (google-genai).
    Single-attempt. Retries/backoff handled by app/llm/client.py.
    """
    _client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if not settings.GEMINI_API_KEY:
            raise LLMDisabledError("GEMINI_API_KEY is missing")
        if self._client is None:
            self._client = genai.Client(api_key=settings.GEMINI_API_KEY)
        return self._client

    def generate(self, req: LLMRequest, prompt: str) -> LLMResponse:
        client = self._get_client()
        start_ms = int(time.time() * 1000)

        try:
            # HttpOptions timeout is in milliseconds
            cfg = types.GenerateContentConfig(
                temperature=req.temperature,
                max_output_tokens=req.max_output_tokens,
                response_mime_type=req.response_mime_type,
                http_options=types.HttpOptions(timeout=int(req.timeout_seconds * 1000)),
            )

            resp = client.models.generate_content(
                model=req.model,
                contents=prompt,
                config=cfg,
            )
        except (httpx.TimeoutException, TimeoutError) as e:
            raise LLMRetryableError(f"Gemini call timed out: {e}") from e
        except httpx.HTTPError as e:
            raise LLMRetryableError(f"Gemini http error (retryable): {e}") from e
        except Exception as e:
            msg = str(e).lower()
            if any(x in msg for x in _RETRYABLE_MARKERS):
                raise LLMRetryableError(f"Gemini retryable failure: {e}") from e
            raise LLMNonRetryableError(f"Gemini non-retryable failure: {e}") from e

        usage = getattr(resp, "usage_metadata", None)
        return LLMResponse(
            trace_id=req.trace_id,
            provider=req.provider,
            model=req.model,
            output_text=(getattr(resp, "text", None) or "").strip(),
            latency_ms=int(time.time() * 1000) - start_ms,
            retries=0,
            raw={"sdk_response_type": str(type(resp))},
            input_tokens=getattr(usage, "prompt_token_count", None) if usage is not None else None,
            output_tokens=getattr(usage, "candidates_token_count", None) if usage is not None else None,
        )
