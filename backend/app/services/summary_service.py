"""
summary_service.py
- Purpose: AI summary + keyword extraction for extracted document text.
- Design: Opaque text-in/text-out collaborator. When AI is disabled or the
  model call fails, the upload still succeeds with no summary and no keywords.
"""

import logging
import re
from dataclasses import dataclass, field

from app.core.config import settings
from app.llm.client import llm_generate, llm_generate_structured
from app.llm.errors import LLMError
from app.schemas.document import DocumentKeywords

logger = logging.getLogger("app.summary_service")

PROMPT_VERSION = "v1"
MIN_KEYWORD_CHARS = 3


@dataclass(frozen=True)
class DocumentInsights:
    summary: str | None = None
    keywords: list[str] = field(default_factory=list)


def normalize_keywords(raw: list[str], limit: int) -> list[str]:
    """Split comma-joined items, drop short/duplicate ones, keep model order."""
    out: list[str] = []
    seen: set[str] = set()
    for item in raw:
        for kw in re.split(r"[,\n]", item or ""):
            kw = kw.strip().strip("\"'")
            if len(kw) < MIN_KEYWORD_CHARS or kw.lower() in seen:
                continue
            seen.add(kw.lower())
            out.append(kw)
    return out[:limit]


class SummaryService:
    def __init__(self, enabled: bool | None = None, max_keywords: int | None = None):
        self.enabled = settings.AI_ENABLED if enabled is None else enabled
        self.max_keywords = max_keywords or settings.AI_MAX_KEYWORDS

    def summarize(self, text: str) -> DocumentInsights:
        if not self.enabled or not (text or "").strip():
            return DocumentInsights()

        return DocumentInsights(summary=self._summary(text), keywords=self._keywords(text))

    def _summary(self, text: str) -> str | None:
        try:
            resp = llm_generate(
                purpose="summarize_document",
                prompt_name="summarize_document",
                prompt_version=PROMPT_VERSION,
                variables={"text": text},
            )
        except LLMError as e:
            logger.warning("summary.skipped", extra={"step": "summary", "error": str(e)})
            return None
        return resp.output_text.strip() or None

    def _keywords(self, text: str) -> list[str]:
        try:
            parsed = llm_generate_structured(
                purpose="extract_keywords",
                prompt_name="extract_keywords",
                prompt_version=PROMPT_VERSION,
                variables={"text": text},
                schema=DocumentKeywords,
            )
        except LLMError as e:
            logger.warning("summary.skipped", extra={"step": "keywords", "error": str(e)})
            return []
        return normalize_keywords(parsed.keywords, self.max_keywords)
