"""app/pdf/types.py

Lightweight dataclasses for the tiered PDF text extraction pipeline.
Design goals:
- every tier produces the same candidate shape
- the tier travels with the result (no process-wide "last stage" marker)
- configuration is an explicit, immutable value
"""


from dataclasses import dataclass
from enum import Enum


# Caps shared by every tier.
MAX_TEXT_CHARS = 200_000
MIN_ACCEPT_CHARS = 40


class ExtractionTier(str, Enum):
    LITERAL = "literal"
    HEX = "hex"
    FLATE = "flate"
    CLI = "cli"
    STRUCTURED = "structured"
    OCR = "ocr"
    FALLBACK_BEST = "fallback-best"
    NONE = "none"


@dataclass(frozen=True)
class ExtractionCandidate:
    text: str
    source_tier: ExtractionTier
    raw_length: int  # trimmed length of the raw tier output

    @classmethod
    def from_text(cls, text: str, tier: ExtractionTier) -> "ExtractionCandidate":
        text = text or ""
        return cls(text=text, source_tier=tier, raw_length=len(text.strip()))


@dataclass(frozen=True)
class QualityReport:
    text: str          # cleaned text (or raw text in raw mode)
    score: float       # 0.0 - 1.0, fraction of word-like tokens
    token_count: int
    accepted: bool


@dataclass(frozen=True)
class ExtractionResult:
    text: str
    tier: ExtractionTier

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()

    def to_dict(self) -> dict:
        return {"text": self.text, "tier": self.tier.value}


@dataclass(frozen=True)
class ExtractionConfig:
    force_structured: bool = False
    enable_external_converter: bool = False
    external_converter_path: str = "pdftotext"
    external_converter_timeout_seconds: float = 15.0
    raw_text: bool = False
    ocr_enabled: bool = True
    ocr_page_limit: int = 6
    ocr_scale: float = 1.5
    structured_page_limit: int = 30
    debug: bool = False

    @classmethod
    def from_settings(cls, settings) -> "ExtractionConfig":
        return cls(
            force_structured=settings.PDF_FORCE_STRUCTURED,
            enable_external_converter=settings.PDF_ENABLE_EXTERNAL_CONVERTER,
            external_converter_path=settings.PDF_EXTERNAL_CONVERTER_PATH,
            external_converter_timeout_seconds=settings.PDF_EXTERNAL_CONVERTER_TIMEOUT_SECONDS,
            raw_text=settings.PDF_RAW_TEXT,
            ocr_enabled=settings.PDF_OCR_ENABLED,
            ocr_page_limit=settings.PDF_OCR_PAGE_LIMIT,
            ocr_scale=settings.PDF_OCR_SCALE,
            structured_page_limit=settings.PDF_STRUCTURED_PAGE_LIMIT,
            debug=settings.EXTRACTION_DEBUG,
        )
