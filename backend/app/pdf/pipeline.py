"""app/pdf/pipeline.py

Tiered PDF -> text orchestration.

Order of attack:
1) byte scanners (literal, hex, flate); first accepted candidate wins
2) external converter CLI, only on a weak byte-scan signal or when enabled
3) structured parser, only on a weak signal or when forced
4) best byte-scanner output, cleaned, as the last resort

The tier that produced the text is returned with it. Nothing in here raises:
a failing tier is "no output", and `PdfTextExtractor.extract` always returns
an ExtractionResult.
"""



import logging
from dataclasses import dataclass
from typing import Callable

from app.pdf.converter import ExternalConverter
from app.pdf.extract import StructuredParser
from app.pdf.ocr import OcrEngine
from app.pdf.quality import assess
from app.pdf.scanners import scan_flate_streams, scan_hex_strings, scan_literal_strings
from app.pdf.types import (
    MAX_TEXT_CHARS,
    MIN_ACCEPT_CHARS,
    ExtractionCandidate,
    ExtractionConfig,
    ExtractionResult,
    ExtractionTier,
)

logger = logging.getLogger("app.pdf.pipeline")

# Combined byte-scan length below which each escalation looks worthwhile.
FORCE_STRUCTURED_BELOW = 40
TRY_CLI_BELOW = 120
TRY_STRUCTURED_BELOW = 80
MIN_STRUCTURED_RAW_CHARS = 20

# Caller-level OCR trigger.
OCR_TRIGGER_CHARS = 25


@dataclass(frozen=True)
class ByteTier:
    tier: ExtractionTier
    scan: Callable[[bytes], str]
    must_beat_literal: bool


BYTE_TIERS: tuple[ByteTier, ...] = (
    ByteTier(ExtractionTier.LITERAL, scan_literal_strings, must_beat_literal=False),
    ByteTier(ExtractionTier.HEX, scan_hex_strings, must_beat_literal=True),
    ByteTier(ExtractionTier.FLATE, scan_flate_streams, must_beat_literal=True),
)


@dataclass(frozen=True)
class EscalationTier:
    tier: ExtractionTier
    # (config, force_structured, combined byte-scan length) -> run this tier?
    should_run: Callable[[ExtractionConfig, bool, int], bool]
    # (raw candidate, cleaned text) -> keep it?
    accept: Callable[[ExtractionCandidate, str], bool]


def _cli_should_run(config: ExtractionConfig, force: bool, combined: int) -> bool:
    return config.enable_external_converter or (not force and combined < TRY_CLI_BELOW)


def _cli_accept(candidate: ExtractionCandidate, cleaned: str) -> bool:
    return len(cleaned.strip()) > MIN_ACCEPT_CHARS


def _structured_should_run(config: ExtractionConfig, force: bool, combined: int) -> bool:
    return force or combined < TRY_STRUCTURED_BELOW


def _structured_accept(candidate: ExtractionCandidate, cleaned: str) -> bool:
    return candidate.raw_length >= MIN_STRUCTURED_RAW_CHARS and bool(cleaned.strip())


ESCALATION_TIERS: tuple[EscalationTier, ...] = (
    EscalationTier(ExtractionTier.CLI, _cli_should_run, _cli_accept),
    EscalationTier(ExtractionTier.STRUCTURED, _structured_should_run, _structured_accept),
)


class PdfTextExtractor:
    """Runs the extraction tiers for one document at a time; holds no per-run state."""

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        *,
        converter: ExternalConverter | None = None,
        structured: StructuredParser | None = None,
    ):
        self.config = config or ExtractionConfig()
        self.converter = converter or ExternalConverter(
            executable=self.config.external_converter_path,
            timeout_seconds=self.config.external_converter_timeout_seconds,
        )
        self.structured = structured or StructuredParser(page_limit=self.config.structured_page_limit)
        self._runners = {
            ExtractionTier.CLI: (lambda: self.converter.available, self.converter.convert),
            ExtractionTier.STRUCTURED: (lambda: self.structured.available, self.structured.extract),
        }

    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        try:
            return self._extract(pdf_bytes or b"")
        except Exception:
            logger.exception("pdf.extract.unexpected_error")
            return ExtractionResult(text="", tier=ExtractionTier.NONE)

    def _extract(self, pdf_bytes: bytes) -> ExtractionResult:
        cfg = self.config
        candidates: dict[ExtractionTier, ExtractionCandidate] = {}
        literal_cleaned_len = 0

        for bt in BYTE_TIERS:
            candidate = ExtractionCandidate.from_text(bt.scan(pdf_bytes), bt.tier)
            candidates[bt.tier] = candidate
            report = assess(candidate.text, raw_mode=cfg.raw_text)
            cleaned_len = len(report.text.strip())
            if bt.tier is ExtractionTier.LITERAL:
                literal_cleaned_len = cleaned_len
            self._debug(bt.tier, candidate.raw_length, cleaned_len, report.score)

            # a forced structured run still scans bytes, for the fallback
            if cfg.force_structured:
                continue
            if bt.must_beat_literal and cleaned_len <= literal_cleaned_len:
                continue
            if cleaned_len > MIN_ACCEPT_CHARS and report.accepted:
                return self._result(report.text, bt.tier)

        combined = sum(c.raw_length for c in candidates.values())
        force = cfg.force_structured or combined < FORCE_STRUCTURED_BELOW

        for et in ESCALATION_TIERS:
            if not et.should_run(cfg, force, combined):
                continue
            is_available, run = self._runners[et.tier]
            if not is_available():
                logger.info("pdf.tier.unavailable", extra={"tier": et.tier.value})
                continue
            try:
                raw = run(pdf_bytes)
            except Exception as e:
                logger.warning("pdf.tier.failed", extra={"tier": et.tier.value, "error": str(e)})
                raw = ""
            candidate = ExtractionCandidate.from_text(raw, et.tier)
            report = assess(candidate.text, raw_mode=cfg.raw_text)
            self._debug(et.tier, candidate.raw_length, len(report.text.strip()), report.score)
            if et.accept(candidate, report.text):
                return self._result(report.text, et.tier)

        return self._fallback_best(candidates)

    def _fallback_best(self, candidates: dict[ExtractionTier, ExtractionCandidate]) -> ExtractionResult:
        # ties go to the later, more processed scanner
        ordered = [candidates.get(t) for t in (ExtractionTier.FLATE, ExtractionTier.HEX, ExtractionTier.LITERAL)]
        best = max((c for c in ordered if c is not None), key=lambda c: c.raw_length, default=None)
        if best is None:
            return ExtractionResult(text="", tier=ExtractionTier.NONE)

        text = assess(best.text, raw_mode=self.config.raw_text).text
        tier = ExtractionTier.FALLBACK_BEST if text.strip() else ExtractionTier.NONE
        return self._result(text, tier)

    def _result(self, text: str, tier: ExtractionTier) -> ExtractionResult:
        text = text[:MAX_TEXT_CHARS]
        if tier is not ExtractionTier.NONE:
            logger.info("pdf.tier.accepted", extra={"tier": tier.value, "length": len(text)})
        return ExtractionResult(text=text, tier=tier)

    def _debug(self, tier: ExtractionTier, raw_len: int, cleaned_len: int, score: float) -> None:
        if self.config.debug:
            logger.info(
                "pdf.tier.candidate",
                extra={"tier": tier.value, "raw_length": raw_len, "cleaned_length": cleaned_len, "score": score},
            )


def extract_document_text(
    pdf_bytes: bytes,
    config: ExtractionConfig | None = None,
    *,
    extractor: PdfTextExtractor | None = None,
    ocr_engine: OcrEngine | None = None,
) -> ExtractionResult:
    """Text-layer extraction, then OCR when the text layer gave almost nothing."""
    config = config or ExtractionConfig()
    extractor = extractor or PdfTextExtractor(config)
    result = extractor.extract(pdf_bytes)

    if len(result.text.strip()) >= OCR_TRIGGER_CHARS or not config.ocr_enabled:
        return result

    engine = ocr_engine or OcrEngine(page_limit=config.ocr_page_limit, scale=config.ocr_scale)
    if not engine.available:
        return result

    try:
        ocr_text = engine.recognize(pdf_bytes).strip()
    except Exception:
        logger.exception("ocr.failed")
        return result

    if len(ocr_text) > len(result.text.strip()):
        logger.info("pdf.tier.accepted", extra={"tier": ExtractionTier.OCR.value, "length": len(ocr_text)})
        return ExtractionResult(text=ocr_text[:MAX_TEXT_CHARS], tier=ExtractionTier.OCR)
    return result
