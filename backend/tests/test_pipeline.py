import random

import pytest

from app.pdf.pipeline import PdfTextExtractor, extract_document_text
from app.pdf.types import ExtractionConfig, ExtractionResult, ExtractionTier

from pdf_samples import FLATE_PROSE, PROSE, flate_pdf, hex_pdf, literal_pdf, pdf_with_stream


CLI_TEXT = "Converted by the command line tool with plenty of readable text"
STRUCTURED_TEXT = "Structured parser text recovered from the page objects"


class StubTier:
    """Stands in for the converter or the structured parser."""

    def __init__(self, text: str = "", available: bool = True, error: Exception | None = None):
        self.text = text
        self.available = available
        self.error = error
        self.calls = 0

    def __call__(self, pdf_bytes: bytes) -> str:
        self.calls += 1
        if self.error:
            raise self.error
        return self.text

    convert = __call__
    extract = __call__


class StubExtractor:
    def __init__(self, result: ExtractionResult):
        self.result = result

    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        return self.result


class StubOcr:
    def __init__(self, text: str = "", available: bool = True, error: Exception | None = None):
        self.text = text
        self.available = available
        self.error = error
        self.calls = 0

    def recognize(self, pdf_bytes: bytes) -> str:
        self.calls += 1
        if self.error:
            raise self.error
        return self.text


def make_extractor(config=None, *, converter=None, structured=None):
    return PdfTextExtractor(
        config or ExtractionConfig(),
        converter=converter or StubTier(available=False),
        structured=structured or StubTier(available=False),
    )


def test_literal_tier_wins_for_plain_content_stream():
    result = make_extractor().extract(literal_pdf(PROSE))
    assert result.tier is ExtractionTier.LITERAL
    assert result.text == "\n".join(PROSE)


def test_hex_tier_when_text_is_hex_encoded():
    result = make_extractor().extract(hex_pdf(PROSE))
    assert result.tier is ExtractionTier.HEX
    assert result.text == "\n".join(PROSE)


def test_flate_tier_for_compressed_stream():
    result = make_extractor().extract(flate_pdf(FLATE_PROSE))
    assert result.tier is ExtractionTier.FLATE
    assert result.text == FLATE_PROSE


def test_accepted_tier_skips_escalation():
    converter = StubTier(CLI_TEXT)
    structured = StubTier(STRUCTURED_TEXT)
    result = make_extractor(converter=converter, structured=structured).extract(literal_pdf(PROSE))
    assert result.tier is ExtractionTier.LITERAL
    assert converter.calls == 0
    assert structured.calls == 0


def test_random_bytes_resolve_to_none():
    data = random.Random(7).randbytes(4096)
    result = PdfTextExtractor(ExtractionConfig()).extract(data)
    assert result.tier is ExtractionTier.NONE
    assert result.text == ""


def test_empty_input_resolves_to_none():
    result = make_extractor().extract(b"")
    assert result == ExtractionResult(text="", tier=ExtractionTier.NONE)


def test_same_input_same_result():
    extractor = make_extractor()
    data = literal_pdf(PROSE)
    assert extractor.extract(data) == extractor.extract(data)


def test_force_structured_overrides_byte_acceptance():
    structured = StubTier(STRUCTURED_TEXT)
    config = ExtractionConfig(force_structured=True)
    result = make_extractor(config, structured=structured).extract(literal_pdf(PROSE))
    assert result.tier is ExtractionTier.STRUCTURED
    assert result.text == STRUCTURED_TEXT


def test_forced_structured_with_no_output_falls_back_to_best_candidate():
    config = ExtractionConfig(force_structured=True)
    result = make_extractor(config, structured=StubTier("")).extract(literal_pdf(PROSE))
    assert result.tier is ExtractionTier.FALLBACK_BEST
    assert result.text == "\n".join(PROSE)


def test_structured_needs_minimum_raw_length():
    config = ExtractionConfig(force_structured=True)
    result = make_extractor(config, structured=StubTier("Too short")).extract(literal_pdf(PROSE))
    assert result.tier is ExtractionTier.FALLBACK_BEST


def test_enabled_converter_runs_before_structured():
    converter = StubTier(CLI_TEXT)
    structured = StubTier(STRUCTURED_TEXT)
    config = ExtractionConfig(enable_external_converter=True)
    result = make_extractor(config, converter=converter, structured=structured).extract(b"%PDF-1.4\n%%EOF")
    assert result.tier is ExtractionTier.CLI
    assert result.text == CLI_TEXT
    assert structured.calls == 0


def test_converter_not_tried_without_flag_when_bytes_are_empty():
    # nothing found at all: straight to the structured parser
    converter = StubTier(CLI_TEXT)
    structured = StubTier(STRUCTURED_TEXT)
    result = make_extractor(converter=converter, structured=structured).extract(b"%PDF-1.4\n%%EOF")
    assert converter.calls == 0
    assert result.tier is ExtractionTier.STRUCTURED


def test_weak_byte_signal_tries_converter():
    # two literal strings of digits: found, but cleaned away
    content = b"(12 34 56 78 90 12 34 56 78 90 1) Tj\n(98 76 54 32 10 98 76 54 32 10 9) Tj"
    converter = StubTier(CLI_TEXT)
    result = make_extractor(converter=converter).extract(pdf_with_stream(content))
    assert converter.calls == 1
    assert result.tier is ExtractionTier.CLI


def test_short_converter_output_is_not_accepted():
    converter = StubTier("short")
    config = ExtractionConfig(enable_external_converter=True)
    result = make_extractor(config, converter=converter).extract(b"%PDF-1.4\n%%EOF")
    assert converter.calls == 1
    assert result.tier is ExtractionTier.NONE


def test_unavailable_tiers_are_skipped():
    converter = StubTier(CLI_TEXT, available=False)
    structured = StubTier(STRUCTURED_TEXT, available=False)
    config = ExtractionConfig(enable_external_converter=True, force_structured=True)
    result = make_extractor(config, converter=converter, structured=structured).extract(literal_pdf(PROSE))
    assert converter.calls == 0
    assert structured.calls == 0
    assert result.tier is ExtractionTier.FALLBACK_BEST


def test_failing_tier_falls_back_to_byte_candidates():
    structured = StubTier(error=RuntimeError("parser exploded"))
    config = ExtractionConfig(force_structured=True)
    result = make_extractor(config, structured=structured).extract(literal_pdf(PROSE))
    assert structured.calls == 1
    assert result.tier is ExtractionTier.FALLBACK_BEST
    assert result.text == "\n".join(PROSE)


def test_raw_mode_returns_uncleaned_text():
    lines = ["F_1 F_2 F_3 F_4", "Quarterly operations report for the northern region"]
    result = make_extractor(ExtractionConfig(raw_text=True)).extract(literal_pdf(lines))
    assert result.tier is ExtractionTier.LITERAL
    assert result.text == "\n".join(lines)


# ---- caller-level OCR fallback ----

def test_ocr_not_tried_when_text_layer_is_long_enough():
    text = "x" * 30
    ocr = StubOcr("a much longer OCR transcription of the page")
    result = extract_document_text(
        b"%PDF",
        ExtractionConfig(),
        extractor=StubExtractor(ExtractionResult(text, ExtractionTier.LITERAL)),
        ocr_engine=ocr,
    )
    assert ocr.calls == 0
    assert result.text == text


def test_ocr_used_when_longer_than_text_layer():
    ocr = StubOcr("  Scanned invoice number 4411 for March  ")
    result = extract_document_text(
        b"%PDF",
        ExtractionConfig(),
        extractor=StubExtractor(ExtractionResult("", ExtractionTier.NONE)),
        ocr_engine=ocr,
    )
    assert ocr.calls == 1
    assert result.tier is ExtractionTier.OCR
    assert result.text == "Scanned invoice number 4411 for March"


def test_ocr_output_shorter_than_text_layer_is_ignored():
    original = ExtractionResult("short layer text", ExtractionTier.FALLBACK_BEST)
    result = extract_document_text(
        b"%PDF",
        ExtractionConfig(),
        extractor=StubExtractor(original),
        ocr_engine=StubOcr("tiny"),
    )
    assert result == original


@pytest.mark.parametrize(
    "config, ocr",
    [
        (ExtractionConfig(ocr_enabled=False), StubOcr("Scanned invoice number 4411 for March")),
        (ExtractionConfig(), StubOcr("Scanned invoice number 4411 for March", available=False)),
        (ExtractionConfig(), StubOcr(error=RuntimeError("tesseract crashed"))),
    ],
)
def test_ocr_skipped_or_failed_keeps_text_layer(config, ocr):
    original = ExtractionResult("", ExtractionTier.NONE)
    result = extract_document_text(
        b"%PDF", config, extractor=StubExtractor(original), ocr_engine=ocr
    )
    assert result == original


# ---- escalation thresholds (combined raw byte-scan length) ----

def _vowel_code_lines() -> list[str]:
    # survive the cleaner but have no word-like tokens, so the gate rejects them
    lines = []
    for k in range(4):
        vowels = "aeiou"[k:] + "aeiou"[:k]
        lines.append(" ".join(f"{vowels[i % 5]}{i}" for i in range(10)))
    return lines


def _show_literals(strings: list[str]) -> bytes:
    return pdf_with_stream(b"\n".join(b"(" + s.encode() + b") Tj" for s in strings))


def test_hex_must_beat_literal_length_to_win():
    codes = _vowel_code_lines()
    hex_line = "Revenue grew steadily across every product line"
    content = b"\n".join(
        [b"(" + s.encode() + b") Tj" for s in codes] + [b"<" + hex_line.encode().hex().encode() + b"> Tj"]
    )
    converter, structured = StubTier(CLI_TEXT), StubTier(STRUCTURED_TEXT)

    result = make_extractor(converter=converter, structured=structured).extract(pdf_with_stream(content))

    # hex text alone would pass the gate; here it is shorter than the literal candidate
    assert make_extractor().extract(hex_pdf([hex_line])).tier is ExtractionTier.HEX
    assert result.tier is ExtractionTier.FALLBACK_BEST
    assert result.text == "\n".join(codes)
    assert converter.calls == 0
    assert structured.calls == 0


def test_failing_converter_falls_back_without_structured_run():
    # combined 119: converter is worth a try, structured is not
    converter = StubTier(error=OSError("converter crashed"))
    structured = StubTier(STRUCTURED_TEXT)
    result = make_extractor(converter=converter, structured=structured).extract(_show_literals(_vowel_code_lines()))
    assert converter.calls == 1
    assert structured.calls == 0
    assert result.tier is ExtractionTier.FALLBACK_BEST
    assert result.text == "\n".join(_vowel_code_lines())


def test_weak_signal_escalates_to_structured_after_converter():
    # combined 63
    digits = ["12 34 56 78 90 12 34 56 78 90 1", "98 76 54 32 10 98 76 54 32 10 9"]
    converter, structured = StubTier(""), StubTier(STRUCTURED_TEXT)
    result = make_extractor(converter=converter, structured=structured).extract(_show_literals(digits))
    assert converter.calls == 1
    assert structured.calls == 1
    assert result.tier is ExtractionTier.STRUCTURED


def test_structured_not_tried_at_or_above_80_combined():
    # combined 95
    digits = ["12 34 56 78 90 12 34 56 78 90 1"] * 2 + ["98 76 54 32 10 98 76 54 32 10 9"]
    converter, structured = StubTier(""), StubTier(STRUCTURED_TEXT)
    result = make_extractor(converter=converter, structured=structured).extract(_show_literals(digits))
    assert converter.calls == 1
    assert structured.calls == 0
    assert result.tier is ExtractionTier.NONE


@pytest.mark.parametrize("second_len, converter_calls", [(59, 0), (58, 1)])
def test_converter_threshold_at_120_combined(second_len, converter_calls):
    # "9"*60 + "\n" + "9"*second_len -> combined 120 or 119
    converter = StubTier("")
    make_extractor(converter=converter).extract(_show_literals(["9" * 60, "9" * second_len]))
    assert converter.calls == converter_calls
