"""app/pdf/quality.py

Cheap, explainable heuristics to clean and score extracted PDF text.

The byte scanners return a lot of structural residue (font resource names,
marked-content operators, dictionary keys). The cleaner drops those lines;
the quality gate then decides whether what is left reads like language.
"""



import re

from app.pdf.types import MAX_TEXT_CHARS, QualityReport


ACCEPT_SCORE = 0.18
ACCEPT_TOKEN_COUNT = 50

_FONT_REF_RE = re.compile(r"F_\d+")
_FONT_REF_WORD_RE = re.compile(r"\bF_\d+\b")
_FONT_REF_RUN_RE = re.compile(r"^(?:F_\d+\s+){3,}F_\d+$")
_FONT_REF_ONLY_RE = re.compile(r"^F_\d+$")
_MARKER_LINE_RE = re.compile(r"^(?:Artifact|BDC|EMC|MCID|StructParent|Pagination)$", re.IGNORECASE)
_MARKER_WORD_RE = re.compile(r"\b(?:Artifact|BDC|EMC)\b", re.IGNORECASE)
_WS_RE = re.compile(r"\s+")
_LINE_RE = re.compile(r"\r?\n")
_LETTER_RE = re.compile(r"[A-Za-z]")
_VOWEL_RE = re.compile(r"[AEIOUaeiou]")
_WORDLIKE_RE = re.compile(r"[A-Za-z]{3,}")

_STRUCTURAL_TOKENS = frozenset({
    "CIDInit", "ProcSet", "findresource", "begincmap", "CMapName",
    "defineresource", "FontDescriptor", "FontBBox", "BaseFont", "Encoding",
    "WinAnsiEncoding", "FirstChar", "LastChar", "ToUnicode", "Widths",
    "Catalog", "Pages", "Creator", "CreationDate", "ModDate", "XObject",
    "ImageC", "ImageB", "Type", "Subtype", "Parent", "Resources", "Font",
    "Count", "Kids",
})


def _collapse(s: str) -> str:
    return _WS_RE.sub(" ", s).strip()


def _clean_line(line: str) -> str | None:
    """One pass over a single trimmed line. None means drop."""
    if not line:
        return None
    if _FONT_REF_RUN_RE.match(line) or _FONT_REF_ONLY_RE.match(line):
        return None
    if _MARKER_LINE_RE.match(line):
        return None

    tokens = line.split()
    if len(_FONT_REF_RE.findall(line)) / max(len(tokens), 1) > 0.6:
        return None
    if sum(1 for t in tokens if t in _STRUCTURAL_TOKENS) >= 3:
        return None
    if len(_LETTER_RE.findall(line)) / max(len(line), 1) < 0.25:
        return None

    cleaned = _collapse(_FONT_REF_WORD_RE.sub(" ", line))
    if not cleaned:
        return None
    cleaned = _collapse(_MARKER_WORD_RE.sub("", cleaned))
    if not cleaned:
        return None

    letters = len(_LETTER_RE.findall(cleaned))
    vowel_ratio = len(_VOWEL_RE.findall(cleaned)) / max(letters, 1)
    if vowel_ratio < 0.2 and len(cleaned.split()) < 8:
        return None
    return cleaned


def clean_line(line: str) -> str | None:
    """Clean a line until it stops changing, so cleaned output is stable."""
    current = line.strip()
    while True:
        cleaned = _clean_line(current)
        if cleaned is None or cleaned == current:
            return cleaned
        current = cleaned


def clean_extracted_text(raw: str) -> str:
    kept: list[str] = []
    total = 0
    for line in _LINE_RE.split(raw or ""):
        cleaned = clean_line(line)
        if cleaned is None:
            continue
        # collapse repeated headers/footers
        if kept and kept[-1] == cleaned:
            continue
        added = len(cleaned) + (1 if kept else 0)
        if total + added > MAX_TEXT_CHARS:
            break
        kept.append(cleaned)
        total += added
    return "\n".join(kept)


def signal_score(text: str) -> float:
    tokens = (text or "").split()
    if not tokens:
        return 0.0
    word_like = sum(1 for t in tokens if _WORDLIKE_RE.search(t))
    return word_like / len(tokens)


def is_acceptable(cleaned: str) -> bool:
    tokens = (cleaned or "").split()
    return signal_score(cleaned) >= ACCEPT_SCORE or len(tokens) > ACCEPT_TOKEN_COUNT


def assess(raw: str, *, raw_mode: bool = False) -> QualityReport:
    """Clean a candidate and run the quality gate on the cleaned text."""
    if raw_mode:
        text = raw or ""
        return QualityReport(text=text, score=1.0, token_count=len(text.split()), accepted=True)

    cleaned = clean_extracted_text(raw)
    return QualityReport(
        text=cleaned,
        score=float(round(signal_score(cleaned), 3)),
        token_count=len(cleaned.split()),
        accepted=is_acceptable(cleaned),
    )
