"""app/pdf/scanners.py

Byte-level text scanners. No PDF object model is built here; each scanner
looks for one content-stream idiom with a regex and returns whatever text it
can recover.

Contract shared by all scanners:
- input is the raw file bytes, read as latin-1 so byte offsets are preserved
- output is a single newline-joined blob, "" when nothing matched
- output stops growing once it passes MAX_TEXT_CHARS
- never raises; an internal fault is logged and becomes ""
"""



import logging
import re
import zlib
from itertools import islice

from app.pdf.types import MAX_TEXT_CHARS

logger = logging.getLogger("app.pdf.scanners")


# (literal) Tj | (literal) TJ, with backslash escapes allowed inside
_LITERAL_RE = re.compile(r"\(([^()\\]*(?:\\.[^()\\]*)*)\)\s*(?:Tj|TJ)", re.DOTALL)
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "(": "(",
    ")": ")",
    "\\": "\\",
}

_HEX_RE = re.compile(r"<([0-9A-Fa-f]{4,})>\s*(?:Tj|TJ)")

_STREAM_RE = re.compile(r"stream\r?\n(.*?)\r?\nendstream", re.DOTALL)
_WORD_RE = re.compile(r"[A-Za-z][A-Za-z0-9_-]{2,}")
_MIN_STREAM_WORDS = 10
_MAX_STREAM_WORDS = 2000
_MAX_INFLATED_BYTES = 4 * 1024 * 1024


def _latin1(data: bytes) -> str:
    return bytes(data or b"").decode("latin-1")


def unescape_literal(s: str) -> str:
    """Resolve PDF literal-string escapes. Unknown escapes keep the character."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), s)


def decode_hex_glyphs(hex_str: str) -> str:
    out: list[str] = []
    for i in range(0, len(hex_str), 2):
        byte = int(hex_str[i:i + 2], 16)
        if byte in (0x0A, 0x0D):
            out.append("\n")
        elif 32 <= byte <= 126:
            out.append(chr(byte))
    return "".join(out)


def scan_literal_strings(data: bytes) -> str:
    try:
        results: list[str] = []
        total = 0
        for m in _LITERAL_RE.finditer(_latin1(data)):
            s = unescape_literal(m.group(1)).strip()
            if not s:
                continue
            results.append(s)
            total += len(s) + 1
            if total > MAX_TEXT_CHARS:
                break
        return "\n".join(results)
    except Exception:
        logger.warning("pdf.scan.literal_failed", exc_info=True)
        return ""


def scan_hex_strings(data: bytes) -> str:
    try:
        results: list[str] = []
        total = 0
        for m in _HEX_RE.finditer(_latin1(data)):
            s = decode_hex_glyphs(m.group(1)).strip()
            if not s:
                continue
            results.append(s)
            total += len(s) + 1
            if total > MAX_TEXT_CHARS:
                break
        return "\n".join(results)
    except Exception:
        logger.warning("pdf.scan.hex_failed", exc_info=True)
        return ""


def _inflate(raw: str) -> str | None:
    # bounded: a tiny stream of zeros can inflate to gigabytes
    d = zlib.decompressobj()
    try:
        out = d.decompress(raw.encode("latin-1"), _MAX_INFLATED_BYTES)
    except zlib.error:
        return None
    if not d.eof and not d.unconsumed_tail:
        # truncated stream
        return None
    return out.decode("utf-8", errors="replace")


def scan_flate_streams(data: bytes) -> str:
    try:
        out: list[str] = []
        total = 0
        for m in _STREAM_RE.finditer(_latin1(data)):
            inflated = _inflate(m.group(1))
            if inflated is None:
                # image/font data or a corrupt stream
                continue
            words = [w.group(0) for w in islice(_WORD_RE.finditer(inflated), _MAX_STREAM_WORDS)]
            if len(words) <= _MIN_STREAM_WORDS:
                continue
            chunk = " ".join(words)
            out.append(chunk)
            total += len(chunk) + 1
            if total > MAX_TEXT_CHARS:
                break
        return "\n".join(out)
    except Exception:
        logger.warning("pdf.scan.flate_failed", exc_info=True)
        return ""
