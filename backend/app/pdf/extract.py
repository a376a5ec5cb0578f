"""app/pdf/extract.py

Structured (object-model) PDF -> text extraction.

Preferred backend order:
1) PyMuPDF (fitz)
2) pdfplumber
3) pypdf (very basic)

Backends are imported lazily; the adapter reports which ones are available
so the orchestrator can tell "no backend" apart from "no text".
"""



import importlib.util
import io
import logging

from app.pdf.types import MAX_TEXT_CHARS

logger = logging.getLogger("app.pdf.extract")


_BACKEND_MODULES = {
    "pymupdf": "fitz",
    "pdfplumber": "pdfplumber",
    "pypdf": "pypdf",
}


def _module_available(name: str) -> bool:
    try:
        return importlib.util.find_spec(name) is not None
    except (ImportError, ValueError):
        return False


class StructuredParser:
    """Wraps the object-model text extractors behind one bounded call."""

    def __init__(self, page_limit: int = 30, max_chars: int = MAX_TEXT_CHARS):
        self.page_limit = page_limit
        self.max_chars = max_chars
        self._backends: list[str] | None = None

    @property
    def backends(self) -> list[str]:
        if self._backends is None:
            self._backends = [k for k, mod in _BACKEND_MODULES.items() if _module_available(mod)]
        return self._backends

    @property
    def available(self) -> bool:
        return bool(self.backends)

    def extract(self, pdf_bytes: bytes) -> str:
        """Return raw page text from the first backend that opens the file, else ""."""
        if not pdf_bytes:
            return ""

        for backend in self.backends:
            try:
                return getattr(self, f"_extract_{backend}")(pdf_bytes)
            except Exception as e:
                logger.warning(
                    "pdf.structured.backend_failed",
                    extra={"backend": backend, "error": str(e)},
                )
        return ""

    def _collect(self, page_texts) -> str:
        # page_texts is lazy so pages past the bound are never parsed
        text = ""
        for t in page_texts:
            if t:
                text += t + "\n"
            if len(text) > self.max_chars:
                break
        return text

    def _extract_pymupdf(self, pdf_bytes: bytes) -> str:
        import fitz  # type: ignore

        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        try:
            count = min(doc.page_count, self.page_limit)
            return self._collect(doc.load_page(i).get_text("text") or "" for i in range(count))
        finally:
            doc.close()

    def _extract_pdfplumber(self, pdf_bytes: bytes) -> str:
        import pdfplumber  # type: ignore

        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            pages = pdf.pages[: self.page_limit]
            return self._collect(p.extract_text() or "" for p in pages)

    def _extract_pypdf(self, pdf_bytes: bytes) -> str:
        from pypdf import PdfReader  # type: ignore

        reader = PdfReader(io.BytesIO(pdf_bytes))
        pages = list(reader.pages)[: self.page_limit]
        return self._collect(p.extract_text() or "" for p in pages)
