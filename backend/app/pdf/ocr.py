"""app/pdf/ocr.py

OCR fallback for image-only PDFs.

Pages are rendered with PyMuPDF, pushed through a contrast threshold with
Pillow and recognized with Tesseract (pytesseract). Requires the Tesseract
binary on PATH in addition to the Python packages; when any piece is
missing the engine reports itself unavailable and returns "".
"""



import importlib.util
import io
import logging

from app.pdf.types import MAX_TEXT_CHARS

logger = logging.getLogger("app.pdf.ocr")

WHITE_ABOVE = 180
BLACK_BELOW = 80


def _threshold(v: int) -> int:
    if v > WHITE_ABOVE:
        return 255
    if v < BLACK_BELOW:
        return 0
    return v


def preprocess_for_ocr(image):
    """Grayscale, then push light pixels to white and dark pixels to black.

    Mid-tones are left alone so faint strokes on scans survive.
    """
    return image.convert("L").point(_threshold)


class OcrEngine:
    def __init__(self, page_limit: int = 6, scale: float = 1.5, lang: str = "eng", max_chars: int = MAX_TEXT_CHARS):
        self.page_limit = page_limit
        self.scale = scale
        self.lang = lang
        self.max_chars = max_chars
        self._available: bool | None = None

    @property
    def available(self) -> bool:
        if self._available is None:
            self._available = self._probe()
        return self._available

    def _probe(self) -> bool:
        for mod in ("fitz", "PIL", "pytesseract"):
            if importlib.util.find_spec(mod) is None:
                logger.warning("ocr.unavailable", extra={"missing": mod})
                return False
        try:
            import pytesseract  # type: ignore

            pytesseract.get_tesseract_version()
        except Exception as e:
            logger.warning("ocr.unavailable", extra={"missing": "tesseract", "error": str(e)})
            return False
        return True

    def recognize(self, pdf_bytes: bytes) -> str:
        if not pdf_bytes or not self.available:
            return ""

        import fitz  # type: ignore

        try:
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as e:
            logger.warning("ocr.open_failed", extra={"error": str(e)})
            return ""

        text = ""
        try:
            total = min(doc.page_count, self.page_limit)
            for page_num in range(total):
                try:
                    image = self._render_page(doc, page_num)
                    text += self._recognize_image(preprocess_for_ocr(image)) + "\n"
                except Exception as e:
                    logger.warning("ocr.page_failed", extra={"page": page_num, "error": str(e)})
                    continue
                if len(text) > self.max_chars:
                    break
        finally:
            doc.close()
        return text

    def _render_page(self, doc, page_num: int):
        import fitz  # type: ignore
        from PIL import Image

        page = doc.load_page(page_num)
        pix = page.get_pixmap(matrix=fitz.Matrix(self.scale, self.scale))
        return Image.open(io.BytesIO(pix.tobytes("png")))

    def _recognize_image(self, image) -> str:
        import pytesseract  # type: ignore

        return pytesseract.image_to_string(image, lang=self.lang) or ""
