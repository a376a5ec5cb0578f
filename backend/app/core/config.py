# app/core/config.py
import os
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent

class Settings(BaseSettings):
    app_name: str = "DocumentExtractor"
    env: str = "local"
    DATABASE_URL: str = "sqlite:///./documents.db"

    # Uploads
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024  # 10MB

    # =========================
    # PDF text extraction
    # =========================
    PDF_FORCE_STRUCTURED: bool = False
    PDF_ENABLE_EXTERNAL_CONVERTER: bool = False
    PDF_EXTERNAL_CONVERTER_PATH: str = "pdftotext"
    PDF_EXTERNAL_CONVERTER_TIMEOUT_SECONDS: float = 15.0
    PDF_RAW_TEXT: bool = False  # debugging only: skip cleaning + quality gate
    PDF_STRUCTURED_PAGE_LIMIT: int = 30

    # OCR fallback (needs the tesseract binary)
    PDF_OCR_ENABLED: bool = True
    PDF_OCR_PAGE_LIMIT: int = 6
    PDF_OCR_SCALE: float = 1.5

    EXTRACTION_DEBUG: bool = False

    # =========================
    # AI summary / keywords
    # =========================
    AI_ENABLED: bool = True
    AI_TEXT_PREFIX_CHARS: int = 20000
    AI_MAX_KEYWORDS: int = 7

    LLM_PROVIDER: str = "gemini"
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-1.5-pro"

    # Runtime controls
    LLM_TIMEOUT_SECONDS: int = 30
    LLM_MAX_RETRIES: int = 2
    LLM_MAX_OUTPUT_TOKENS: int = 800
    LLM_TEMPERATURE: float = 0.4

    # CORS_ALLOW_ORIGINS="http://localhost:3000,https://docs.example.com"
    CORS_ALLOW_ORIGINS: str | None = None

    model_config = SettingsConfigDict(
        env_file=os.path.join(PROJECT_ROOT, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

settings = Settings()
