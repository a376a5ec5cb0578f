import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db, get_document_service
from app.main import app
from app.models import Base
from app.pdf.pipeline import PdfTextExtractor
from app.pdf.types import ExtractionConfig
from app.services.document_service import DocumentService
from app.services.summary_service import SummaryService


class NoOcr:
    available = False

    def recognize(self, pdf_bytes: bytes) -> str:
        return ""


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    db = Session()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def document_service(db_session):
    config = ExtractionConfig(ocr_enabled=False)
    return DocumentService(
        db_session,
        config=config,
        extractor=PdfTextExtractor(config),
        ocr_engine=NoOcr(),
        summarizer=SummaryService(enabled=False),
    )


@pytest.fixture
def client(db_session, document_service):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_document_service] = lambda: document_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
