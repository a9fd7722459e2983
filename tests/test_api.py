from decimal import Decimal
import io

import pytest
from fastapi.testclient import TestClient

from src.api.deps import get_document_analyzer
from src.api.main import app
from src.core.config import settings
from src.core.exceptions import AnalysisServiceError, ServiceNotConfiguredError
from src.services.analysis_types import AnalysisResult, LineItem

client = TestClient(app)


@pytest.fixture
def analyzer():
    """Replace the Azure-backed analyzer; the test sets `calls` and `outcome`"""
    state = {"calls": [], "outcome": AnalysisResult()}

    def fake(content: bytes):
        state["calls"].append(content)
        outcome = state["outcome"]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    app.dependency_overrides[get_document_analyzer] = lambda: fake
    try:
        yield state
    finally:
        app.dependency_overrides.pop(get_document_analyzer, None)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["azure_configured"] == settings.is_azure_configured


def test_analyze_multipart_upload(analyzer):
    analyzer["outcome"] = AnalysisResult(
        vendor_name="Acme GmbH",
        total_amount=Decimal("99.00"),
        currency_code="EUR",
        items=[LineItem(description="Widget", total_price=Decimal("99.00"))],
        raw_fields={"VendorName": "Acme GmbH"},
    )
    files = {"file": ("sample.pdf", io.BytesIO(b"%PDF-1.4 minimal"), "application/pdf")}
    r = client.post("/documents/analyze", files=files)

    assert r.status_code == 200
    body = r.json()
    assert body["vendor_name"] == "Acme GmbH"
    assert Decimal(body["total_amount"]) == Decimal("99.00")
    assert body["currency_code"] == "EUR"
    assert body["items"][0]["description"] == "Widget"
    assert body["invoice_date"] is None
    assert analyzer["calls"] == [b"%PDF-1.4 minimal"]


def test_analyze_raw_body(analyzer):
    r = client.post(
        "/documents/analyze",
        content=b"\x89PNG fake",
        headers={"content-type": "image/png"},
    )
    assert r.status_code == 200
    assert analyzer["calls"] == [b"\x89PNG fake"]


def test_missing_file_returns_422(analyzer):
    r = client.post("/documents/analyze")
    assert r.status_code == 422
    assert analyzer["calls"] == []


def test_empty_upload_returns_422(analyzer):
    files = {"file": ("empty.pdf", io.BytesIO(b""), "application/pdf")}
    r = client.post("/documents/analyze", files=files)
    assert r.status_code == 422


def test_unsupported_type_returns_415(analyzer):
    files = {"file": ("notes.txt", io.BytesIO(b"hello"), "text/plain")}
    r = client.post("/documents/analyze", files=files)
    assert r.status_code == 415
    assert analyzer["calls"] == []


def test_oversize_upload_returns_413(analyzer):
    original_limit = settings.max_upload_bytes
    settings.max_upload_bytes = 8

    try:
        files = {"file": ("big.pdf", io.BytesIO(b"%PDF-1.4 minimal"), "application/pdf")}
        r = client.post("/documents/analyze", files=files)
        assert r.status_code == 413
    finally:
        settings.max_upload_bytes = original_limit


@pytest.mark.parametrize(
    "error, status",
    [
        (ServiceNotConfiguredError("Azure Document Intelligence is not configured."), 503),
        (AnalysisServiceError("Document analysis failed: timeout"), 502),
    ],
)
def test_service_errors_are_mapped(analyzer, error, status):
    analyzer["outcome"] = error
    files = {"file": ("sample.pdf", io.BytesIO(b"%PDF-1.4 minimal"), "application/pdf")}
    r = client.post("/documents/analyze", files=files)
    assert r.status_code == status
    assert r.json()["detail"] == error.message
