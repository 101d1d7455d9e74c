"""HTTP API: parsing, scanning, validation and error mapping."""

import pytest
from fastapi.testclient import TestClient

from cardscan.api.routes import contacts
from cardscan.api.schemas import ErrorResponse
from cardscan.infrastructure.storage import CaptureStore
from cardscan.services.ocr import OCREngine
from cardscan.services.parsing import ContactExtractor
from cardscan.services.scanner import CardScanner
from conftest import SAMPLE_CARD_TEXT, FakePredictor, card_predictor


def make_scanner(tmp_path, predictor):
    return CardScanner(
        extractor=ContactExtractor(),
        ocr=OCREngine(predictor=predictor, loader=lambda content: content),
        store=CaptureStore(base_path=tmp_path / "captures"),
    )


@pytest.fixture
def app_env(monkeypatch, tmp_path):
    monkeypatch.setenv("CARDSCAN_DEBUG", "true")
    monkeypatch.setenv("CARDSCAN_STORAGE_PATH", str(tmp_path / "captures"))


@pytest.fixture
def client(app_env, tmp_path):
    from cardscan.main import create_app

    contacts.set_scanner(make_scanner(tmp_path, card_predictor(SAMPLE_CARD_TEXT)))
    with TestClient(create_app()) as test_client:
        yield test_client
    contacts.set_scanner(None)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["locale_profile"] == "in"


def test_parse_text(client):
    response = client.post("/api/v1/contacts/parse", json={"text": SAMPLE_CARD_TEXT})

    assert response.status_code == 200
    body = response.json()
    assert body["profile"] == "in"
    assert body["contact"]["name"] == "John Smith"
    assert body["contact"]["job_title"] == "Senior Engineer"
    assert body["contact"]["phone_numbers"] == ["9876543210"]
    assert body["contact"]["address"] == "123 MG Road, Bangalore 560001\nKarnataka"
    assert body["checks"][0]["passed"] is True


def test_parse_unreachable_contact_reports_failed_check(client):
    response = client.post("/api/v1/contacts/parse", json={"text": "Jane Doe\nCEO"})

    body = response.json()
    assert body["contact"]["name"] == "Jane Doe"
    assert body["checks"][0]["passed"] is False


def test_parse_unknown_profile(client):
    response = client.post("/api/v1/contacts/parse", json={"text": "Jane", "profile": "zz"})

    assert response.status_code == 422
    assert response.json()["error"] == "Unknown Profile"


def test_scan_card_image(client, png_bytes):
    response = client.post(
        "/api/v1/contacts/scan",
        files={"image": ("card.png", png_bytes, "image/png")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["contact"]["company"] == "Acme Technologies Pvt Ltd"
    assert body["contact"]["emails"] == ["john@acme.com"]
    assert body["contact"]["website"] == "www.acme.com"
    assert body["image_hash"].startswith("sha256:")
    assert body["ocr_text"].startswith("John Smith\n")
    assert body["review_lines"] == []


def test_scan_rejects_wrong_content_type(client, png_bytes):
    response = client.post(
        "/api/v1/contacts/scan",
        files={"image": ("card.pdf", png_bytes, "application/pdf")},
    )

    assert response.status_code == 400
    body = ErrorResponse.model_validate(response.json())
    assert body.error == "Invalid Capture"
    assert "application/pdf" in body.detail


def test_scan_rejects_unreadable_image(client):
    response = client.post(
        "/api/v1/contacts/scan",
        files={"image": ("card.png", b"not really a png", "image/png")},
    )

    assert response.status_code == 400
    assert response.json()["retryable"] is False


def test_scan_ocr_failure_is_retryable(client, tmp_path, png_bytes):
    contacts.set_scanner(make_scanner(tmp_path, FakePredictor(error=RuntimeError("boom"))))

    response = client.post(
        "/api/v1/contacts/scan",
        files={"image": ("card.png", png_bytes, "image/png")},
    )

    assert response.status_code == 503
    assert response.json()["retryable"] is True


def test_validate_contact(client):
    response = client.post(
        "/api/v1/contacts/validate",
        json={"name": "Jane Doe", "emails": [" jane@acme.com ", ""]},
    )

    body = response.json()
    assert body["valid"] is True
    assert body["contact"]["emails"] == ["jane@acme.com"]


def test_validate_contact_without_phone_or_email(client):
    response = client.post("/api/v1/contacts/validate", json={"name": "Jane Doe"})

    body = response.json()
    assert body["valid"] is False
    assert body["contact"] is None
    assert body["checks"][0]["rule_name"] == "reachable"


def test_debug_trace(client):
    response = client.post("/api/v1/debug/trace", json={"text": "Jane Doe\njane@acme.com"})

    assert response.status_code == 200
    lines = response.json()["lines"]
    assert [(l["pattern"], l["heuristic"]) for l in lines] == [
        ("unmatched", "name"),
        ("email", "none"),
    ]


def test_debug_profile(client):
    response = client.get("/api/v1/debug/profile")

    assert response.status_code == 200
    assert response.json()["profile"]["name"] == "in"


def test_debug_routes_hidden_outside_debug(monkeypatch, tmp_path):
    monkeypatch.setenv("CARDSCAN_DEBUG", "false")
    monkeypatch.setenv("CARDSCAN_STORAGE_PATH", str(tmp_path / "captures"))
    from cardscan.main import create_app

    with TestClient(create_app()) as test_client:
        assert test_client.get("/api/v1/debug/profile").status_code == 404


def test_scan_documents_error_responses(client):
    schema = client.app.openapi()
    responses = schema["paths"]["/api/v1/contacts/scan"]["post"]["responses"]

    for code in ("400", "503"):
        ref = responses[code]["content"]["application/json"]["schema"]["$ref"]
        assert ref.endswith("/ErrorResponse")
    assert "ErrorResponse" in schema["components"]["schemas"]
