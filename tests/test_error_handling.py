"""
Tests for the error envelope returned by the API.

Every failure is reported as {"success": false, "error": {...}, "timestamp": ...}
whatever layer raised it: request validation, routing, services or an
unexpected exception.
"""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from test_fixtures import client, db_session
from main import app
from services.document_service import DocumentService
from services.order_service import OrderService
from app.exceptions import ConfigurationError, ConflictError
from app.config import settings


def assert_envelope(response, status_code: int, code: str):
    assert response.status_code == status_code
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == code
    assert "message" in body["error"]
    assert "timestamp" in body


def test_health_check():
    response = client.get("/health-check")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": settings.app_name}
    assert "X-Request-ID" in response.headers


def test_validation_error(db_session: Session):
    response = client.post("/document-tags", json={})
    assert_envelope(response, 422, "VALIDATION_ERROR")
    assert response.json()["error"]["details"][0]["loc"] == ["body", "name"]


def test_unknown_route():
    assert_envelope(client.get("/no-such-route"), 404, "HTTP_404")


def test_not_found(db_session: Session):
    assert_envelope(client.get("/order-line-groups/12"), 404, "unknown_order_line_group")


def test_service_error_status(db_session: Session, monkeypatch):
    def conflict(db):
        raise ConflictError("Tag already exists")

    monkeypatch.setattr(DocumentService, "list_tags", staticmethod(conflict))
    assert_envelope(client.get("/document-tags"), 409, "CONFLICT_OBJECT")


def test_configuration_error(db_session: Session, monkeypatch):
    def missing(db, group_id):
        raise ConfigurationError("missing_database", code="missing_database")

    monkeypatch.setattr(OrderService, "get_group", staticmethod(missing))
    assert_envelope(client.get("/order-line-groups/1"), 503, "missing_database")


def test_unexpected_error(db_session: Session, monkeypatch):
    def boom(db):
        raise RuntimeError("boom")

    monkeypatch.setattr(DocumentService, "list_tags", staticmethod(boom))
    safe_client = TestClient(app, raise_server_exceptions=False)

    response = safe_client.get("/document-tags")

    assert_envelope(response, 500, "INTERNAL_SERVER_ERROR")
    assert "boom" not in response.text
