"""Tests for RFC 7807 error handling."""

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from apps.api.core.errors import (
    AppError,
    AuthenticationError,
    IngestionError,
    PersistenceError,
    ValidationError,
    register_error_handlers,
)


@pytest.fixture
def error_app():
    """Create a test app with error handlers registered."""
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/test/not-found")
    async def raise_not_found():
        raise HTTPException(status_code=404, detail="Transaction txn-42 not found")

    @app.get("/test/validation")
    async def raise_validation():
        raise ValidationError("Invalid amount")

    @app.get("/test/auth")
    async def raise_auth():
        raise AuthenticationError()

    @app.get("/test/unhandled")
    async def raise_unhandled():
        raise RuntimeError("Unexpected crash")

    @app.get("/test/ingestion")
    async def raise_ingestion():
        raise IngestionError()

    @app.get("/test/persistence")
    async def raise_persistence():
        raise PersistenceError()

    class Upload(BaseModel):
        amount: int

    @app.post("/test/body")
    async def accept_body(payload: Upload):
        return payload

    return app


@pytest.fixture
def client(error_app):
    return TestClient(error_app, raise_server_exceptions=False)


class TestRFC7807ErrorFormat:
    """All errors should return RFC 7807 Problem Details format."""

    def test_not_found_returns_rfc7807(self, client):
        response = client.get("/test/not-found")
        assert response.status_code == 404
        body = response.json()
        assert body["type"] == "about:blank"
        assert body["title"] == "Not Found"
        assert body["status"] == 404
        assert body["detail"] == "Transaction txn-42 not found"
        assert body["instance"] == "/test/not-found"

    def test_validation_error_returns_rfc7807(self, client):
        response = client.get("/test/validation")
        assert response.status_code == 422
        body = response.json()
        assert body["title"] == "Unprocessable Entity"
        assert body["detail"] == "Invalid amount"

    def test_auth_error_returns_rfc7807(self, client):
        response = client.get("/test/auth")
        assert response.status_code == 401
        body = response.json()
        assert body["title"] == "Unauthorized"

    def test_unhandled_error_returns_rfc7807(self, client):
        response = client.get("/test/unhandled")
        assert response.status_code == 500
        body = response.json()
        assert body["title"] == "Internal Server Error"
        assert body["detail"] == "An unexpected error occurred"

    def test_ingestion_error_keeps_verbatim_message(self, client):
        response = client.get("/test/ingestion")
        assert response.status_code == 422
        assert response.json()["detail"] == "No valid transactions found in file"

    def test_persistence_error_is_bad_gateway(self, client):
        response = client.get("/test/persistence")
        assert response.status_code == 502
        body = response.json()
        assert body["title"] == "Bad Gateway"
        assert body["instance"] == "/test/persistence"

    def test_request_validation_returns_rfc7807(self, client):
        response = client.post("/test/body", json={"amount": "lots"})
        assert response.status_code == 422
        body = response.json()
        assert body["title"] == "Unprocessable Entity"
        assert body["detail"].startswith("body.amount:")
        assert body["errors"][0]["loc"] == ["body", "amount"]
