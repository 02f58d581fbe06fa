"""Tests for the categorization endpoints."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from apps.api.main import app
from apps.api.core.auth import get_current_user_id
from apps.api.core.store import get_store
from apps.api.domains.categorization import service
from packages.categorization.constants import Category
from packages.categorization.rules import RuleCategorizer


@pytest.fixture(autouse=True)
def fresh_categorizer(monkeypatch):
    categorizer = RuleCategorizer()
    monkeypatch.setattr(service, "_categorizer", categorizer)
    return categorizer


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.list_transactions.return_value = [
        {"id": "1", "description": "STARBUCKS STORE 4522", "merchant": "STARBUCKS"},
        {"id": "2", "description": "WALMART SUPERCENTER", "merchant": "WALMART"},
        {"id": "3", "description": "STARBUCKS STORE 0017", "merchant": "STARBUCKS"},
    ]
    return store


@pytest.fixture
def client(mock_store):
    app.dependency_overrides[get_current_user_id] = lambda: "test-user-id"
    app.dependency_overrides[get_store] = lambda: mock_store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_list_categories(client):
    categories = client.get("/api/v1/categorization/categories").json()["categories"]
    assert categories[0] == "Groceries"
    assert categories[-1] == "Other"
    assert len(categories) == 14


class TestClassify:
    def test_vendor_match(self, client):
        response = client.post(
            "/api/v1/categorization/classify",
            json={"description": "SHELL OIL 5742", "merchant": "SHELL"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["category"] == "Gas/Fuel"
        assert 0 < body["confidence"] <= 100

    def test_unknown_text(self, client):
        response = client.post(
            "/api/v1/categorization/classify", json={"description": "ZQX PLMK 0042"}
        )
        assert response.json() == {"category": "Other", "confidence": 0}

    def test_batch_keeps_order(self, client):
        response = client.post(
            "/api/v1/categorization/classify/batch",
            json={
                "transactions": [
                    {"description": "NETFLIX.COM", "merchant": "NETFLIX"},
                    {"description": "ACH TRANSFER TO SAVINGS"},
                    {"description": "ZQX"},
                ]
            },
        )
        assert response.status_code == 200
        categories = [p["category"] for p in response.json()["predictions"]]
        assert categories == ["Subscriptions", "Transfer", "Other"]

    def test_batch_requires_transactions(self, client):
        response = client.post(
            "/api/v1/categorization/classify/batch", json={"transactions": []}
        )
        assert response.status_code == 400

    def test_requires_auth(self):
        c = TestClient(app)
        response = c.post("/api/v1/categorization/classify", json={"description": "x"})
        assert response.status_code == 401


class TestOverrides:
    def test_override_applies_to_later_requests(self, client):
        before = client.post(
            "/api/v1/categorization/classify",
            json={"description": "ZQX HOBBY BARN", "merchant": "ZQX"},
        )
        assert before.json()["category"] == "Other"

        response = client.post(
            "/api/v1/categorization/overrides",
            json={"vendor": " ZQX Hobby ", "category": "Shopping"},
        )
        assert response.status_code == 201
        assert response.json() == {"vendor": "zqx hobby", "category": "Shopping"}

        after = client.post(
            "/api/v1/categorization/classify",
            json={"description": "ZQX HOBBY BARN", "merchant": "ZQX"},
        )
        assert after.json()["category"] == "Shopping"

    def test_unknown_label_rejected(self, client, fresh_categorizer):
        response = client.post(
            "/api/v1/categorization/overrides",
            json={"vendor": "acme", "category": "Coffee"},
        )
        assert response.status_code == 422
        assert "acme" not in fresh_categorizer.registry


class TestSimilar:
    def test_returns_similar_stored_transactions(self, client, mock_store):
        response = client.post(
            "/api/v1/categorization/similar",
            json={"description": "STARBUCKS STORE 4521", "merchant": "STARBUCKS"},
        )
        assert response.status_code == 200
        body = response.json()
        assert [t["id"] for t in body["transactions"]] == ["1", "3"]
        assert body["count"] == 2
        mock_store.list_transactions.assert_called_once_with("test-user-id")

    def test_custom_threshold(self, client):
        response = client.post(
            "/api/v1/categorization/similar",
            json={"description": "STARBUCKS STORE 4521", "merchant": "STARBUCKS", "threshold": 0.95},
        )
        assert [t["id"] for t in response.json()["transactions"]] == ["1"]

    def test_store_failure_is_502(self, client, mock_store):
        mock_store.list_transactions.side_effect = RuntimeError("timeout")
        response = client.post(
            "/api/v1/categorization/similar", json={"description": "STARBUCKS"}
        )
        assert response.status_code == 502


def test_singleton_seeded_from_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "overrides.json"
    path.write_text(json.dumps({"zqx": "Investment"}))
    monkeypatch.setattr(service.settings, "VENDOR_OVERRIDES_FILE", str(path))
    monkeypatch.setattr(service, "_categorizer", None)

    categorizer = service.get_categorizer()

    assert categorizer is service.get_categorizer()
    assert categorizer.categorize("", "ZQX") == Category.INVESTMENT
