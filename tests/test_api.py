"""
Tests for the HTTP endpoints.

The row store, cache and settings are swapped through
app.dependency_overrides; nothing talks to Google Sheets or Redis.
"""

import json
import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from api.dependencies import error_envelope, get_response_cache, get_row_store
from api.main import app
from src.errors import RowStoreError
from src.utils.config import Settings, get_settings


@pytest.fixture
def store(row_store, services_tables):
    row_store.add("services-workbook", services_tables)
    return row_store


@pytest.fixture
def client(store, memory_cache):
    app.dependency_overrides[get_row_store] = lambda: store
    app.dependency_overrides[get_response_cache] = lambda: memory_cache
    app.dependency_overrides[get_settings] = lambda: Settings(SERVICES_WORKBOOK_ID="services-workbook")
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client(memory_cache):
    store = MagicMock()
    store.open.side_effect = RowStoreError("Workbook not found: nope")
    app.dependency_overrides[get_row_store] = lambda: store
    app.dependency_overrides[get_response_cache] = lambda: memory_cache
    app.dependency_overrides[get_settings] = lambda: Settings(SERVICES_WORKBOOK_ID="services-workbook")
    yield TestClient(app)
    app.dependency_overrides.clear()


def parse_jsonp(body: str, callback: str):
    assert body.startswith(f"{callback}(") and body.endswith(")")
    return json.loads(body[len(callback) + 1:-1])


# =============================================================================
# HEALTH
# =============================================================================

class TestHealth:
    """Test health endpoints."""

    def test_root(self, client):
        assert client.get("/").json()["status"] == "ok"

    def test_health(self, client):
        data = client.get("/api/health").json()
        assert data["status"] == "ok"
        assert "version" in data


# =============================================================================
# CLIENT REPORT
# =============================================================================

class TestClientReportEndpoint:
    """GET /api/client-report"""

    def test_full_report(self, client):
        response = client.get("/api/client-report", params={"workbookId": "client-workbook-1"})

        assert response.status_code == 200
        data = response.json()
        assert data["websiteStats"]["healthData"]["pageScore"] == 85
        assert data["dashboard"]["client"]["name"] == "Glow Med Spa"

    def test_sections_filter(self, client):
        response = client.get("/api/client-report", params={
            "workbookId": "client-workbook-1",
            "sections": "webhooks,notASection",
        })
        assert response.json() == {"webhooks": {"Report Webhook": "https://hooks.example.com/report"}}

    def test_sections_are_cached(self, client, memory_cache):
        params = {"workbookId": "client-workbook-1", "sections": "webhooks"}
        client.get("/api/client-report", params=params)
        client.get("/api/client-report", params=params)
        assert memory_cache.stats.hits == 1

    def test_cache_bust(self, client, memory_cache):
        params = {"workbookId": "client-workbook-1", "sections": "webhooks"}
        client.get("/api/client-report", params=params)
        client.get("/api/client-report", params={**params, "cacheBust": "1"})
        assert memory_cache.stats.hits == 0
        assert memory_cache.stats.writes == 2

    def test_missing_workbook_id_is_in_band_error(self, client):
        response = client.get("/api/client-report")

        assert response.status_code == 200
        data = response.json()
        assert data["error"] == "Missing required parameter: workbookId"
        assert "MissingParameterError" in data["stack"]

    def test_store_failure_is_in_band_error(self, broken_client):
        response = broken_client.get("/api/client-report", params={"workbookId": "nope"})

        assert response.status_code == 200
        assert response.json()["error"] == "Workbook not found: nope"


# =============================================================================
# SERVICES
# =============================================================================

class TestServicesEndpoint:
    """GET /api/services"""

    def test_rollup(self, client):
        data = client.get("/api/services", params={"location": "Miami, FL"}).json()

        assert [s["name"] for s in data["topServices"]] == ["Botox", "Lip Fillers"]
        assert data["topServices"][0]["trend"] == 1
        assert data["newServices"] == []

    def test_default_location(self, client):
        data = client.get("/api/services").json()
        assert [s["name"] for s in data["newServices"]] == ["Semaglutide"]

    def test_jsonp(self, client):
        response = client.get("/api/services", params={"location": "Canada", "callback": "app.render"})

        assert response.headers["content-type"].startswith("application/javascript")
        data = parse_jsonp(response.text, "app.render")
        assert data["topServices"][0]["totalVolume"] == 900

    def test_invalid_callback_rejected(self, client):
        response = client.get("/api/services", params={"callback": "alert(1)"})

        assert response.headers["content-type"].startswith("application/json")
        data = response.json()
        assert data["error"] == "Invalid callback name"
        assert data["topServices"] == []

    def test_list_cities(self, client):
        data = client.get("/api/services", params={"action": "listCities"}).json()
        assert len(data["cities"]) == 6
        assert data["cities"][0]["label"] == "Miami, FL"

    def test_list_cities_jsonp(self, client):
        response = client.get("/api/services", params={"action": "listCities", "callback": "cb"})
        assert "cities" in parse_jsonp(response.text, "cb")

    def test_failure_keeps_empty_lists(self, broken_client):
        data = broken_client.get("/api/services", params={"location": "USA"}).json()

        assert data["error"] == "Workbook not found: nope"
        assert data["topServices"] == []
        assert data["newServices"] == []

    def test_unconfigured_workbook(self, client):
        app.dependency_overrides[get_settings] = lambda: Settings(SERVICES_WORKBOOK_ID=None)
        data = client.get("/api/services").json()
        assert "SERVICES_WORKBOOK_ID" in data["error"]


# =============================================================================
# CACHE MANAGEMENT
# =============================================================================

class TestCacheEndpoints:
    """/api/cache/*"""

    def test_stats(self, client):
        client.get("/api/client-report", params={"workbookId": "client-workbook-1", "sections": "webhooks"})
        data = client.get("/api/cache/stats").json()

        assert data["backend"] == "memory"
        assert data["namespace"] == "test"
        assert data["misses"] == 1
        assert data["writes"] == 1

    def test_invalidate_workbook(self, client, memory_cache):
        client.get("/api/client-report", params={"workbookId": "client-workbook-1", "sections": "webhooks,dashboard"})
        data = client.post("/api/cache/invalidate/client-workbook-1").json()

        assert data["success"] is True
        assert data["keys_invalidated"] == 2
        assert data["sections"] == ["dashboard", "webhooks"]
        assert len(memory_cache) == 0


class TestSettings:
    """Test environment-driven settings."""

    def test_cors_origins(self):
        settings = Settings(CORS_ORIGINS="https://app.example.com, https://admin.example.com,")
        assert settings.cors_origins == ["https://app.example.com", "https://admin.example.com"]

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SERVICES_WORKBOOK_ID", raising=False)
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        settings = Settings(_env_file=None)
        assert settings.cors_origins == ["*"]
        assert settings.SERVICES_WORKBOOK_ID is None


class TestErrorEnvelope:
    """Test the in-band error payload."""

    def test_includes_stack_and_extra(self):
        try:
            raise ValueError("boom")
        except ValueError as e:
            payload = error_envelope(e, topServices=[])

        assert payload["error"] == "boom"
        assert "ValueError: boom" in payload["stack"]
        assert payload["topServices"] == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
