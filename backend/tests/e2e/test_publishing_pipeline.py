"""
End-to-end tests for the publishing pipeline.

Tests the full flow: admin draft -> validate -> publish -> storefront read,
through the HTTP API and the storefront HTTP client, with in-memory
storage standing in for the bucket and the ledger.
Version: 1.0.0
"""
import asyncio
import json

import httpx
import pytest

from catalog_hub.clients.published_data_client import PublishedDataClient
from catalog_hub.main import app


def _draft():
    """Draft with one product missing a description and a category."""
    return {
        "products": {
            "p1": {"name": "A", "price": 100, "image_url": "https://cdn.test/a.png"},
        },
        "categories": {
            "c1": {"name": "C", "image_url": "https://cdn.test/c.png"},
        },
    }


@pytest.mark.e2e
class TestPublishingPipeline:

    def test_validate_then_publish_then_read(self, client):
        draft = _draft()

        check = client.post("/api/validate-data", json={"data": draft}).json()
        assert check["valid"] is True
        assert "Product p1: Missing description" in check["warnings"]
        assert "Product p1: Not assigned to any category" in check["warnings"]

        published = client.post("/api/publish-data", json={"data": draft})
        assert published.status_code == 200
        published_at = published.json()["published_at"]

        served = client.get("/api/storefront-data")
        assert served.headers["x-data-source"] == "published"
        snapshot = served.json()
        assert snapshot["published_at"] == published_at
        assert snapshot["version"] == "1.0.0"
        assert snapshot["products"] == draft["products"]
        assert snapshot["navigation_settings"]["buttonLabels"]["shop"] == "Shop All"

        raw = client.get("/api/get-published-data")
        assert json.loads(raw.text) == snapshot

    def test_republish_replaces_snapshot(self, client):
        first = _draft()
        second = _draft()
        second["products"]["p2"] = {
            "name": "B", "price": 50, "category_id": "c1",
            "description": "b", "image_url": "https://cdn.test/b.png",
        }

        client.post("/api/publish-data", json={"data": first})
        client.post("/api/publish-data", json={"data": second})

        snapshot = client.get("/api/get-published-data").json()
        assert set(snapshot["products"]) == {"p1", "p2"}

        history = client.get("/api/publish-history").json()
        assert len(history) == 2
        assert history[0]["dataStats"]["productCount"] == 2

    def test_blocked_publish_keeps_previous_snapshot(self, client):
        client.post("/api/publish-data", json={"data": _draft()})
        before = client.get("/api/get-published-data").text

        bad = _draft()
        bad["products"]["p1"]["compare_at_price"] = 10
        resp = client.post("/api/publish-data", json={"data": bad})

        assert resp.status_code == 422
        assert client.get("/api/get-published-data").text == before

    def test_storefront_client_reads_published_snapshot(self, client, mock_settings):
        client.post("/api/publish-data", json={"data": _draft()})
        served = client.get("/api/get-published-data")

        def handler(request):
            return httpx.Response(served.status_code, content=served.content)

        result = asyncio.run(
            PublishedDataClient(mock_settings, transport=httpx.MockTransport(handler)).fetch()
        )

        assert result.source == "published"
        assert result.data["products"]["p1"]["name"] == "A"

    def test_app_mounts_api_routes(self):
        paths = {route.path for route in app.routes}
        for path in (
            "/api/publish-data",
            "/api/get-published-data",
            "/api/storefront-data",
            "/api/validate-data",
            "/api/publish-history",
            "/api/publish-history/stats",
            "/api/r2-list",
            "/api/r2-delete",
            "/api/r2-image",
            "/api/r2-upload",
            "/health",
        ):
            assert path in paths
