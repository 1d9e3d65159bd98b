"""
API tests for the ProCell host application.
"""

from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from procell.core.config import Settings
from procell.domain.cache.value_objects import TTL
from procell.infrastructure.storage import InMemoryStore
from procell.main import create_app
from procell.services.cache import ImageLoadException, LoadedImage
from procell.services.catalog import CatalogClient


async def _load(src):
    if "broken" in src:
        raise ImageLoadException(src)
    return LoadedImage(src=src, content=b"\x89PNG", content_type="image/png")


@pytest.fixture
def image_loader():
    return AsyncMock(side_effect=_load)


@pytest.fixture
def store():
    return InMemoryStore()


class CatalogUpstream:
    """Mock catalog API counting the requests it serves."""

    def __init__(self):
        self.requests = []
        self.status_code = 200

    def __call__(self, request):
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code)
        return httpx.Response(200, json=[{"id": "iphone-15", "brand_id": "apple"}])


@pytest.fixture
def catalog_upstream():
    return CatalogUpstream()


@pytest.fixture
def catalog_client(catalog_upstream):
    return CatalogClient(
        "https://catalog.example.com",
        client=httpx.AsyncClient(transport=httpx.MockTransport(catalog_upstream)),
    )


@pytest.fixture
def client(store, image_loader, catalog_client):
    app = create_app(
        Settings(_env_file=None, ENVIRONMENT="test", DURABLE_STORE_BACKEND="memory"),
        store=store,
        image_loader=image_loader,
        catalog_client=catalog_client,
    )
    with TestClient(app) as test_client:
        yield test_client


CART = {
    "items": [
        {
            "product_id": "iphone-15",
            "name": "iPhone 15",
            "price": 1000,
            "quantity": 2,
            "brand_id": "apple",
            "color": {"name": "Black", "value": "#000000"},
        },
        {
            "product_id": "redmi-13",
            "name": "Redmi 13",
            "price": 500,
            "quantity": 1,
            "brand_id": "xiaomi",
        },
    ],
    "promo": {
        "code": "spring24",
        "brand_discounts": [{"brand_id": "apple", "discount_percentage": 15}],
    },
}


class TestHealth:
    """Test health endpoint."""

    def test_health(self, client):
        response = client.get("/health/")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "test"
        assert body["cache"] == {"sweeper_running": True, "durable_backend": "memory"}
        assert body["telemetry"]["status"] == "disabled"


class TestCacheEndpoints:
    """Test cache administration endpoints."""

    def test_stats_empty(self, client):
        response = client.get("/api/v1/cache/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["memory"]["size"] == 0
        assert body["durable"]["size"] == 0
        assert body["single_flight"] is False

    def test_stats_after_writes(self, client, store):
        manager = client.app.state.cache_manager
        manager.memory.set("brands", ["apple"], TTL.minutes(1))
        manager.durable.set("brands", ["apple"], TTL.minutes(1))

        body = client.get("/api/v1/cache/stats").json()

        assert body["memory"]["keys"] == ["brands"]
        assert body["durable"]["keys"] == ["brands"]
        assert store.keys() == ["procell_brands"]

    def test_metrics(self, client):
        client.app.state.cache_manager.memory.set("brands", ["apple"])

        response = client.get("/api/v1/cache/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert 'procell_cache_entries{tier="memory"} 1.0' in response.text

    def test_cleanup(self, client):
        response = client.post("/api/v1/cache/cleanup")

        assert response.status_code == 200
        assert response.json()["removed"] == 0

    def test_invalidate_key(self, client):
        manager = client.app.state.cache_manager
        manager.memory.set("brands", ["apple"])
        manager.durable.set("brands", ["apple"])

        response = client.delete("/api/v1/cache/brands")

        assert response.status_code == 200
        assert response.json() == {"key": "brands", "removed": True}
        assert manager.durable.get("brands") is None

    def test_invalidate_invalid_key(self, client):
        response = client.delete("/api/v1/cache/bad%20key")

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_CACHE_KEY"

    def test_clear(self, client, store):
        store.set_item("other_app", "kept")
        client.app.state.cache_manager.durable.set("brands", ["apple"])

        response = client.delete("/api/v1/cache")

        assert response.status_code == 200
        assert response.json() == {"cleared": True}
        assert store.keys() == ["other_app"]


class TestCatalogEndpoints:
    """Test cached catalog reads."""

    def test_second_read_served_from_cache(self, client, catalog_upstream, store):
        first = client.get("/api/v1/catalog/products")
        second = client.get("/api/v1/catalog/products")

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json() == {
            "resource": "products",
            "count": 1,
            "items": [{"id": "iphone-15", "brand_id": "apple"}],
        }
        assert len(catalog_upstream.requests) == 1
        assert store.keys() == ["procell_catalog_products"]

    def test_durable_entry_avoids_upstream(self, client, catalog_upstream):
        client.app.state.cache_manager.durable.set("catalog_reviews", [{"rating": 5}])

        body = client.get("/api/v1/catalog/reviews").json()

        assert body["items"] == [{"rating": 5}]
        assert catalog_upstream.requests == []

    def test_invalidate_forces_refetch(self, client, catalog_upstream):
        client.get("/api/v1/catalog/products")
        client.delete("/api/v1/cache/catalog_products")
        client.get("/api/v1/catalog/products")

        assert len(catalog_upstream.requests) == 2

    def test_unknown_resource(self, client, catalog_upstream):
        response = client.get("/api/v1/catalog/users")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "UNKNOWN_CATALOG_RESOURCE"
        assert catalog_upstream.requests == []

    def test_upstream_failure_is_not_cached(self, client, catalog_upstream):
        catalog_upstream.status_code = 503

        response = client.get("/api/v1/catalog/products")

        assert response.status_code == 502
        assert response.json()["detail"]["error"] == "CATALOG_UPSTREAM_ERROR"

        catalog_upstream.status_code = 200
        assert client.get("/api/v1/catalog/products").status_code == 200
        assert len(catalog_upstream.requests) == 2

    def test_not_configured(self, store, image_loader):
        app = create_app(
            Settings(_env_file=None, ENVIRONMENT="test", DURABLE_STORE_BACKEND="memory"),
            store=store,
            image_loader=image_loader,
        )
        with TestClient(app) as test_client:
            response = test_client.get("/api/v1/catalog/products")

        assert response.status_code == 503
        assert response.json()["detail"]["error"] == "CATALOG_NOT_CONFIGURED"


class TestImageEndpoints:
    """Test image preloading endpoint."""

    def test_preload(self, client, image_loader):
        response = client.post(
            "/api/v1/images/preload",
            json={
                "sources": [
                    "https://images.unsplash.com/photo-1",
                    "https://cdn.example.com/a.png",
                ],
                "width": 200,
                "height": 200,
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["cached"] == 2
        assert "w=200" in body["preloaded"][0]
        assert body["preloaded"][1] == "https://cdn.example.com/a.png"
        assert image_loader.await_count == 2

    def test_preload_failure(self, client):
        response = client.post(
            "/api/v1/images/preload",
            json={"sources": ["https://cdn.example.com/broken.png"]},
        )

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["error"] == "IMAGE_LOAD_ERROR"
        assert detail["details"]["src"] == "https://cdn.example.com/broken.png"

    def test_preload_requires_sources(self, client):
        response = client.post("/api/v1/images/preload", json={"sources": []})
        assert response.status_code == 422


class TestCheckoutEndpoints:
    """Test checkout summary endpoint."""

    def test_summary_without_customer(self, client):
        response = client.post("/api/v1/checkout/summary", json=CART)

        assert response.status_code == 200
        body = response.json()
        assert body["summary"]["totals"] == {
            "subtotal": 2500,
            "discount": 300,
            "total": 2200,
        }
        assert body["summary"]["promo_code"] == "SPRING24"
        assert "notification" not in body

    def test_summary_with_customer(self, client):
        payload = dict(
            CART,
            customer={
                "customer_name": "Test Customer",
                "phone_number": "+1 555 0100",
                "address": "1 Main Street",
            },
        )

        body = client.post("/api/v1/checkout/summary", json=payload).json()

        data = body["notification"]["data"]
        assert body["order_number"].startswith("ORD-")
        assert data["total_price"] == body["summary"]["totals"]["total"]
        assert data["total_discount"] == body["summary"]["totals"]["discount"]
        assert data["items"][0]["price"] == 850

    def test_empty_cart_rejected(self, client):
        response = client.post("/api/v1/checkout/summary", json={"items": []})
        assert response.status_code == 422
