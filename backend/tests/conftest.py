"""
Pytest configuration and shared fixtures for Catalog Hub tests.

Provides settings, in-memory stores, services, a FastAPI test client
wired to those stores, and sample snapshot data.
Version: 1.0.0
"""
import copy

import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_settings():
    """Settings object with test defaults (no real credentials)."""
    from catalog_hub.core.config import Settings
    return Settings(
        storage_backend="memory",
        r2_account_id=None,
        r2_access_key_id=None,
        r2_secret_access_key=None,
        r2_bucket_name=None,
        r2_endpoint_url=None,
        supabase_url=None,
        supabase_service_role_key=None,
        published_data_key="site-data.json",
        snapshot_cache_control="max-age=300",
        read_cache_max_age=60,
        price_warning_threshold=1_000_000,
        orphan_product_policy="warn",
        block_on_validation_errors=True,
        history_backend="memory",
        publish_history_key="publish_history",
        publish_history_max_records=50,
        published_data_url="http://storefront.test/api/get-published-data",
    )


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

@pytest.fixture
def object_store():
    """Empty in-memory object store."""
    from catalog_hub.db.memory_store import MemoryObjectStore
    return MemoryObjectStore()


@pytest.fixture
def kv_store():
    """Empty in-memory key-value store."""
    from catalog_hub.db.kv_store import MemoryKeyValueStore
    return MemoryKeyValueStore()


@pytest.fixture
def mock_r2_client():
    """Mocked R2Client exposing a MagicMock boto3 client."""
    client = MagicMock()
    client.bucket = "test-bucket"
    client.client = MagicMock()
    return client


@pytest.fixture
def mock_supabase_client():
    """Mocked SupabaseClient with a storage bucket handle."""
    client = MagicMock()
    client.storage_bucket = "site-data"
    bucket = MagicMock()
    client.client.storage.from_.return_value = bucket
    return client


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

@pytest.fixture
def publish_history(kv_store):
    from catalog_hub.services.publish_history import PublishHistory
    return PublishHistory(kv_store, max_records=50)


@pytest.fixture
def publishing_service(object_store, publish_history, mock_settings):
    from catalog_hub.services.publishing_service import PublishingService
    return PublishingService(object_store, history=publish_history, settings=mock_settings)


@pytest.fixture
def published_data_reader(object_store, mock_settings):
    from catalog_hub.services.published_data_reader import PublishedDataReader
    return PublishedDataReader(object_store, settings=mock_settings)


# ---------------------------------------------------------------------------
# FastAPI test client
# ---------------------------------------------------------------------------

@pytest.fixture
def client(object_store, publish_history, publishing_service, published_data_reader):
    """Test client with every storage dependency swapped for memory stores."""
    from catalog_hub.container import (
        get_object_store,
        get_publish_history,
        get_published_data_reader,
        get_publishing_service,
    )
    from catalog_hub.main import app

    app.dependency_overrides[get_object_store] = lambda: object_store
    app.dependency_overrides[get_publish_history] = lambda: publish_history
    app.dependency_overrides[get_publishing_service] = lambda: publishing_service
    app.dependency_overrides[get_published_data_reader] = lambda: published_data_reader
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Sample test data
# ---------------------------------------------------------------------------

_VALID_SNAPSHOT = {
    "products": {
        "p1": {
            "name": "Velvet Headband",
            "price": 250,
            "compare_at_price": 400,
            "description": "Padded velvet headband",
            "image_url": "https://cdn.test/p1.png",
            "category_id": "c1",
        },
        "p2": {
            "name": "Silver Anklet",
            "price": 180,
            "description": "Sterling silver anklet",
            "image_url": "https://cdn.test/p2.png",
            "category_ids": {"c1": True},
        },
    },
    "categories": {
        "c1": {"name": "Accessories", "image_url": "https://cdn.test/c1.png"},
    },
    "reviews": {
        "r1": {"customer_name": "Asha", "review_text": "Lovely quality", "rating": 5},
    },
    "offers": {
        "o1": {"title": "Festive 10% off", "is_active": True},
    },
    "navigation_settings": {
        "background": "#000000",
        "text": "#ffffff",
        "activeTab": "#ff0000",
        "inactiveButton": "#333333",
        "borderRadius": "md",
        "buttonSize": "lg",
        "themeMode": "dark",
        "buttonLabels": {"home": "Start"},
    },
}


@pytest.fixture
def valid_snapshot():
    """Draft that passes validation with no warnings."""
    return copy.deepcopy(_VALID_SNAPSHOT)


@pytest.fixture
def minimal_snapshot():
    """One product, one category, nothing else."""
    return {
        "products": {"p1": {"name": "A", "price": 100, "category_id": "c1"}},
        "categories": {"c1": {"name": "C"}},
    }
