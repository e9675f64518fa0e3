"""
Lazy DI container — singleton access to clients, stores, and services.

Routes obtain services with Depends(get_...), so tests swap them via
app.dependency_overrides. Import individual getters to avoid circular imports.
Version: 1.0.0
"""

from functools import lru_cache

from catalog_hub.core.config import settings
from catalog_hub.clients.r2_client import R2Client
from catalog_hub.clients.supabase_client import SupabaseClient
from catalog_hub.clients.published_data_client import PublishedDataClient
from catalog_hub.db.base_store import ObjectStore
from catalog_hub.db.kv_store import KeyValueStore, MemoryKeyValueStore, RedisKeyValueStore
from catalog_hub.db.memory_store import MemoryObjectStore
from catalog_hub.db.r2_store import R2ObjectStore
from catalog_hub.db.supabase_store import SupabaseObjectStore
from catalog_hub.services.publish_history import PublishHistory
from catalog_hub.services.published_data_reader import PublishedDataReader
from catalog_hub.services.publishing_service import PublishingService


# -- Clients ---------------------------------------------------------------

@lru_cache(maxsize=1)
def get_r2_client() -> R2Client:
    return R2Client(settings)


@lru_cache(maxsize=1)
def get_supabase_client() -> SupabaseClient:
    return SupabaseClient(settings)


@lru_cache(maxsize=1)
def get_published_data_client() -> PublishedDataClient:
    return PublishedDataClient(settings)


# -- Stores ----------------------------------------------------------------

@lru_cache(maxsize=1)
def get_object_store() -> ObjectStore:
    backend = settings.storage_backend
    if backend == "supabase":
        return SupabaseObjectStore(get_supabase_client())
    if backend == "memory":
        return MemoryObjectStore()
    return R2ObjectStore(get_r2_client())


@lru_cache(maxsize=1)
def get_kv_store() -> KeyValueStore:
    if settings.history_backend == "memory":
        return MemoryKeyValueStore()
    return RedisKeyValueStore(settings.redis_url)


# -- Services --------------------------------------------------------------

@lru_cache(maxsize=1)
def get_publish_history() -> PublishHistory:
    return PublishHistory(
        store=get_kv_store(),
        max_records=settings.publish_history_max_records,
        key=settings.publish_history_key,
    )


@lru_cache(maxsize=1)
def get_publishing_service() -> PublishingService:
    return PublishingService(
        object_store=get_object_store(),
        history=get_publish_history(),
        settings=settings,
    )


@lru_cache(maxsize=1)
def get_published_data_reader() -> PublishedDataReader:
    return PublishedDataReader(get_object_store(), settings=settings)
