"""
Supabase store — object operations on a Supabase Storage bucket.
Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Union

from catalog_hub.clients.supabase_client import SupabaseClient
from catalog_hub.core.exceptions import StorageConfigurationError, StorageError
from catalog_hub.db.base_store import (
    ObjectListing,
    ObjectStore,
    ObjectSummary,
    StoredObject,
    to_bytes,
)

logger = logging.getLogger("supabase_store")


def _error_status(exc: Exception) -> str:
    status = getattr(exc, "status", None) or getattr(exc, "status_code", None)
    if status is None and exc.args and isinstance(exc.args[0], dict):
        status = exc.args[0].get("statusCode")
    return str(status) if status is not None else ""


def _is_bucket_missing(exc: Exception) -> bool:
    return "bucket not found" in str(exc).lower()


def _is_object_missing(exc: Exception) -> bool:
    """Object-level miss only; a missing bucket is a configuration fault."""
    if _is_bucket_missing(exc):
        return False
    detail = str(exc).lower()
    if "object not found" in detail:
        return True
    return _error_status(exc) == "404" and "not_found" in detail


def _cache_seconds(cache_control: Optional[str]) -> Optional[str]:
    """Storage API takes a bare max-age; 'max-age=300' -> '300'."""
    if not cache_control:
        return None
    for part in cache_control.split(","):
        part = part.strip()
        if part.startswith("max-age="):
            return part.split("=", 1)[1]
    return cache_control if cache_control.isdigit() else None


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


class SupabaseObjectStore(ObjectStore):
    """get / put / delete / list against a Supabase Storage bucket."""

    backend = "supabase"

    def __init__(self, supabase_client: SupabaseClient) -> None:
        self._supabase_client = supabase_client

    @property
    def _bucket(self):
        client = self._supabase_client.client
        return client.storage.from_(self._supabase_client.storage_bucket)

    def _storage_error(self, exc: Exception, op: str, key: Optional[str] = None) -> Exception:
        bucket = self._supabase_client.storage_bucket
        if _is_bucket_missing(exc):
            logger.error(f"Supabase bucket missing bucket={bucket} op={op}: {exc}")
            return StorageConfigurationError(f"Supabase storage bucket '{bucket}' not found")
        logger.info("supabase storage error op=%s key=%s detail=%s", op, key, str(exc))
        return StorageError(self.backend, str(exc), key=key)

    async def get(self, key: str) -> Optional[StoredObject]:
        bucket = self._bucket
        try:
            body = bucket.download(key)
        except Exception as exc:
            if _is_object_missing(exc):
                logger.info("supabase storage get miss key=%s", key)
                return None
            raise self._storage_error(exc, "get", key) from exc
        return StoredObject(key=key, body=to_bytes(body))

    async def put(
        self,
        key: str,
        body: Union[str, bytes],
        content_type: Optional[str] = None,
        cache_control: Optional[str] = None,
    ) -> None:
        bucket = self._bucket
        file_options: Dict[str, str] = {"upsert": "true"}
        if content_type:
            file_options["content-type"] = content_type
        seconds = _cache_seconds(cache_control)
        if seconds:
            file_options["cache-control"] = seconds
        try:
            bucket.upload(path=key, file=to_bytes(body), file_options=file_options)
        except Exception as exc:
            raise self._storage_error(exc, "put", key) from exc

    async def delete(self, key: str) -> None:
        bucket = self._bucket
        try:
            bucket.remove([key])
        except Exception as exc:
            raise self._storage_error(exc, "delete", key) from exc

    async def list(
        self, prefix: str = "", limit: int = 100, cursor: Optional[str] = None
    ) -> ObjectListing:
        bucket = self._bucket
        folder, _, search = prefix.rpartition("/")
        offset = int(cursor) if cursor and cursor.isdigit() else 0
        options: Dict[str, Any] = {"limit": limit + 1, "offset": offset}
        if search:
            options["search"] = search
        try:
            items = bucket.list(folder, options) or []
        except Exception as exc:
            raise self._storage_error(exc, "list", prefix) from exc

        truncated = len(items) > limit
        objects = []
        for item in items[:limit]:
            metadata = item.get("metadata") or {}
            name = item.get("name", "")
            objects.append(
                ObjectSummary(
                    key=f"{folder}/{name}" if folder else name,
                    size=int(metadata.get("size") or 0),
                    uploaded=_parse_timestamp(item.get("updated_at") or item.get("created_at")),
                )
            )
        return ObjectListing(
            objects=objects,
            truncated=truncated,
            cursor=str(offset + limit) if truncated else None,
        )
