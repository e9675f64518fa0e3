"""
Memory store — process-local object storage for local development and tests.
Version: 1.0.0
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Union

from catalog_hub.db.base_store import (
    ObjectListing,
    ObjectStore,
    ObjectSummary,
    StoredObject,
    to_bytes,
)

logger = logging.getLogger("memory_store")


class MemoryObjectStore(ObjectStore):
    """Dictionary-backed object store with the same contract as R2."""

    backend = "memory"

    def __init__(self) -> None:
        self._objects: Dict[str, StoredObject] = {}

    async def get(self, key: str) -> Optional[StoredObject]:
        return self._objects.get(key)

    async def put(
        self,
        key: str,
        body: Union[str, bytes],
        content_type: Optional[str] = None,
        cache_control: Optional[str] = None,
    ) -> None:
        self._objects[key] = StoredObject(
            key=key,
            body=to_bytes(body),
            content_type=content_type,
            cache_control=cache_control,
            uploaded=datetime.now(timezone.utc),
        )
        logger.info("memory store put key=%s size=%s", key, self._objects[key].size)

    async def delete(self, key: str) -> None:
        self._objects.pop(key, None)

    async def list(
        self, prefix: str = "", limit: int = 100, cursor: Optional[str] = None
    ) -> ObjectListing:
        keys = sorted(key for key in self._objects if key.startswith(prefix))
        if cursor:
            keys = [key for key in keys if key > cursor]
        page = keys[:limit]
        truncated = len(keys) > limit
        return ObjectListing(
            objects=[
                ObjectSummary(
                    key=key,
                    size=self._objects[key].size,
                    uploaded=self._objects[key].uploaded,
                )
                for key in page
            ],
            truncated=truncated,
            cursor=page[-1] if truncated and page else None,
        )
