"""
Base object store — the storage binding contract shared by all backends.

Every backend exposes get / put / delete / list over string keys.
A missing object is a None result from get(), never an exception;
a missing binding raises StorageConfigurationError.
Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union

logger = logging.getLogger("base_store")


@dataclass(frozen=True)
class StoredObject:
    key: str
    body: bytes
    content_type: Optional[str] = None
    cache_control: Optional[str] = None
    uploaded: Optional[datetime] = None

    @property
    def size(self) -> int:
        return len(self.body)

    def text(self) -> str:
        return self.body.decode("utf-8")


@dataclass(frozen=True)
class ObjectSummary:
    key: str
    size: int
    uploaded: Optional[datetime] = None


@dataclass
class ObjectListing:
    objects: List[ObjectSummary] = field(default_factory=list)
    truncated: bool = False
    cursor: Optional[str] = None


def to_bytes(body: Union[str, bytes]) -> bytes:
    return body.encode("utf-8") if isinstance(body, str) else body


class ObjectStore:
    """Base class for object storage backends."""

    backend = "base"

    async def get(self, key: str) -> Optional[StoredObject]:
        raise NotImplementedError

    async def put(
        self,
        key: str,
        body: Union[str, bytes],
        content_type: Optional[str] = None,
        cache_control: Optional[str] = None,
    ) -> None:
        raise NotImplementedError

    async def delete(self, key: str) -> None:
        raise NotImplementedError

    async def list(
        self, prefix: str = "", limit: int = 100, cursor: Optional[str] = None
    ) -> ObjectListing:
        raise NotImplementedError
