"""
Key-value stores — the storage handle injected into the publish history ledger.

RedisKeyValueStore persists across restarts; MemoryKeyValueStore is
process-local. Both store plain strings and provide an expiring
single-holder lock (SET NX EX) for read-modify-write callers.
Version: 1.0.0
"""

import logging
import time
from typing import Dict, Optional, Tuple

import redis

from catalog_hub.core.exceptions import StorageError

logger = logging.getLogger("kv_store")


class KeyValueStore:
    """get / set / delete over string values."""

    backend = "base"

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def acquire_lock(self, name: str, token: str, ttl_seconds: int) -> bool:
        """Take the lock if free. Returns False while another holder has it."""
        raise NotImplementedError

    def release_lock(self, name: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    backend = "memory"

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self._locks: Dict[str, Tuple[str, float]] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def acquire_lock(self, name: str, token: str, ttl_seconds: int) -> bool:
        held = self._locks.get(name)
        if held and held[1] > time.monotonic():
            return False
        self._locks[name] = (token, time.monotonic() + ttl_seconds)
        return True

    def release_lock(self, name: str) -> None:
        self._locks.pop(name, None)


class RedisKeyValueStore(KeyValueStore):
    backend = "redis"

    def __init__(self, redis_url: str, client: Optional[redis.Redis] = None) -> None:
        self._redis_url = redis_url
        self._client = client

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis.from_url(self._redis_url, decode_responses=True)
        return self._client

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis get failed key={key}: {e}")
            raise StorageError(self.backend, str(e), key=key) from e

    def set(self, key: str, value: str) -> None:
        try:
            self.client.set(key, value)
        except redis.RedisError as e:
            logger.error(f"Redis set failed key={key}: {e}")
            raise StorageError(self.backend, str(e), key=key) from e

    def delete(self, key: str) -> None:
        try:
            self.client.delete(key)
        except redis.RedisError as e:
            logger.error(f"Redis delete failed key={key}: {e}")
            raise StorageError(self.backend, str(e), key=key) from e

    def acquire_lock(self, name: str, token: str, ttl_seconds: int) -> bool:
        try:
            acquired = self.client.set(name, token, nx=True, ex=ttl_seconds)
        except redis.RedisError as e:
            logger.error(f"Redis lock failed name={name}: {e}")
            raise StorageError(self.backend, str(e), key=name) from e
        if acquired:
            logger.debug(f"Lock ACQUIRED: name={name}, token={token}, ttl={ttl_seconds}s")
        return bool(acquired)

    def release_lock(self, name: str) -> None:
        try:
            self.client.delete(name)
        except redis.RedisError as e:
            logger.error(f"Redis lock release failed name={name}: {e}")
            raise StorageError(self.backend, str(e), key=name) from e
        logger.debug(f"Lock released: name={name}")
