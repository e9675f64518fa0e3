"""
Publish history — bounded, newest-first ledger of publish attempts.

Advisory only: the published object's read-back is the record of what
is live. Losing or clearing the ledger never affects the snapshot.
Version: 1.0.0
"""
import json
import logging
import secrets
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import ValidationError

from catalog_hub.core.constants.publishing import (
    PUBLISH_HISTORY_KEY,
    PUBLISH_HISTORY_LOCK_TTL,
    PUBLISH_HISTORY_LOCK_WAIT,
    PUBLISH_HISTORY_MAX_RECORDS,
)
from catalog_hub.core.exceptions import StorageError
from catalog_hub.db.kv_store import KeyValueStore
from catalog_hub.schemas.history import PublishRecord, PublishRecordCreate, PublishStats
from catalog_hub.utils.timestamps import epoch_millis

logger = logging.getLogger("publish_history")


class PublishHistory:
    def __init__(
        self,
        store: KeyValueStore,
        max_records: int = PUBLISH_HISTORY_MAX_RECORDS,
        key: str = PUBLISH_HISTORY_KEY,
        lock_wait: float = PUBLISH_HISTORY_LOCK_WAIT,
        lock_ttl: int = PUBLISH_HISTORY_LOCK_TTL,
    ) -> None:
        if max_records < 1:
            raise ValueError("max_records must be at least 1")
        self._store = store
        self._max_records = max_records
        self._key = key
        self._lock_name = f"{key}:lock"
        self._lock_wait = lock_wait
        self._lock_ttl = lock_ttl

    @property
    def max_records(self) -> int:
        return self._max_records

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> List[PublishRecord]:
        stored = self._store.get(self._key)
        if not stored:
            return []
        try:
            raw = json.loads(stored)
            return [PublishRecord.model_validate(item) for item in raw]
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(f"Unreadable publish history, treating as empty: {e}")
            return []

    def _save(self, records: List[PublishRecord]) -> None:
        payload = [record.model_dump(exclude_none=True) for record in records]
        self._store.set(self._key, json.dumps(payload))

    @contextmanager
    def _locked(self) -> Iterator[None]:
        """Serialize read-modify-write of the ledger across workers."""
        token = secrets.token_hex(8)
        deadline = time.monotonic() + self._lock_wait
        while not self._store.acquire_lock(self._lock_name, token, self._lock_ttl):
            if time.monotonic() >= deadline:
                logger.warning(f"Publish history lock HELD: name={self._lock_name}, giving up")
                raise StorageError(
                    self._store.backend, "publish history is locked by another writer", key=self._key
                )
            time.sleep(0.05)
        try:
            yield
        finally:
            self._store.release_lock(self._lock_name)

    def _next_id(self, history: List[PublishRecord]) -> str:
        """Millisecond timestamp, bumped past the newest id so ids stay unique."""
        candidate = epoch_millis()
        if history and history[0].id.isdigit():
            candidate = max(candidate, int(history[0].id) + 1)
        return str(candidate)

    # ------------------------------------------------------------------
    # Ledger API
    # ------------------------------------------------------------------

    def record(self, entry: Union[PublishRecordCreate, Dict[str, Any]]) -> PublishRecord:
        """Prepend an attempt and drop everything past the retention bound."""
        if isinstance(entry, dict):
            entry = PublishRecordCreate.model_validate(entry)
        with self._locked():
            history = self._load()
            new_record = PublishRecord(id=self._next_id(history), **entry.model_dump())
            trimmed = [new_record] + history[: self._max_records - 1]
            self._save(trimmed)
        logger.info(
            "publish history record id=%s status=%s kept=%s",
            new_record.id,
            new_record.status,
            len(trimmed),
        )
        return new_record

    def list(self) -> List[PublishRecord]:
        """All retained records, newest first."""
        return self._load()

    def last(self) -> Optional[PublishRecord]:
        history = self._load()
        return history[0] if history else None

    def successful(self) -> List[PublishRecord]:
        return [record for record in self._load() if record.status == "success"]

    def failed(self) -> List[PublishRecord]:
        return [record for record in self._load() if record.status == "failed"]

    def clear(self) -> None:
        with self._locked():
            self._store.delete(self._key)
        logger.info("publish history cleared")

    def stats(self) -> PublishStats:
        history = self._load()
        successful = [record for record in history if record.status == "success"]
        total = len(history)
        return PublishStats(
            totalAttempts=total,
            successfulPublishes=len(successful),
            failedPublishes=total - len(successful),
            successRate=round(len(successful) / total * 100, 1) if total else 0,
            lastPublishTime=successful[0].timestamp if successful else None,
        )


def format_record(record: PublishRecord) -> str:
    """One-line operator summary of a ledger entry."""
    try:
        moment = datetime.fromisoformat(record.timestamp.replace("Z", "+00:00"))
        when = moment.strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        when = record.timestamp
    mark = "OK" if record.status == "success" else "FAILED"

    info = f"[{mark}] {when} - {record.message}"
    if record.dataStats:
        info += (
            f" ({record.dataStats.productCount} products, "
            f"{record.dataStats.categoryCount} categories)"
        )
    if record.uploadTime:
        info += f" [{record.uploadTime}ms]"
    if record.errorMessage:
        info += f" - Error: {record.errorMessage}"
    return info
