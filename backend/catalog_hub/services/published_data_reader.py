"""
Published data reader — storefront-side access to the live snapshot.

Fallback ladder: published snapshot -> sample snapshot (flagged with the
reason). read() never raises; fetch_raw() raises typed errors for the
GET endpoint, which must tell "not found" apart from "corrupted".
Version: 1.0.0
"""
import copy
import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from catalog_hub.core.config import Settings
from catalog_hub.core.constants.publishing import PUBLISHED_DATA_KEY
from catalog_hub.core.constants.sample_data import SAMPLE_SNAPSHOT
from catalog_hub.core.exceptions import (
    CorruptedSnapshotError,
    SnapshotNotFoundError,
    StorageConfigurationError,
)
from catalog_hub.db.base_store import ObjectStore
from catalog_hub.schemas.snapshot import FallbackReason, ReadResult
from catalog_hub.services.validation_service import section_entries

logger = logging.getLogger("published_data_reader")


def sample_snapshot() -> Dict[str, Any]:
    """Fresh copy of the sample snapshot; callers may mutate it freely."""
    return copy.deepcopy(SAMPLE_SNAPSHOT)


def fallback_result(reason: FallbackReason, error: Optional[str] = None) -> ReadResult:
    return ReadResult(
        data=sample_snapshot(),
        source="sample",
        fallback_reason=reason,
        error=error,
    )


def object_to_list(section: Any) -> List[Dict[str, Any]]:
    """Section entries as a list of dicts carrying their id under 'id'."""
    return [
        {**entry, "id": entry_id}
        for entry_id, entry in section_entries(section)
        if isinstance(entry, Mapping)
    ]


class PublishedDataReader:
    def __init__(self, object_store: ObjectStore, settings: Optional[Settings] = None) -> None:
        self._store = object_store
        self._key = settings.published_data_key if settings else PUBLISHED_DATA_KEY

    async def fetch_raw(self) -> str:
        """
        Raw snapshot text exactly as stored.

        Raises:
            StorageConfigurationError: storage binding missing
            SnapshotNotFoundError: nothing published yet
            CorruptedSnapshotError: object exists but is not valid JSON
        """
        stored = await self._store.get(self._key)
        if stored is None:
            logger.info("published data not found key=%s", self._key)
            raise SnapshotNotFoundError(f"No published data found at {self._key}")
        try:
            text = stored.text()
            json.loads(text)
        except (UnicodeDecodeError, ValueError) as e:
            logger.error(f"Invalid JSON in published data key={self._key}: {e}")
            raise CorruptedSnapshotError("Invalid data format in storage") from e
        logger.info("published data fetched key=%s size=%s", self._key, stored.size)
        return text

    async def read(self) -> ReadResult:
        """Published snapshot if readable, otherwise the flagged sample snapshot."""
        try:
            text = await self.fetch_raw()
        except SnapshotNotFoundError:
            return fallback_result("not_found")
        except StorageConfigurationError as e:
            logger.warning(f"Storage not configured, serving sample data: {e}")
            return fallback_result("not_configured", str(e))
        except CorruptedSnapshotError as e:
            logger.error(f"Published data corrupted, serving sample data: {e}")
            return fallback_result("corrupted", str(e))
        except Exception as e:
            logger.error(f"Error reading published data, serving sample data: {e}")
            return fallback_result("storage_error", str(e))

        data = json.loads(text)
        if not isinstance(data, dict):
            logger.error("Published data is not a JSON object, serving sample data")
            return fallback_result("corrupted", "Published data is not a JSON object")
        return ReadResult(data=data, source="published")
