"""
Publishing service — validate, build, persist and verify the site snapshot.

A publish is one PUT of the whole document to a single well-known key,
followed by a fresh GET of that key. Durability is only claimed once the
read-back parses. No locking: concurrent publishers race, last writer wins.
Version: 1.0.0
"""
import json
import logging
import time
from typing import Any, Dict, Mapping, Optional

from catalog_hub.core.config import Settings
from catalog_hub.core.constants.publishing import (
    OPTIONAL_SECTIONS,
    PUBLISHED_DATA_KEY,
    SNAPSHOT_CACHE_CONTROL,
    SNAPSHOT_CONTENT_TYPE,
)
from catalog_hub.core.exceptions import (
    PublishFailedError,
    PublishVerificationError,
    SnapshotValidationError,
    StorageConfigurationError,
)
from catalog_hub.db.base_store import ObjectStore
from catalog_hub.schemas.history import DataStats, PublishRecordCreate
from catalog_hub.schemas.publishing import PublishResult
from catalog_hub.schemas.snapshot import ValidationResult
from catalog_hub.services.publish_history import PublishHistory
from catalog_hub.services.snapshot_builder import build_snapshot
from catalog_hub.services.validation_service import section_entries, validate_snapshot
from catalog_hub.utils.hash_utils import compute_content_hash
from catalog_hub.utils.timestamps import elapsed_ms, utc_now_iso

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def serialize_snapshot(snapshot: Mapping[str, Any]) -> str:
    """Canonical text form written to storage (pretty-printed JSON)."""
    return json.dumps(snapshot, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class PublishingService:
    def __init__(
        self,
        object_store: ObjectStore,
        history: Optional[PublishHistory] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._store = object_store
        self._history = history
        self._settings = settings
        self._logger = logging.getLogger("publishing_service")

    @property
    def file_name(self) -> str:
        return self._settings.published_data_key if self._settings else PUBLISHED_DATA_KEY

    @property
    def _cache_control(self) -> str:
        return self._settings.snapshot_cache_control if self._settings else SNAPSHOT_CACHE_CONTROL

    def validate(self, data: Optional[Mapping[str, Any]]) -> ValidationResult:
        if self._settings:
            return validate_snapshot(
                data,
                price_warning_threshold=self._settings.price_warning_threshold,
                orphan_policy=self._settings.orphan_product_policy,
            )
        return validate_snapshot(data)

    # ------------------------------------------------------------------
    # Write + verify
    # ------------------------------------------------------------------

    async def publish(self, snapshot: Mapping[str, Any]) -> PublishResult:
        """
        Persist a built snapshot and verify it by reading it back.

        Never raises: every failure comes back as success=False with an
        errorType of "configuration", "storage" or "verification".
        """
        file_name = self.file_name
        content = serialize_snapshot(snapshot)
        body = content.encode("utf-8")
        size = len(body)
        published_at = snapshot.get("published_at")

        self._logger.info(
            "publish start key=%s size=%s backend=%s", file_name, size, self._store.backend
        )

        # --- 1. Write ---
        upload_start = time.perf_counter()
        try:
            await self._store.put(
                file_name,
                body,
                content_type=SNAPSHOT_CONTENT_TYPE,
                cache_control=self._cache_control,
            )
        except StorageConfigurationError as e:
            self._logger.error(f"publish aborted, storage not configured: {e}")
            return PublishResult(
                success=False, fileName=file_name, size=size,
                published_at=published_at, error=str(e), errorType="configuration",
            )
        except Exception as e:
            self._logger.error(f"publish upload failed key={file_name}: {e}")
            return PublishResult(
                success=False, fileName=file_name, size=size,
                uploadTime=elapsed_ms(upload_start),
                published_at=published_at, error=str(e), errorType="storage",
            )
        upload_time = elapsed_ms(upload_start)
        self._logger.info("publish uploaded key=%s upload_ms=%s", file_name, upload_time)

        # --- 2. Verify ---
        verify_start = time.perf_counter()
        try:
            verified = await self._verify(file_name, body)
        except Exception as e:
            verify_time = elapsed_ms(verify_start)
            self._logger.error(f"publish verification failed key={file_name}: {e}")
            return PublishResult(
                success=False, fileName=file_name, size=size,
                uploadTime=upload_time, verifyTime=verify_time,
                published_at=published_at, error=str(e), errorType="verification",
            )
        verify_time = elapsed_ms(verify_start)

        self._logger.info(
            "publish verified key=%s verify_ms=%s keys=%s",
            file_name, verify_time, sorted(verified.keys()),
        )
        return PublishResult(
            success=True,
            fileName=file_name,
            size=size,
            uploadTime=upload_time,
            verifyTime=verify_time,
            published_at=published_at,
            verified=True,
        )

    async def _verify(self, file_name: str, written: bytes) -> Dict[str, Any]:
        stored = await self._store.get(file_name)
        if stored is None:
            raise PublishVerificationError(
                f"Failed to verify published data: {file_name} not found after write"
            )
        try:
            parsed = json.loads(stored.text())
        except (UnicodeDecodeError, ValueError) as e:
            raise PublishVerificationError(
                f"Failed to verify published data: read-back is not valid JSON ({e})"
            ) from e
        if not isinstance(parsed, dict):
            raise PublishVerificationError(
                "Failed to verify published data: read-back is not a JSON object"
            )
        if stored.body != written:
            self._logger.warning(
                "publish read-back differs from written content key=%s written=%s read=%s "
                "(concurrent publisher?)",
                file_name,
                compute_content_hash(written),
                compute_content_hash(stored.body),
            )
        return parsed

    # ------------------------------------------------------------------
    # Full admin flow
    # ------------------------------------------------------------------

    async def publish_data(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate, build, publish and record one admin publish.

        Returns the publish endpoint's success body.
        Raises SnapshotValidationError when hard errors block the publish,
        PublishFailedError when the write or verification fails.
        """
        absent = [name for name in OPTIONAL_SECTIONS if name not in data]
        self._logger.info(
            "publish sections present=%s optional_absent=%s",
            sorted(data.keys()), absent,
        )
        validation = self.validate(data)
        if validation.warnings:
            self._logger.warning(
                "publish validation warnings count=%s first=%s",
                len(validation.warnings), validation.warnings[:5],
            )

        block = self._settings.block_on_validation_errors if self._settings else True
        if validation.errors:
            self._logger.warning(
                "publish validation errors count=%s blocking=%s first=%s",
                len(validation.errors), block, validation.errors[:5],
            )
            if block:
                self._record(
                    status="failed",
                    message="Publish blocked by validation errors",
                    error_message="; ".join(validation.errors[:10]),
                    data_stats=DataStats(
                        productCount=validation.stats.productCount,
                        categoryCount=validation.stats.categoryCount,
                        totalSize=0,
                    ),
                )
                raise SnapshotValidationError(validation.errors, validation.warnings)

        snapshot = build_snapshot(data)
        result = await self.publish(snapshot)

        product_count = len(section_entries(data.get("products")))
        category_count = len(section_entries(data.get("categories")))
        stats = DataStats(
            productCount=product_count,
            categoryCount=category_count,
            totalSize=result.size,
        )

        if not result.success:
            self._record(
                status="failed",
                message="Publish failed",
                error_message=result.error,
                data_stats=stats,
                upload_time=result.uploadTime,
                verify_time=result.verifyTime,
            )
            raise PublishFailedError(
                result.error or "Publish failed",
                error_type=result.errorType,
                result=result,
            )

        self._record(
            status="success",
            message="Data published successfully and verified",
            data_stats=stats,
            upload_time=result.uploadTime,
            verify_time=result.verifyTime,
        )
        return {
            "success": True,
            "message": "Data published successfully and verified",
            "published_at": result.published_at,
            "fileName": result.fileName,
            "size": result.size,
            "uploadTime": result.uploadTime,
            "verifyTime": result.verifyTime,
            "dataKeys": list(data.keys()),
            "productCount": product_count,
            "categoryCount": category_count,
            "warnings": validation.warnings,
            "errors": validation.errors,
        }

    def _record(
        self,
        status: str,
        message: str,
        error_message: Optional[str] = None,
        data_stats: Optional[DataStats] = None,
        upload_time: Optional[int] = None,
        verify_time: Optional[int] = None,
    ) -> None:
        """Ledger write after the attempt resolved; never fails the publish."""
        if self._history is None:
            return
        try:
            self._history.record(
                PublishRecordCreate(
                    timestamp=utc_now_iso(),
                    status=status,
                    message=message,
                    dataStats=data_stats,
                    uploadTime=upload_time,
                    verifyTime=verify_time,
                    errorMessage=error_message,
                )
            )
        except Exception as e:
            self._logger.warning(f"Could not record publish history: {e}")
