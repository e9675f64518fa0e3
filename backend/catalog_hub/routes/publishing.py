"""
Publishing routes — publish, read and validate the site snapshot.

Provides:
- POST /api/publish-data          – validate, build, persist + verify
- GET  /api/get-published-data    – raw published snapshot
- GET  /api/storefront-data       – snapshot or flagged sample data
- POST /api/validate-data         – pre-publish validation report
Version: 1.0.0
"""
import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse, Response

from catalog_hub.container import get_published_data_reader, get_publishing_service
from catalog_hub.core.config import settings
from catalog_hub.core.constants.publishing import DATA_FALLBACK_HEADER, DATA_SOURCE_HEADER
from catalog_hub.core.exceptions import (
    CorruptedSnapshotError,
    PublishFailedError,
    SnapshotNotFoundError,
    SnapshotValidationError,
    StorageConfigurationError,
)
from catalog_hub.schemas.publishing import (
    PublishDataRequest,
    PublishDataResponse,
    ValidateDataResponse,
)
from catalog_hub.services.published_data_reader import PublishedDataReader
from catalog_hub.services.publishing_service import PublishingService
from catalog_hub.services.validation_service import get_data_summary
from catalog_hub.utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["publishing"])


def _read_headers() -> dict:
    return {"Cache-Control": f"public, max-age={settings.read_cache_max_age}"}


@router.post("/publish-data", response_model=PublishDataResponse)
async def publish_data(
    payload: PublishDataRequest = Body(...),
    service: PublishingService = Depends(get_publishing_service),
):
    """Publish the admin's draft as the live snapshot."""
    if payload.data is None:
        return JSONResponse(status_code=400, content={"error": "No data provided"})

    try:
        return await service.publish_data(payload.data)
    except SnapshotValidationError as exc:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Validation failed",
                "errors": exc.errors,
                "warnings": exc.warnings,
                "timestamp": utc_now_iso(),
            },
        )
    except PublishFailedError as exc:
        return JSONResponse(
            status_code=500,
            content={"error": str(exc), "timestamp": utc_now_iso()},
        )
    except Exception as exc:
        logger.error(f"Publish error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": str(exc) or "Publish failed", "timestamp": utc_now_iso()},
        )


@router.get("/get-published-data")
async def get_published_data(
    reader: PublishedDataReader = Depends(get_published_data_reader),
):
    """Serve the stored snapshot text verbatim."""
    try:
        text = await reader.fetch_raw()
    except SnapshotNotFoundError:
        return JSONResponse(
            status_code=404,
            content={"error": "No published data found", "fallback": True},
            headers=_read_headers(),
        )
    except (StorageConfigurationError, CorruptedSnapshotError) as exc:
        return JSONResponse(status_code=500, content={"error": str(exc)}, headers=_read_headers())
    except Exception as exc:
        logger.error(f"Get published data error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": str(exc) or "Failed to get published data",
                "timestamp": utc_now_iso(),
            },
            headers=_read_headers(),
        )

    return Response(content=text, media_type="application/json", headers=_read_headers())


@router.get("/storefront-data")
async def get_storefront_data(
    reader: PublishedDataReader = Depends(get_published_data_reader),
):
    """Always 200: the live snapshot, or sample data marked by headers."""
    result = await reader.read()
    headers = _read_headers()
    headers[DATA_SOURCE_HEADER] = result.source
    if result.fallback_reason:
        headers[DATA_FALLBACK_HEADER] = result.fallback_reason
    return JSONResponse(content=result.data, headers=headers)


@router.post("/validate-data", response_model=ValidateDataResponse)
async def validate_data(
    payload: PublishDataRequest = Body(...),
    service: PublishingService = Depends(get_publishing_service),
):
    """Run pre-publish checks without writing anything."""
    result = service.validate(payload.data)
    return ValidateDataResponse(
        valid=result.valid,
        errors=result.errors,
        warnings=result.warnings,
        stats=result.stats,
        summary=get_data_summary(payload.data),
    )
