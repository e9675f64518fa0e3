"""
Publish history routes — operator view of past publish attempts.

Provides:
- GET    /api/publish-history         – records, newest first
- GET    /api/publish-history/stats   – attempt counts and success rate
- DELETE /api/publish-history         – clear the ledger
Version: 1.0.0
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from catalog_hub.container import get_publish_history
from catalog_hub.core.exceptions import StorageError
from catalog_hub.schemas.history import PublishRecord, PublishStats
from catalog_hub.services.publish_history import PublishHistory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/publish-history", tags=["publish-history"])


@router.get("", response_model=List[PublishRecord])
async def list_publish_history(
    status: Optional[str] = Query(None, pattern="^(success|failed)$"),
    history: PublishHistory = Depends(get_publish_history),
):
    try:
        if status == "success":
            return history.successful()
        if status == "failed":
            return history.failed()
        return history.list()
    except StorageError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@router.get("/stats", response_model=PublishStats)
async def publish_history_stats(history: PublishHistory = Depends(get_publish_history)):
    try:
        return history.stats()
    except StorageError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@router.delete("")
async def clear_publish_history(history: PublishHistory = Depends(get_publish_history)):
    try:
        history.clear()
    except StorageError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return {"success": True, "message": "Publish history cleared"}
