"""
Health routes — liveness probe and storage configuration summary.
Version: 1.0.0
"""
from fastapi import APIRouter, Depends

from catalog_hub.core.config import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "storage_backend": settings.storage_backend,
        "history_backend": settings.history_backend,
    }
