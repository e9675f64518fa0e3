"""
Route aggregator — mounts the API routers under the /api prefix.

Health is exported separately for main.py to mount at root.
Version: 1.0.0
"""
from fastapi import APIRouter

from catalog_hub.routes.publishing import router as publishing_router
from catalog_hub.routes.history import router as history_router
from catalog_hub.routes.storage import router as storage_router
from catalog_hub.routes.health import router as health_router

api_router = APIRouter(prefix="/api")

api_router.include_router(publishing_router)
api_router.include_router(history_router)
api_router.include_router(storage_router)

__all__ = ["api_router", "health_router"]
