import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from catalog_hub.core.config import settings
from catalog_hub.core.middleware import apply_cors
from catalog_hub.routes import api_router, health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler.

    On startup:
    - Log the configured storage and history backends
    - Check the publish history store is reachable

    Neither check blocks startup; reads fall back to sample data
    when storage is unavailable.
    """
    logger.info("=== Catalog Hub Starting ===")
    logger.info(
        f"Storage backend={settings.storage_backend} "
        f"history backend={settings.history_backend}"
    )

    try:
        from catalog_hub.container import get_publish_history
        stats = get_publish_history().stats()
        logger.info(
            f"Publish history: {stats.totalAttempts} attempts, "
            f"{stats.successfulPublishes} successful"
        )
    except Exception as e:
        logger.warning(f"Publish history unavailable (Redis may be down): {e}")

    logger.info("=== Catalog Hub Ready ===")

    yield

    logger.info("=== Catalog Hub Shutting Down ===")


app = FastAPI(title="Catalog Hub Backend", lifespan=lifespan)
logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

apply_cors(app)

app.include_router(api_router)
app.include_router(health_router)
