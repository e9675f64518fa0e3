"""
Storage routes — list, serve and delete objects in the site bucket.

Provides:
- GET    /api/r2-list     – paged object listing under a prefix
- GET    /api/r2-image    – serve one stored object
- POST   /api/r2-upload   – store one uploaded image under images/
- DELETE /api/r2-delete   – delete one object by key
- POST   /api/r2-delete   – delete several objects
Version: 1.0.0
"""
import asyncio
import logging
import secrets
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Body, Depends, File, Query, UploadFile
from fastapi.responses import JSONResponse, Response

from catalog_hub.container import get_object_store
from catalog_hub.core.constants.publishing import (
    DEV_MODE_HEADER,
    UPLOAD_KEY_PREFIX,
    UPLOAD_MAX_BYTES,
)
from catalog_hub.core.exceptions import StorageConfigurationError
from catalog_hub.db.base_store import ObjectStore
from catalog_hub.schemas.storage import (
    BulkDeleteRequest,
    DeleteResponse,
    ObjectListResponse,
    StoredObjectInfo,
    UploadResponse,
)
from catalog_hub.utils.timestamps import epoch_millis, to_iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["storage"])


def _image_url(key: str) -> str:
    return f"/api/r2-image?key={quote(key, safe='')}"


def _upload_key(content_type: str) -> str:
    extension = "png" if content_type == "image/png" else "jpg"
    return f"{UPLOAD_KEY_PREFIX}{epoch_millis()}-{secrets.token_hex(4)}.{extension}"


@router.get("/r2-list", response_model=ObjectListResponse)
async def list_objects(
    prefix: str = Query("images/"),
    limit: int = Query(100, ge=1, le=1000),
    cursor: Optional[str] = Query(None),
    store: ObjectStore = Depends(get_object_store),
):
    try:
        listing = await store.list(prefix=prefix, limit=limit, cursor=cursor)
    except Exception as exc:
        logger.error(f"Storage list error prefix={prefix}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    return ObjectListResponse(
        images=[
            StoredObjectInfo(
                key=obj.key,
                size=obj.size,
                uploaded=to_iso(obj.uploaded) if obj.uploaded else None,
                url=_image_url(obj.key),
            )
            for obj in listing.objects
        ],
        truncated=listing.truncated,
        cursor=listing.cursor,
    )


@router.delete("/r2-delete", response_model=DeleteResponse)
async def delete_object(
    key: Optional[str] = Query(None),
    store: ObjectStore = Depends(get_object_store),
):
    if not key:
        return JSONResponse(status_code=400, content={"error": "No key provided"})
    try:
        await store.delete(key)
    except Exception as exc:
        logger.error(f"Storage delete error key={key}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})
    return DeleteResponse(success=True, message="Image deleted successfully")


@router.post("/r2-delete", response_model=DeleteResponse)
async def bulk_delete_objects(
    payload: BulkDeleteRequest = Body(...),
    store: ObjectStore = Depends(get_object_store),
):
    if not payload.keys:
        return JSONResponse(status_code=400, content={"error": "No keys provided"})
    try:
        await asyncio.gather(*(store.delete(key) for key in payload.keys))
    except Exception as exc:
        logger.error(f"Storage bulk delete error count={len(payload.keys)}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})
    return DeleteResponse(
        success=True,
        message=f"{len(payload.keys)} image(s) deleted successfully",
        count=len(payload.keys),
    )


@router.get("/r2-image")
async def get_object(
    key: Optional[str] = Query(None),
    store: ObjectStore = Depends(get_object_store),
):
    if not key:
        return JSONResponse(status_code=400, content={"error": "No key provided"})
    try:
        stored = await store.get(key)
    except Exception as exc:
        logger.error(f"Storage get error key={key}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})
    if stored is None:
        return JSONResponse(status_code=404, content={"error": "Image not found"})
    return Response(
        content=stored.body,
        media_type=stored.content_type or "application/octet-stream",
        headers={"Cache-Control": stored.cache_control or "public, max-age=86400"},
    )


@router.post("/r2-upload", response_model=UploadResponse)
async def upload_image(
    file: Optional[UploadFile] = File(None),
    store: ObjectStore = Depends(get_object_store),
):
    if file is None:
        return JSONResponse(status_code=400, content={"error": "No file provided"})

    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        return JSONResponse(status_code=400, content={"error": "File must be an image"})

    body = await file.read()
    if len(body) > UPLOAD_MAX_BYTES:
        return JSONResponse(status_code=400, content={"error": "File size must be less than 2MB"})

    key = _upload_key(content_type)
    try:
        await store.put(key, body, content_type=content_type)
    except StorageConfigurationError as exc:
        logger.warning(f"Storage not configured, upload not stored key={key}: {exc}")
        return JSONResponse(
            content={
                "url": f"{_image_url(key)}&_demo=true",
                "fileName": file.filename,
                "size": len(body),
                "type": content_type,
                "_note": "Demo mode - storage not configured",
            },
            headers={DEV_MODE_HEADER: "true"},
        )
    except Exception as exc:
        logger.error(f"Storage upload error key={key}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    logger.info("storage upload key=%s size=%s type=%s", key, len(body), content_type)
    return UploadResponse(
        url=_image_url(key),
        fileName=file.filename or key,
        size=len(body),
        type=content_type,
    )
