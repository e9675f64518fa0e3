"""
Storage schemas — object listing, upload and bulk delete models.
Version: 1.0.0
"""
from typing import List, Optional

from pydantic import BaseModel


class StoredObjectInfo(BaseModel):
    key: str
    size: int
    uploaded: Optional[str] = None
    url: Optional[str] = None


class ObjectListResponse(BaseModel):
    images: List[StoredObjectInfo]
    truncated: bool = False
    cursor: Optional[str] = None


class BulkDeleteRequest(BaseModel):
    keys: Optional[List[str]] = None


class DeleteResponse(BaseModel):
    success: bool
    message: str
    count: Optional[int] = None


class UploadResponse(BaseModel):
    url: str
    fileName: str
    size: int
    type: str
