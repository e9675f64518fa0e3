"""
Publishing schemas — publish request/response models and the publisher result.
Version: 1.0.0
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel

from .snapshot import ValidationStats


class PublishDataRequest(BaseModel):
    data: Optional[Dict[str, Any]] = None


PublishErrorType = Literal["configuration", "storage", "verification"]


class PublishResult(BaseModel):
    """Outcome of a single write-then-verify round trip."""
    success: bool
    fileName: str
    size: int = 0
    uploadTime: Optional[int] = None
    verifyTime: Optional[int] = None
    published_at: Optional[str] = None
    verified: bool = False
    error: Optional[str] = None
    errorType: Optional[PublishErrorType] = None


class PublishDataResponse(BaseModel):
    success: bool
    message: str
    published_at: str
    fileName: str
    size: int
    uploadTime: int
    verifyTime: int
    dataKeys: List[str]
    productCount: int
    categoryCount: int
    warnings: List[str] = []
    errors: List[str] = []


class ValidateDataResponse(BaseModel):
    valid: bool
    errors: List[str] = []
    warnings: List[str] = []
    stats: ValidationStats
    summary: str
