"""
Publish history schemas — ledger records and derived statistics.
Version: 1.0.0
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class DataStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    productCount: int
    categoryCount: int
    totalSize: int


class PublishRecordCreate(BaseModel):
    timestamp: str
    status: Literal["success", "failed"]
    message: str
    dataStats: Optional[DataStats] = None
    uploadTime: Optional[int] = None
    verifyTime: Optional[int] = None
    errorMessage: Optional[str] = None


class PublishRecord(PublishRecordCreate):
    model_config = ConfigDict(frozen=True)

    id: str


class PublishStats(BaseModel):
    totalAttempts: int
    successfulPublishes: int
    failedPublishes: int
    successRate: float
    lastPublishTime: Optional[str] = None
