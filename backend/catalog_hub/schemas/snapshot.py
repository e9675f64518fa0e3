"""
Snapshot schemas — typed section models, validation results, read results.
Version: 1.0.0
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ButtonLabels(BaseModel):
    model_config = ConfigDict(extra="allow")

    home: str = "Home"
    shop: str = "Shop All"
    search: str = "Search"
    cart: str = "Cart"
    myOrders: str = "My Orders"
    login: str = "Login"
    signOut: str = "Sign Out"
    admin: str = "Admin"


class NavigationSettings(BaseModel):
    """Bottom navigation colours and labels. Defaults are the published fallback."""
    model_config = ConfigDict(extra="allow")

    background: str = "#ffffff"
    text: str = "#111827"
    activeTab: str = "#14b8a6"
    inactiveButton: str = "#f3f4f6"
    borderRadius: str = "full"
    buttonSize: str = "md"
    themeMode: str = "default"
    buttonLabels: ButtonLabels = Field(default_factory=ButtonLabels)


class ValidationStats(BaseModel):
    productCount: int = 0
    categoryCount: int = 0
    reviewCount: int = 0
    offerCount: int = 0


class ValidationResult(BaseModel):
    valid: bool
    errors: List[str] = []
    warnings: List[str] = []
    stats: ValidationStats = Field(default_factory=ValidationStats)


DataSource = Literal["published", "sample"]
FallbackReason = Literal["not_found", "not_configured", "storage_error", "corrupted"]


class ReadResult(BaseModel):
    data: Dict[str, Any]
    source: DataSource
    fallback_reason: Optional[FallbackReason] = None
    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.source == "sample"
