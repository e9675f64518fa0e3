"""
CORS middleware — storefront and admin clients call the API cross-origin.

Allowed origins come from CORS_ALLOW_ORIGINS (comma-separated, "*" for any).
Version: 1.0.0
"""
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_hub.core.config import settings
from catalog_hub.core.constants.publishing import DATA_FALLBACK_HEADER, DATA_SOURCE_HEADER


def parse_origins(raw: Optional[str]) -> List[str]:
    origins = [origin.strip() for origin in (raw or "").split(",") if origin.strip()]
    return origins or ["*"]


def apply_cors(app: FastAPI, origins: Optional[str] = None) -> None:
    """Apply CORS middleware; the storefront only needs to read."""
    allowed = parse_origins(origins if origins is not None else settings.cors_allow_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed,
        # Browsers reject credentialed requests against a wildcard origin
        allow_credentials=allowed != ["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[DATA_SOURCE_HEADER, DATA_FALLBACK_HEADER],
    )
