"""
Publishing constants — snapshot schema version, section names, storage metadata.
Version: 1.0.0
"""

# Schema version stamped on every published snapshot
SNAPSHOT_VERSION: str = "1.0.0"

# Well-known object key holding the current snapshot
PUBLISHED_DATA_KEY: str = "site-data.json"

# Object metadata applied on write
SNAPSHOT_CONTENT_TYPE: str = "application/json"
SNAPSHOT_CACHE_CONTROL: str = "max-age=300"

# Cache lifetime advertised by the read endpoint (seconds)
READ_CACHE_MAX_AGE: int = 60

# Fields the builder owns; caller-supplied values are overwritten
BUILDER_OWNED_FIELDS: tuple[str, ...] = ("published_at", "version")

# Sections a snapshot cannot be published without
CRITICAL_SECTIONS: list[str] = ["products", "categories"]

# Sections that may be absent from a candidate
OPTIONAL_SECTIONS: list[str] = [
    "site_settings",
    "navigation_settings",
    "reviews",
    "offers",
    "carousel_images",
    "carousel_settings",
    "homepage_sections",
    "info_sections",
    "marquee_sections",
    "video_sections",
    "video_section_settings",
    "video_overlay_sections",
    "video_overlay_items",
    "default_sections_visibility",
    "card_designs",
    "coupons",
    "try_on_models",
    "tax_settings",
    "footer_settings",
    "footer_config",
    "policies",
    "settings",
    "bill_settings",
]

# Validation thresholds
PRICE_WARNING_THRESHOLD: float = 1_000_000

# Orphaned product handling: product links to a category id that does not exist
ORPHAN_POLICY_WARN: str = "warn"
ORPHAN_POLICY_ERROR: str = "error"
ORPHAN_POLICIES: tuple[str, ...] = (ORPHAN_POLICY_WARN, ORPHAN_POLICY_ERROR)

# Publish history ledger
PUBLISH_HISTORY_KEY: str = "publish_history"
PUBLISH_HISTORY_MAX_RECORDS: int = 50
PUBLISH_HISTORY_LOCK_TTL: int = 10
PUBLISH_HISTORY_LOCK_WAIT: float = 2.0

# Storefront response headers marking where the document came from
DATA_SOURCE_HEADER: str = "X-Data-Source"
DATA_FALLBACK_HEADER: str = "X-Data-Fallback"

# Image uploads
UPLOAD_KEY_PREFIX: str = "images/"
UPLOAD_MAX_BYTES: int = 2 * 1024 * 1024
DEV_MODE_HEADER: str = "X-Dev-Mode"
