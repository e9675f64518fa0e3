"""
Centralized constants for Catalog Hub.

Usage:
    from catalog_hub.core.constants.publishing import SNAPSHOT_VERSION
    from catalog_hub.core.constants.sample_data import SAMPLE_SNAPSHOT
    # or import everything:
    from catalog_hub.core.constants import publishing, sample_data
Version: 1.0.0
"""

from catalog_hub.core.constants import publishing, sample_data
from catalog_hub.core.constants.publishing import (
    SNAPSHOT_VERSION,
    PUBLISHED_DATA_KEY,
    SNAPSHOT_CONTENT_TYPE,
    SNAPSHOT_CACHE_CONTROL,
    READ_CACHE_MAX_AGE,
    BUILDER_OWNED_FIELDS,
    CRITICAL_SECTIONS,
    OPTIONAL_SECTIONS,
    PRICE_WARNING_THRESHOLD,
    ORPHAN_POLICY_WARN,
    ORPHAN_POLICY_ERROR,
    ORPHAN_POLICIES,
    PUBLISH_HISTORY_KEY,
    PUBLISH_HISTORY_MAX_RECORDS,
    DATA_SOURCE_HEADER,
    DATA_FALLBACK_HEADER,
)
from catalog_hub.core.constants.sample_data import SAMPLE_SNAPSHOT

__all__ = [
    "publishing",
    "sample_data",
    "SNAPSHOT_VERSION",
    "PUBLISHED_DATA_KEY",
    "SNAPSHOT_CONTENT_TYPE",
    "SNAPSHOT_CACHE_CONTROL",
    "READ_CACHE_MAX_AGE",
    "BUILDER_OWNED_FIELDS",
    "CRITICAL_SECTIONS",
    "OPTIONAL_SECTIONS",
    "PRICE_WARNING_THRESHOLD",
    "ORPHAN_POLICY_WARN",
    "ORPHAN_POLICY_ERROR",
    "ORPHAN_POLICIES",
    "PUBLISH_HISTORY_KEY",
    "PUBLISH_HISTORY_MAX_RECORDS",
    "DATA_SOURCE_HEADER",
    "DATA_FALLBACK_HEADER",
    "SAMPLE_SNAPSHOT",
]
