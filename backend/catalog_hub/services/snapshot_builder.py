"""
Snapshot builder — assembles the versioned document that gets published.

Copies every provided section, stamps publish time and schema version,
and repairs cosmetic sections the storefront cannot render without.
Version: 1.0.0
"""
import copy
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel

from catalog_hub.core.constants.publishing import BUILDER_OWNED_FIELDS, SNAPSHOT_VERSION
from catalog_hub.schemas.snapshot import NavigationSettings
from catalog_hub.utils.timestamps import utc_now_iso

logger = logging.getLogger("snapshot_builder")

# Sections synthesized when absent or empty, keyed by section name
SECTION_DEFAULTS: Dict[str, Callable[[], BaseModel]] = {
    "navigation_settings": NavigationSettings,
}


def _is_empty_section(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (Mapping, list, tuple, str)):
        return len(value) == 0
    return False


def default_section(name: str) -> Dict[str, Any]:
    """Documented default shape for a section."""
    return SECTION_DEFAULTS[name]().model_dump()


def apply_section_defaults(snapshot: Dict[str, Any]) -> list[str]:
    """
    Fill absent or empty defaultable sections in place.

    Returns:
        Names of the sections that received defaults.
    """
    applied = []
    for name in SECTION_DEFAULTS:
        if _is_empty_section(snapshot.get(name)):
            snapshot[name] = default_section(name)
            applied.append(name)
            logger.info("snapshot section=%s not found, applying defaults", name)
        else:
            logger.info("snapshot section=%s found and published", name)
    return applied


def build_snapshot(
    raw: Optional[Mapping[str, Any]],
    now: Optional[datetime] = None,
    version: str = SNAPSHOT_VERSION,
) -> Dict[str, Any]:
    """
    Build the publishable snapshot from raw admin data.

    The caller's draft is deep-copied and never mutated. published_at and
    version always come from the builder, whatever the caller sent.
    """
    snapshot: Dict[str, Any] = copy.deepcopy(dict(raw or {}))
    overridden = [name for name in BUILDER_OWNED_FIELDS if name in snapshot]
    if overridden:
        logger.info("snapshot ignoring caller-supplied fields=%s", overridden)
    apply_section_defaults(snapshot)
    snapshot["published_at"] = utc_now_iso(now)
    snapshot["version"] = version
    return snapshot
