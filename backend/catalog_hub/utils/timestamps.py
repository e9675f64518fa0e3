"""
Timestamp helpers — UTC ISO-8601 strings in the storefront's format.
Version: 1.0.0
"""
import time
from datetime import datetime, timezone
from typing import Optional


def to_iso(moment: datetime) -> str:
    """Format as '2026-10-19T08:30:00.123Z' (millisecond precision, Z suffix)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """Current UTC time (or the given moment) as an ISO-8601 string."""
    return to_iso(now or datetime.now(timezone.utc))


def epoch_millis() -> int:
    return int(time.time() * 1000)


def elapsed_ms(start: float) -> int:
    """Milliseconds since a time.perf_counter() reading."""
    return int(round((time.perf_counter() - start) * 1000))
