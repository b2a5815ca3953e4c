"""
Timestamp and time-zone utilities.

Manifesto:
    Every layer needs UTC "now", ISO-8601 rendering and IANA zone lookups.
    Without a shared module each caller reinvents these with subtle
    differences (naive vs aware datetimes, offset formatting, what happens
    on an unknown zone name).

    - **utc_now():** Timezone-aware UTC datetime
    - **resolve_time_zone():** IANA name -> ZoneInfo, with a typed error
    - **to_iso8601() / in_time_zone():** Render instants for responses

Tags:
    timestamps, utc, datetime, zoneinfo, iana, session-spine

Doc-Types:
    - API Reference
    - Utility Documentation
"""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sessionspine.core.errors import InvalidArgumentError


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def resolve_time_zone(name: str) -> ZoneInfo:
    """Look up an IANA zone (``"Asia/Tokyo"``, ``"UTC"``).

    Raises:
        InvalidArgumentError: If the name is empty, not a string or unknown.
    """
    if not name:
        raise InvalidArgumentError("timezone is required", parameter="timezone")
    if not isinstance(name, str):
        raise InvalidArgumentError(
            f"timezone must be an IANA zone name, got {name!r}", parameter="timezone", value=name
        )
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidArgumentError(
            f"Unknown time zone: {name}", parameter="timezone", value=name
        ) from None


def in_time_zone(instant: datetime, time_zone: ZoneInfo) -> datetime:
    """View an aware instant as a civil date-time in ``time_zone``."""
    if instant.tzinfo is None:
        raise ValueError("in_time_zone() requires an aware datetime")
    return instant.astimezone(time_zone)


def to_iso8601(dt: datetime) -> str:
    """Render an aware datetime as ISO-8601 (``Z`` suffix for UTC)."""
    text = dt.isoformat()
    if text.endswith("+00:00") and dt.tzinfo is UTC:
        return text[:-6] + "Z"
    return text


__all__ = [
    "utc_now",
    "resolve_time_zone",
    "in_time_zone",
    "to_iso8601",
]
