"""Timezone helpers built on the stdlib IANA database (``zoneinfo``).

TripGo speaks seconds since the Unix epoch; agents speak ISO-8601 wall-clock
strings. Everything here converts between the two for a named zone, using the
zone's offset on the date in question (DST aware).
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.errors import UnknownTimezoneError


@lru_cache(maxsize=64)
def get_zone(zone_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise UnknownTimezoneError(zone_name) from exc


def _as_utc(instant: datetime) -> datetime:
    # Naive datetimes are taken to be UTC already.
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def local_to_utc(iso_string: str, zone_name: str) -> datetime:
    """Interpret a naive ISO timestamp as wall-clock time in `zone_name`.

    "2025-07-18T19:00:00" in "Australia/Sydney" (AEST, UTC+10) becomes
    2025-07-18T09:00:00Z. A string that already carries "Z" or an explicit
    offset keeps that offset and `zone_name` is not consulted.
    Wall-clock times skipped by a DST jump resolve with the pre-transition
    offset; repeated ones pick the first occurrence.
    """
    parsed = datetime.fromisoformat(iso_string)
    if parsed.tzinfo is not None:
        return parsed.astimezone(timezone.utc)
    return parsed.replace(tzinfo=get_zone(zone_name)).astimezone(timezone.utc)


def utc_to_zoned(instant: datetime, zone_name: str) -> datetime:
    """Wall-clock time (naive) that `instant` displays as in `zone_name`."""
    return _as_utc(instant).astimezone(get_zone(zone_name)).replace(tzinfo=None)


def format_iso_with_offset(instant: datetime, zone_name: str) -> str:
    """Render `instant` as YYYY-MM-DDTHH:MM:SS±HH:MM in `zone_name`."""
    local = _as_utc(instant).astimezone(get_zone(zone_name))
    offset_minutes = int(local.utcoffset().total_seconds() // 60)
    sign = "-" if offset_minutes < 0 else "+"
    hours, minutes = divmod(abs(offset_minutes), 60)
    wall = local.replace(tzinfo=None, microsecond=0).isoformat()
    return f"{wall}{sign}{hours:02d}:{minutes:02d}"


def from_epoch(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def format_epoch(seconds: float, zone_name: str) -> str:
    return format_iso_with_offset(from_epoch(seconds), zone_name)


def to_epoch_seconds(iso_string: str, zone_name: str = "UTC") -> int:
    """Seconds since the Unix epoch, as the TripGo API expects them."""
    return math.floor(local_to_utc(iso_string, zone_name).timestamp())
