"""Time and primitive conversion helpers for the wellbeing engine."""

import os
from datetime import date, datetime, timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def get_current_time() -> datetime:
    """Get current UTC time."""
    return datetime.now(timezone.utc)


def get_timezone_name() -> str | None:
    """
    Resolve the configured timezone name.

    Returns None when KANITOMO_TIMEZONE is unset or unknown, meaning the
    host system's local zone is used.
    """
    candidate = os.environ.get("KANITOMO_TIMEZONE", "").strip()
    if not candidate:
        return None
    try:
        ZoneInfo(candidate)
        return candidate
    except (ZoneInfoNotFoundError, ValueError):
        return None


def resolve_timezone(timezone_name: str | None = None) -> tzinfo | None:
    """Turn a zone name into a tzinfo; None stands for system local time."""
    zone_name = timezone_name or get_timezone_name()
    if zone_name is None:
        return None
    return ZoneInfo(zone_name)


def to_local_time(dt: datetime, timezone_name: str | None = None) -> datetime:
    """Convert a datetime to the configured local timezone (naive input is UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(resolve_timezone(timezone_name))


def local_date(dt: datetime, timezone_name: str | None = None) -> date:
    """Calendar date of `dt` in local time."""
    return to_local_time(dt, timezone_name).date()


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def to_iso8601(dt: datetime | None) -> str | None:
    """Convert datetime to ISO string (UTC) if present."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def parse_iso_datetime(value: str | None) -> datetime | None:
    """Parse ISO datetime string into timezone-aware UTC datetime."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def classify_time_of_day(local_hour: int) -> str:
    """Map local hour to the background bucket."""
    if 6 <= local_hour <= 11:
        return "morning"
    if 12 <= local_hour <= 17:
        return "day"
    if 18 <= local_hour <= 20:
        return "evening"
    return "night"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_time_ago(then: datetime | None, now: datetime) -> str:
    """Human readable age of `then`, e.g. '3 hours ago'."""
    if then is None:
        return "never"
    if then.tzinfo is None:
        then = then.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = int((now - then).total_seconds())
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return _plural(seconds // 60, "min")
    if seconds < 86400:
        return _plural(seconds // 3600, "hour")
    return _plural(seconds // 86400, "day")


def to_int(value: Any, default: int = 0) -> int:
    """Best-effort integer conversion with sane fallback."""
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default
