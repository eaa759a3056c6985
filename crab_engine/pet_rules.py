"""Happiness decay and streak rules."""

import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone

from .constants import (
    DECAY_PER_WEEKDAY_HOUR,
    HISTORY_LIMIT,
    MAX_DECAY_HOURS,
    MAX_STREAK_LOOKBACK_DAYS,
    WEEK_SUMMARY_DAYS,
)
from .records import ActivityRecord
from .time_utils import is_weekend, local_date, to_local_time


def count_weekday_hours(
    start: datetime,
    end: datetime,
    timezone_name: str | None = None,
    max_hours: int = MAX_DECAY_HOURS,
) -> int:
    """
    Count whole-hour steps between start and end that begin on a local weekday.

    The walk starts at `start` and advances one hour at a time while the
    cursor is before `end`. The cap applies to counted weekday hours, not
    to walked hours: the walk stops once `max_hours` weekday hours have
    been counted, and weekend hours never count towards it.
    """
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)
    if end <= start:
        return 0

    hours = 0
    cursor = start.astimezone(timezone.utc)
    end = end.astimezone(timezone.utc)
    step = timedelta(hours=1)
    while cursor < end and hours < max_hours:
        if not is_weekend(to_local_time(cursor, timezone_name).date()):
            hours += 1
        cursor += step
    return hours


def compute_decay(last_seen: datetime, now: datetime, timezone_name: str | None = None) -> int:
    """
    Happiness penalty for the time the pet spent alone.

    Every local weekday hour costs DECAY_PER_WEEKDAY_HOUR points; weekends
    are free.
    """
    weekday_hours = count_weekday_hours(last_seen, now, timezone_name)
    return math.floor(weekday_hours * DECAY_PER_WEEKDAY_HOUR)


def activity_dates(history: Iterable[ActivityRecord | datetime], timezone_name: str | None = None) -> set[date]:
    """Distinct local calendar dates with at least one activity."""
    dates = set()
    for entry in history:
        timestamp = entry if isinstance(entry, datetime) else getattr(entry, "timestamp", None)
        if isinstance(timestamp, datetime):
            dates.add(local_date(timestamp, timezone_name))
    return dates


def count_today(history: Iterable[ActivityRecord], today: date, timezone_name: str | None = None) -> int:
    """Number of activities on the local calendar date `today`."""
    return sum(1 for record in history if local_date(record.timestamp, timezone_name) == today)


def today_by_project(
    history: Iterable[ActivityRecord],
    today: date,
    timezone_name: str | None = None,
) -> list[tuple[str, str, int]]:
    """
    Today's activity grouped by source.

    Returns `(source_id, source_name, count)` tuples, busiest project first,
    ties broken by name. A record without a name is shown by its source id.
    """
    counts: dict[str, int] = {}
    names: dict[str, str] = {}
    for record in history:
        if local_date(record.timestamp, timezone_name) != today:
            continue
        counts[record.source_id] = counts.get(record.source_id, 0) + 1
        if not names.get(record.source_id):
            names[record.source_id] = record.source_name or record.source_id
    projects = [(source_id, names[source_id], count) for source_id, count in counts.items()]
    projects.sort(key=lambda project: (-project[2], project[1]))
    return projects


def week_summary(
    history: Iterable[ActivityRecord],
    today: date,
    timezone_name: str | None = None,
    days: int = WEEK_SUMMARY_DAYS,
) -> list[tuple[date, int]]:
    """Per-day activity counts for the last `days` local dates, oldest first, idle days included."""
    first_day = today - timedelta(days=days - 1)
    counts = {first_day + timedelta(days=offset): 0 for offset in range(days)}
    for record in history:
        day = local_date(record.timestamp, timezone_name)
        if day in counts:
            counts[day] += 1
    return sorted(counts.items())


def compute_streak(
    history: Iterable[ActivityRecord | datetime],
    today: date,
    timezone_name: str | None = None,
) -> int:
    """
    Count consecutive active days ending today, with weekends as free days.

    Walking backwards from today: an active day extends the streak, an idle
    weekend day is skipped, an idle weekday ends the walk. An idle weekday
    today does not break anything since today has not ended yet. The walk
    looks back at most MAX_STREAK_LOOKBACK_DAYS days.
    """
    dates = activity_dates(history, timezone_name)
    if not dates:
        return 0

    cursor = today
    if cursor not in dates and not is_weekend(cursor):
        cursor -= timedelta(days=1)

    streak = 0
    for _ in range(MAX_STREAK_LOOKBACK_DAYS):
        if cursor in dates:
            streak += 1
        elif not is_weekend(cursor):
            break
        cursor -= timedelta(days=1)
    return streak


def trim_history(history: list[ActivityRecord], limit: int = HISTORY_LIMIT) -> list[ActivityRecord]:
    """
    Keep only the most recent records for state size control.

    Detection order is preserved; recency is judged by timestamp.
    """
    if len(history) <= limit:
        return list(history)
    keep = set(
        id(record)
        for record in sorted(history, key=lambda record: record.timestamp)[-limit:]
    )
    return [record for record in history if id(record) in keep]
