"""Wellbeing state: happiness, streaks and the activity history."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

from .constants import (
    DEFAULT_HAPPINESS,
    HISTORY_LIMIT,
    MAX_HAPPINESS,
    MIN_HAPPINESS,
    SNAPSHOT_VERSION,
)
from .mood import Mood, classify
from .pet_rules import compute_decay, compute_streak, trim_history
from .records import ActivityRecord
from .time_utils import get_current_time, parse_iso_datetime, to_int, to_iso8601


def clamp_happiness(value) -> int:
    return max(MIN_HAPPINESS, min(MAX_HAPPINESS, to_int(value, DEFAULT_HAPPINESS)))


@dataclass
class WellbeingState:
    """
    Owner of happiness and streak counters.

    `happiness` must only change through `boost` and `decay` so that
    clamping stays in one place.
    """

    happiness: int = DEFAULT_HAPPINESS
    streak: int = 0
    best_streak: int = 0
    last_seen: datetime = field(default_factory=get_current_time)
    history: list[ActivityRecord] = field(default_factory=list)
    total_activity_tracked: int = 0
    version: int = SNAPSHOT_VERSION

    def __post_init__(self) -> None:
        self.happiness = clamp_happiness(self.happiness)
        self._seen_ids = {record.activity_id for record in self.history}

    @property
    def mood(self) -> Mood:
        return classify(self.happiness)

    def boost(self, amount: int) -> int:
        """Saturating add; returns the new happiness."""
        self.happiness = min(MAX_HAPPINESS, self.happiness + max(0, int(amount)))
        return self.happiness

    def decay(self, amount: int) -> int:
        """Saturating subtract; returns the new happiness."""
        self.happiness = max(MIN_HAPPINESS, self.happiness - max(0, int(amount)))
        return self.happiness

    def apply_load_decay(self, now: datetime, timezone_name: str | None = None) -> int:
        """Apply the calendar decay since `last_seen` once and move `last_seen` to now."""
        penalty = compute_decay(self.last_seen, now, timezone_name)
        self.decay(penalty)
        self.last_seen = now
        return penalty

    def recompute_streak(
        self,
        today: date,
        history: Iterable[ActivityRecord] | None = None,
        timezone_name: str | None = None,
    ) -> int:
        self.streak = compute_streak(self.history if history is None else history, today, timezone_name)
        self.best_streak = max(self.best_streak, self.streak)
        return self.streak

    def has_activity(self, activity_id: str) -> bool:
        return activity_id in self._seen_ids

    def record_activity(self, record: ActivityRecord) -> bool:
        """Append a record unless its id is already known."""
        if record.activity_id in self._seen_ids:
            return False
        self._seen_ids.add(record.activity_id)
        self.history.append(record)
        return True

    def import_history(self, records: Iterable[ActivityRecord]) -> int:
        """Merge pre-existing activity without counting it as new."""
        return sum(1 for record in records if self.record_activity(record))

    def reset(self, now: datetime | None = None) -> None:
        self.happiness = DEFAULT_HAPPINESS
        self.streak = 0
        self.best_streak = 0
        self.history = []
        self._seen_ids = set()
        self.total_activity_tracked = 0
        self.last_seen = now or get_current_time()

    def to_snapshot(self) -> dict:
        return {
            "version": self.version,
            "happiness": self.happiness,
            "streak": self.streak,
            "best_streak": self.best_streak,
            "last_seen": to_iso8601(self.last_seen),
            "total_activity_tracked": self.total_activity_tracked,
            "activity_history": [record.to_dict() for record in trim_history(self.history, HISTORY_LIMIT)],
        }

    @classmethod
    def from_snapshot(cls, raw: dict, now: datetime | None = None) -> "WellbeingState":
        """
        Rebuild state from a snapshot dict.

        Corrupted values are coerced rather than rejected: happiness is
        clamped, counters floored at zero, bad history entries dropped.
        """
        history: list[ActivityRecord] = []
        seen = set()
        raw_history = raw.get("activity_history")
        for entry in raw_history if isinstance(raw_history, list) else []:
            record = ActivityRecord.from_dict(entry)
            if record is None or record.activity_id in seen:
                continue
            seen.add(record.activity_id)
            history.append(record)

        streak = max(0, to_int(raw.get("streak"), 0))
        best_streak = max(streak, to_int(raw.get("best_streak"), 0))
        last_seen = parse_iso_datetime(raw.get("last_seen")) or now or get_current_time()

        return cls(
            happiness=clamp_happiness(raw.get("happiness")),
            streak=streak,
            best_streak=best_streak,
            last_seen=last_seen,
            history=history,
            total_activity_tracked=max(0, to_int(raw.get("total_activity_tracked"), 0)),
            version=to_int(raw.get("version"), SNAPSHOT_VERSION),
        )
