"""Activity records consumed by the wellbeing engine."""

from dataclasses import dataclass
from datetime import datetime

from .time_utils import parse_iso_datetime, to_iso8601


@dataclass(frozen=True)
class ActivityRecord:
    """A single detected activity (one commit), keyed by `activity_id`."""

    timestamp: datetime
    activity_id: str
    source_id: str = ""
    source_name: str = ""

    def to_dict(self) -> dict:
        return {
            "timestamp": to_iso8601(self.timestamp),
            "activity_id": self.activity_id,
            "source_id": self.source_id,
            "source_name": self.source_name,
        }

    @classmethod
    def from_dict(cls, raw) -> "ActivityRecord | None":
        """Build a record from snapshot data; malformed entries yield None."""
        if not isinstance(raw, dict):
            return None
        timestamp = parse_iso_datetime(raw.get("timestamp"))
        activity_id = raw.get("activity_id")
        if timestamp is None or not isinstance(activity_id, str) or not activity_id:
            return None
        source_id = raw.get("source_id")
        source_name = raw.get("source_name")
        return cls(
            timestamp=timestamp,
            activity_id=activity_id,
            source_id=source_id if isinstance(source_id, str) else "",
            source_name=source_name if isinstance(source_name, str) else "",
        )
