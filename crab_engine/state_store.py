"""Load and save the wellbeing snapshot."""

import os
from datetime import datetime
from pathlib import Path

from .constants import DEFAULT_STATE_DIR, DEFAULT_STATE_FILENAME
from .io_utils import load_json_file, write_json_file
from .time_utils import get_current_time
from .wellbeing import WellbeingState


def get_state_path() -> Path:
    """Snapshot location: KANITOMO_STATE_FILE or ~/.kanitomo/state.json."""
    configured = os.environ.get("KANITOMO_STATE_FILE", "").strip()
    if configured:
        return Path(configured).expanduser()
    return Path.home() / DEFAULT_STATE_DIR / DEFAULT_STATE_FILENAME


def load_state(
    state_file: Path,
    now: datetime | None = None,
    timezone_name: str | None = None,
) -> tuple[WellbeingState, datetime]:
    """
    Load the snapshot and apply the decay for the time since it was saved.

    Returns the state and the `last_seen` it was saved with. A missing or
    unreadable file yields a fresh default state seen `now`.
    """
    now = now or get_current_time()
    raw = load_json_file(state_file)
    if raw is None:
        return WellbeingState(last_seen=now), now

    state = WellbeingState.from_snapshot(raw, now=now)
    previous_seen = state.last_seen
    penalty = state.apply_load_decay(now, timezone_name)
    if penalty:
        print(f"  Happiness decay while away: -{penalty}")
    return state, previous_seen


def save_state(state_file: Path, state: WellbeingState, now: datetime | None = None) -> None:
    """Stamp `last_seen` and write the snapshot (last write wins)."""
    state.last_seen = now or get_current_time()
    write_json_file(state_file, state.to_snapshot())


def reset_state(state_file: Path, now: datetime | None = None) -> WellbeingState:
    """Overwrite the snapshot with default values."""
    state = WellbeingState()
    state.reset(now)
    save_state(state_file, state, now)
    return state
