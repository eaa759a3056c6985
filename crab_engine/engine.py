"""Glue between wellbeing, mood and crab physics."""

import random
from dataclasses import dataclass
from datetime import datetime

from .constants import ACTIVITY_BOOST, DEBUG_STEP, START_POSITION
from .frames import glyphs_for, render_template
from .messages import commit_message, mood_change_message, mood_message
from .mood import Mood
from .physics import CrabPhysics
from .records import ActivityRecord
from .time_utils import get_current_time, local_date
from .wellbeing import WellbeingState

CELEBRATION_COLOR = (255, 119, 255)

BODY_COLOR = {
    Mood.ECSTATIC: (255, 100, 100),
    Mood.HAPPY: (255, 120, 80),
    Mood.NEUTRAL: (220, 100, 80),
    Mood.SAD: (180, 80, 80),
    Mood.HUNGRY: (150, 60, 60),
}


@dataclass(frozen=True)
class RenderablePose:
    """Everything a renderer needs to draw one frame of the crab."""

    ascii_template_id: str
    eyes_glyph: str
    mouth_glyph: str
    color: tuple[int, int, int]
    position: tuple[float, float]

    @property
    def art(self) -> str:
        return render_template(self.ascii_template_id)


class CrabEngine:
    """
    Single-threaded core: activity events in, renderable poses out.

    Events (`on_activity`, `celebrate`, `feed`, `punish`) may arrive at any
    time between ticks; each tick re-derives the mood from happiness.
    """

    def __init__(
        self,
        wellbeing: WellbeingState | None = None,
        position: tuple[float, float] = START_POSITION,
        rng: random.Random | None = None,
        timezone_name: str | None = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.wellbeing = wellbeing or WellbeingState()
        self.timezone_name = timezone_name
        # Physics draws from its own generator, seeded from the engine one.
        self.physics = CrabPhysics.spawn(position, rng=random.Random(self.rng.random()))
        self.physics.mood = self.wellbeing.mood
        self._last_mood = self.wellbeing.mood
        self.message = mood_message(self._last_mood, self.rng)

    @property
    def mood(self) -> Mood:
        return self.wellbeing.mood

    @property
    def happiness(self) -> int:
        return self.wellbeing.happiness

    def on_activity(
        self,
        source_id: str,
        activity_id: str,
        timestamp: datetime,
        source_name: str = "",
        now: datetime | None = None,
    ) -> bool:
        """
        Feed the crab one detected activity.

        Known `activity_id`s are ignored so repeated notifications are
        harmless. Returns whether the activity was new.
        """
        record = ActivityRecord(
            timestamp=timestamp,
            activity_id=activity_id,
            source_id=source_id,
            source_name=source_name,
        )
        if not self.wellbeing.record_activity(record):
            return False

        self.wellbeing.boost(ACTIVITY_BOOST)
        self.wellbeing.total_activity_tracked += 1
        self.celebrate()
        self.refresh_streak(now)
        # The thank-you line wins over the mood-up line for this change.
        self.message = commit_message(self.rng)
        self._last_mood = self.wellbeing.mood
        return True

    def import_history(self, records: list[ActivityRecord], now: datetime | None = None) -> int:
        """Merge already-existing activity (no boost, no celebration)."""
        added = self.wellbeing.import_history(records)
        self.refresh_streak(now)
        return added

    def refresh_streak(self, now: datetime | None = None) -> int:
        today = local_date(now or get_current_time(), self.timezone_name)
        return self.wellbeing.recompute_streak(today, timezone_name=self.timezone_name)

    def celebrate(self) -> None:
        self.physics.celebrate()

    def set_movement_frozen(self, frozen: bool) -> None:
        self.physics.set_movement_frozen(frozen)

    def feed(self) -> None:
        """Debug boost."""
        self.wellbeing.boost(DEBUG_STEP)
        self.celebrate()

    def punish(self) -> None:
        """Debug decay."""
        self.wellbeing.decay(DEBUG_STEP)

    def tick(self, dt: float, bounds: tuple[float, float]) -> RenderablePose:
        mood = self.wellbeing.mood
        line = mood_change_message(self._last_mood, mood, self.rng)
        if line:
            self.message = line
        self._last_mood = mood

        self.physics.tick(dt, bounds, mood)
        return self.pose()

    def body_color(self) -> tuple[int, int, int]:
        if self.physics.celebrating:
            return CELEBRATION_COLOR
        return BODY_COLOR[self.physics.mood]

    def pose(self) -> RenderablePose:
        template_id = self.physics.template_id()
        eyes, mouth = glyphs_for(template_id)
        return RenderablePose(
            ascii_template_id=template_id,
            eyes_glyph=eyes,
            mouth_glyph=mouth,
            color=self.body_color(),
            position=self.physics.position,
        )

    def idle_message(self) -> str:
        self.message = mood_message(self.wellbeing.mood, self.rng)
        return self.message

    def snapshot(self) -> dict:
        return self.wellbeing.to_snapshot()
