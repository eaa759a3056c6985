"""Mood tiers derived from happiness."""

from enum import Enum

from .constants import MAX_HAPPINESS, MIN_HAPPINESS


class Mood(Enum):
    """
    Discrete mood tier.

    Ordering is defined by MOOD_RANK rather than declaration order, so
    `Mood.HUNGRY < Mood.SAD < Mood.NEUTRAL < Mood.HAPPY < Mood.ECSTATIC`.
    """

    ECSTATIC = "ecstatic"
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    HUNGRY = "hungry"

    @property
    def rank(self) -> int:
        return MOOD_RANK[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def animation_speed(self) -> float:
        return ANIMATION_SPEED[self]

    @property
    def ui_color(self) -> str:
        return UI_COLOR[self]

    def __lt__(self, other):
        if not isinstance(other, Mood):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Mood):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Mood):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Mood):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.label


MOOD_RANK = {
    Mood.HUNGRY: 0,
    Mood.SAD: 1,
    Mood.NEUTRAL: 2,
    Mood.HAPPY: 3,
    Mood.ECSTATIC: 4,
}

# Inclusive lower bounds, checked best first.
MOOD_THRESHOLDS = (
    (90, Mood.ECSTATIC),
    (70, Mood.HAPPY),
    (40, Mood.NEUTRAL),
    (20, Mood.SAD),
    (0, Mood.HUNGRY),
)

ANIMATION_SPEED = {
    Mood.ECSTATIC: 2.0,
    Mood.HAPPY: 1.0,
    Mood.NEUTRAL: 0.6,
    Mood.SAD: 0.3,
    Mood.HUNGRY: 0.2,
}

UI_COLOR = {
    Mood.ECSTATIC: "magenta",
    Mood.HAPPY: "green",
    Mood.NEUTRAL: "yellow",
    Mood.SAD: "blue",
    Mood.HUNGRY: "red",
}


def classify(happiness: int) -> Mood:
    """
    Map a happiness score to its mood tier.

    Out-of-range input is clamped first, so the function is total.
    """
    value = max(MIN_HAPPINESS, min(MAX_HAPPINESS, int(happiness)))
    for lower_bound, mood in MOOD_THRESHOLDS:
        if value >= lower_bound:
            return mood
    return Mood.HUNGRY
