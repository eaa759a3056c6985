"""
Crab sprite templates and the pose lookup table.

Pose selection is a pure lookup keyed by (mood, is_moving, facing,
frame_index). Airborne, celebrating and ecstatic crabs bypass the table
and alternate the two dance frames.
"""

from enum import Enum

from .constants import FRAME_COUNT
from .mood import Mood


class Facing(Enum):
    LEFT = "left"
    RIGHT = "right"


TOP = "    _~^~^~_"

TEMPLATES = {
    "standard_right": (
        TOP,
        "\\) /  o o  \\ (/",
        "  '_   -   _'",
        "  \\ '-----' /",
    ),
    "walking_right": (
        TOP,
        "\\) /  o o  \\ (/",
        " '-_   -   _'\\",
        "  | '-----' ",
    ),
    "happy_right": (
        TOP,
        "\\/ /  ^o o^  \\ \\/",
        "  '_   u   _'",
        "  \\ '-----' /",
    ),
    "sad_right": (
        TOP,
        "\\) /  - -  \\ (/",
        "  '_   n   _'",
        "  \\ '-----' /",
    ),
    "hungry_right": (
        TOP,
        "\\\\ /  T T  \\ //",
        "  '_   ~   _'",
        "  \\ '-----' /",
    ),
    "standard_left": (
        TOP,
        "(\\ /  o o  \\ ()",
        "  '_   -   _'",
        "  / '-----' \\",
    ),
    "walking_left": (
        TOP,
        "(\\ /  o o  \\ ()",
        " /'_   -   _-'",
        "    '-----' |",
    ),
    "happy_left": (
        TOP,
        "\\/ /  ^o o^  \\ \\/",
        "  '_   u   _'",
        "  / '-----' \\",
    ),
    "sad_left": (
        TOP,
        "(\\ /  - -  \\ ()",
        "  '_   n   _'",
        "  / '-----' \\",
    ),
    "hungry_left": (
        TOP,
        "// /  T T  \\ \\\\",
        "  '_   ~   _'",
        "  / '-----' \\",
    ),
    "ecstatic_1": (
        "   \\\\_~^~^~_//",
        "   /  *o o*  \\",
        "  '_    w    _'",
        "  \\\\ '-----' //",
    ),
    "ecstatic_2": (
        "  //_~^~^~_\\\\",
        "   /  *o o*  \\",
        "  '_    w    _'",
        "  // '-----' \\\\",
    ),
}


# (eyes, mouth) per pose family
GLYPHS = {
    "standard": ("o o", "-"),
    "walking": ("o o", "-"),
    "happy": ("^o o^", "u"),
    "sad": ("- -", "n"),
    "hungry": ("T T", "~"),
    "ecstatic": ("*o o*", "w"),
}

ECSTATIC_FRAMES = ("ecstatic_1", "ecstatic_2")

# Pose family for frame_index 0..3, per (mood, is_moving).
POSE_SEQUENCES = {
    (Mood.HAPPY, True): ("standard", "walking", "standard", "walking"),
    (Mood.HAPPY, False): ("happy", "standard", "standard", "standard"),
    (Mood.NEUTRAL, True): ("standard", "walking", "standard", "walking"),
    (Mood.NEUTRAL, False): ("standard", "standard", "standard", "standard"),
    (Mood.SAD, True): ("sad", "sad", "sad", "sad"),
    (Mood.SAD, False): ("sad", "sad", "sad", "sad"),
    (Mood.HUNGRY, True): ("hungry", "sad", "hungry", "sad"),
    (Mood.HUNGRY, False): ("hungry", "sad", "hungry", "sad"),
}


def _build_frame_table() -> dict[tuple[Mood, bool, Facing, int], str]:
    table = {}
    for (mood, moving), sequence in POSE_SEQUENCES.items():
        for facing in Facing:
            for frame_index, family in enumerate(sequence):
                table[(mood, moving, facing, frame_index)] = f"{family}_{facing.value}"
    for moving in (True, False):
        for facing in Facing:
            for frame_index in range(FRAME_COUNT):
                table[(Mood.ECSTATIC, moving, facing, frame_index)] = ECSTATIC_FRAMES[frame_index % 2]
    return table


FRAME_TABLE = _build_frame_table()


def select_template(
    mood: Mood,
    is_moving: bool,
    facing: Facing,
    frame_index: int,
    celebrating: bool = False,
    airborne: bool = False,
) -> str:
    """Return the template id for the given crab state."""
    frame_index %= FRAME_COUNT
    if celebrating or airborne:
        return ECSTATIC_FRAMES[frame_index % 2]
    return FRAME_TABLE[(mood, bool(is_moving), facing, frame_index)]


def glyphs_for(template_id: str) -> tuple[str, str]:
    """(eyes, mouth) drawn by a template."""
    family = template_id.rsplit("_", 1)[0]
    return GLYPHS[family]


def render_template(template_id: str) -> str:
    """Multi-line sprite text for a template id."""
    return "\n".join(TEMPLATES[template_id])
