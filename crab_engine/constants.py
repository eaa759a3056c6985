"""Shared constants for the Kani wellbeing and physics engine."""

# Wellbeing
DEFAULT_HAPPINESS = 50
MIN_HAPPINESS = 0
MAX_HAPPINESS = 100
ACTIVITY_BOOST = 25
DEBUG_STEP = 5
DECAY_PER_WEEKDAY_HOUR = 5
MAX_DECAY_HOURS = 10_000
MAX_STREAK_LOOKBACK_DAYS = 365
HISTORY_LIMIT = 400
WEEK_SUMMARY_DAYS = 7
SNAPSHOT_VERSION = 1

# Configuration
DEFAULT_STATE_DIR = ".kanitomo"
DEFAULT_STATE_FILENAME = "state.json"
RECENT_ACTIVITY_DAYS = 30
MAX_BRANCHES_PER_REPO = 5

# Host loop
TICK_SECONDS = 0.05
GIT_POLL_TICKS = 20
DEFAULT_BOUNDS = (80.0, 15.0)
START_POSITION = (10.0, 2.0)

# Sprite
FRAME_WIDTH = 20.0
FRAME_HEIGHT = 4.0
FRAME_COUNT = 4

# Animation
ANIMATION_STEP_SECONDS = 0.3
ACTIVE_ANIMATION_SPEED = 2.5
CELEBRATION_SECONDS = 3.0
MOVING_THRESHOLD = 0.05
FACING_THRESHOLD = 0.1

# Physics (velocities are cells per tick)
GRAVITY = 0.1
GRAVITY_REFERENCE_FPS = 60
GROUND_FRICTION = 0.92
AIR_FRICTION = 0.98
JUMP_COOLDOWN_SECONDS = 0.3
CELEBRATION_JUMP_STRENGTH = 2.0
JUMP_VARIANCE = (0.6, 0.95)
MIN_JUMP_STRENGTH = 0.7
