"""Crab physics and animation state machine."""

import random
from dataclasses import dataclass, field

from .constants import (
    ACTIVE_ANIMATION_SPEED,
    AIR_FRICTION,
    ANIMATION_STEP_SECONDS,
    CELEBRATION_JUMP_STRENGTH,
    CELEBRATION_SECONDS,
    FACING_THRESHOLD,
    FRAME_COUNT,
    FRAME_HEIGHT,
    FRAME_WIDTH,
    GRAVITY,
    GRAVITY_REFERENCE_FPS,
    GROUND_FRICTION,
    JUMP_COOLDOWN_SECONDS,
    JUMP_VARIANCE,
    MIN_JUMP_STRENGTH,
    MOVING_THRESHOLD,
)
from .frames import Facing, select_template
from .mood import Mood

# Per-tick probability of a spontaneous jump and its base strength.
IDLE_JUMP = {
    Mood.ECSTATIC: (0.015, 1.6),
    Mood.HAPPY: (0.004, 1.2),
    Mood.NEUTRAL: (0.001, 0.9),
    Mood.SAD: (0.0, 0.0),
    Mood.HUNGRY: (0.0, 0.0),
}

# Per-tick probability of starting to walk and the max walking speed.
WALK = {
    Mood.ECSTATIC: (0.05, 1.5),
    Mood.HAPPY: (0.03, 1.0),
    Mood.NEUTRAL: (0.02, 0.5),
    Mood.SAD: (0.01, 0.3),
    Mood.HUNGRY: (0.005, 0.1),
}


@dataclass
class CrabPhysics:
    """
    Position, velocity and animation state of the crab.

    Mutated only by `tick`, `celebrate`, `jump` and `set_movement_frozen`.
    Every field is consistent after each call, so the host may stop
    ticking at any point.
    """

    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    facing: Facing = Facing.RIGHT
    grounded: bool = False
    frame_index: int = 0
    animation_timer: float = 0.0
    celebrating: bool = False
    celebration_timer: float = 0.0
    celebration_jumped: bool = False
    jump_cooldown: float = 0.0
    movement_frozen: bool = False
    mood: Mood = Mood.NEUTRAL
    ground_y: float | None = None
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @classmethod
    def spawn(cls, position: tuple[float, float], rng: random.Random | None = None) -> "CrabPhysics":
        """Create a crab at `position` facing a random direction."""
        rng = rng or random.Random()
        facing = Facing.RIGHT if rng.random() < 0.5 else Facing.LEFT
        return cls(x=float(position[0]), y=float(position[1]), facing=facing, rng=rng)

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> tuple[float, float]:
        return (self.vx, self.vy)

    @property
    def is_moving(self) -> bool:
        return abs(self.vx) > MOVING_THRESHOLD or abs(self.vy) > MOVING_THRESHOLD

    def set_movement_frozen(self, frozen: bool) -> None:
        self.movement_frozen = bool(frozen)

    def celebrate(self) -> None:
        """Start (or restart) a celebration; a new celebration may jump again."""
        self.celebrating = True
        self.celebration_timer = CELEBRATION_SECONDS
        self.celebration_jumped = False

    def jump(self, strength: float) -> bool:
        """Launch upwards if grounded and off cooldown. Returns whether it fired."""
        if not self.grounded or self.jump_cooldown > 0:
            return False
        self.vy = -abs(strength)
        self.grounded = False
        self.jump_cooldown = JUMP_COOLDOWN_SECONDS
        return True

    def _jump_strength(self, base: float) -> float:
        low, high = JUMP_VARIANCE
        return max(MIN_JUMP_STRENGTH, base * self.rng.uniform(low, high))

    def tick(self, dt: float, bounds: tuple[float, float], mood: Mood) -> None:
        """Advance the state machine by one fixed step of `dt` seconds."""
        width, height = bounds
        self.mood = mood

        ground_y = max(0.0, height - FRAME_HEIGHT - 1)
        if self.grounded and self.ground_y is not None and ground_y != self.ground_y:
            self.y = ground_y
        self.ground_y = ground_y

        if self.celebrating:
            self.celebration_timer -= dt
            if self.celebration_timer <= 0:
                self.celebrating = False
                self.celebration_timer = 0.0
                self.celebration_jumped = False

        if self.celebrating or not self.grounded:
            speed = ACTIVE_ANIMATION_SPEED
        else:
            speed = mood.animation_speed
        self.animation_timer += dt * speed
        if self.animation_timer >= ANIMATION_STEP_SECONDS:
            self.animation_timer = 0.0
            self.frame_index = (self.frame_index + 1) % FRAME_COUNT

        self.jump_cooldown = max(0.0, self.jump_cooldown - dt)

        if self.movement_frozen:
            return

        if self.celebrating and not self.celebration_jumped and self.grounded:
            if self.jump(self._jump_strength(CELEBRATION_JUMP_STRENGTH)):
                self.celebration_jumped = True

        jump_chance, jump_base = IDLE_JUMP[mood]
        if self.grounded and not self.celebrating and jump_chance > 0:
            if self.rng.random() < jump_chance:
                self.jump(self._jump_strength(jump_base))

        walk_chance, base_speed = WALK[mood]
        if self.grounded and self.rng.random() < walk_chance:
            self.vx = self.rng.uniform(-base_speed, base_speed)
            if self.vx > FACING_THRESHOLD:
                self.facing = Facing.RIGHT
            elif self.vx < -FACING_THRESHOLD:
                self.facing = Facing.LEFT

        if not self.grounded:
            self.vy += GRAVITY * dt * GRAVITY_REFERENCE_FPS
        self.vx *= GROUND_FRICTION if self.grounded else AIR_FRICTION
        self.x += self.vx
        self.y += self.vy

        self._resolve_collisions(width, ground_y)

    def _resolve_collisions(self, width: float, ground_y: float) -> None:
        if self.y >= ground_y:
            self.y = ground_y
            self.vy = 0.0
            self.grounded = True
        else:
            self.grounded = False

        if self.y < 0:
            self.y = 0.0
            self.vy = 0.0

        max_x = max(0.0, width - FRAME_WIDTH)
        if self.x < 0:
            self.x = 0.0
            self.vx = abs(self.vx)
            self.facing = Facing.RIGHT
        elif self.x > max_x:
            self.x = max_x
            self.vx = -abs(self.vx)
            self.facing = Facing.LEFT

    def template_id(self) -> str:
        """Sprite template for the current state; no side effects."""
        return select_template(
            self.mood,
            self.is_moving,
            self.facing,
            self.frame_index,
            celebrating=self.celebrating,
            airborne=not self.grounded,
        )
