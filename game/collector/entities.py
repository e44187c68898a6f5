"""
Game entity dataclasses

Positions are in world units with the origin at the top-left corner and y
pointing down. Per-frame behavior that belongs to a single entity lives on
the entity; everything that involves more than one entity lives in
``Session``.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .utils import clamp, hue_to_rgb, normalize

Color = Tuple[int, int, int]

AVATAR_RADIUS = 15.0
AVATAR_SPEED = 5.0
AVATAR_COLOR: Color = (0, 255, 136)

COLLECTIBLE_RADIUS = 12.0
BOB_SPEED = 0.003  # radians per ms
BOB_AMPLITUDE = 5.0
HUE_STEP = 0.01  # degrees per tick

ENEMY_RADIUS = 10.0
ENEMY_SPEED = 2.0
ENEMY_DAMAGE = 10
ENEMY_COLOR: Color = (255, 68, 68)
ENEMY_SPIN = 0.1  # radians per tick

PARTICLE_DECAY = 0.02
PARTICLE_SHRINK = 0.98


@dataclass
class Avatar:
    """Player-controlled avatar"""
    x: float
    y: float
    radius: float = AVATAR_RADIUS
    speed: float = AVATAR_SPEED
    color: Color = AVATAR_COLOR

    def move(self, up: bool, down: bool, left: bool, right: bool):
        # Each held key applies on its own, so opposite keys cancel out
        if up:
            self.y -= self.speed
        if down:
            self.y += self.speed
        if left:
            self.x -= self.speed
        if right:
            self.x += self.speed

    def clamp_to(self, width: float, height: float):
        r = self.radius
        self.x = clamp(self.x, r, width - r)
        self.y = clamp(self.y, r, height - r)


@dataclass
class Collectible:
    """Rarity-weighted pickup that bobs around its spawn height"""
    x: float
    y: float
    tier: str
    color: Color
    points: int
    has_glow: bool
    radius: float = COLLECTIBLE_RADIUS
    is_mutated: bool = False
    mutation_hue: float = 0.0
    bob_phase: float = 0.0
    spawn_y: Optional[float] = None

    def __post_init__(self):
        if self.spawn_y is None:
            self.spawn_y = self.y

    def update(self, dt_ms: float):
        self.bob_phase += BOB_SPEED * dt_ms
        self.y = self.spawn_y + math.sin(self.bob_phase) * BOB_AMPLITUDE

        if self.is_mutated:
            self.mutation_hue += HUE_STEP
            if self.mutation_hue > 360.0:
                self.mutation_hue = 0.0

    @property
    def render_color(self) -> Color:
        """Colour to draw with; mutated pickups cycle through the hue wheel"""
        if self.is_mutated:
            return hue_to_rgb(self.mutation_hue)
        return self.color

    @property
    def glows(self) -> bool:
        return self.has_glow or self.is_mutated


@dataclass
class Enemy:
    """Enemy that chases the avatar's current position"""
    x: float
    y: float
    target: Avatar
    radius: float = ENEMY_RADIUS
    speed: float = ENEMY_SPEED
    damage: int = ENEMY_DAMAGE
    color: Color = ENEMY_COLOR
    angle: float = 0.0  # spike rotation, cosmetic only

    def update(self):
        # Pure pursuit: re-aim at wherever the target is right now
        nx, ny = normalize(self.target.x - self.x, self.target.y - self.y)
        self.x += nx * self.speed
        self.y += ny * self.speed

        self.angle += ENEMY_SPIN

    def out_of_bounds(self, width: float, height: float, margin: float) -> bool:
        return not (
            -margin < self.x < width + margin and
            -margin < self.y < height + margin
        )


@dataclass
class Particle:
    """Short-lived spark left behind by a pickup"""
    x: float
    y: float
    vx: float
    vy: float
    color: Color
    radius: float
    life: float = 1.0
    decay: float = PARTICLE_DECAY

    def update(self):
        # Moves per tick, not per ms
        self.x += self.vx
        self.y += self.vy
        self.life -= self.decay
        self.radius *= PARTICLE_SHRINK

    @property
    def alive(self) -> bool:
        return self.life > 0
