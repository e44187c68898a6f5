"""
Session - the collector game's simulation core
----------------------------------------------
- One ``tick`` per frame: input, spawn timers, entity updates, collisions, cleanup
- Collectibles of six rarity tiers spawn on a timer; touching one scores it
- Enemies spawn off-screen on a timer and chase the avatar; touching one hurts
- Health hitting zero ends the session until ``reset()``

The session never schedules itself and never draws. The host owns the frame
loop, samples input once per frame and renders the returned snapshot.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple

from .entities import Avatar, Collectible, Enemy, Particle
from .rarity import roll_collectible
from .utils import circle_collide, clamp

COLLECTIBLE_SPAWN_MS = 2000.0
ENEMY_SPAWN_MS = 3000.0
ENEMY_SPAWN_OFFSET = 30.0
ENEMY_DESPAWN_MARGIN = 50.0
PARTICLES_PER_PICKUP = 5
MAX_HEALTH = 100

EDGES = ("left", "right", "top", "bottom")


@dataclass(frozen=True)
class InputState:
    """Directional keys held during a frame"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session after a tick, for the renderer"""
    score: int
    health: int
    collected: int
    game_over: bool
    avatar: Avatar
    collectibles: Tuple[Collectible, ...]
    enemies: Tuple[Enemy, ...]
    particles: Tuple[Particle, ...]


class Session:
    """Owns every entity and the score/health counters of one game"""

    def __init__(
        self,
        width: float = 800,
        height: float = 600,
        rng: Optional[Callable[[], float]] = None,
        collectible_spawn_ms: float = COLLECTIBLE_SPAWN_MS,
        enemy_spawn_ms: float = ENEMY_SPAWN_MS,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"World bounds must be positive, got {width}x{height}")
        if collectible_spawn_ms <= 0 or enemy_spawn_ms <= 0:
            raise ValueError("Spawn intervals must be positive")

        # Arena
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.random

        # Spawn config
        self.collectible_spawn_ms = collectible_spawn_ms
        self.enemy_spawn_ms = enemy_spawn_ms

        # World state
        self.avatar: Avatar = None  # type: ignore
        self.collectibles: List[Collectible] = []
        self.enemies: List[Enemy] = []
        self.particles: List[Particle] = []

        self.score = 0
        self.health = MAX_HEALTH
        self.collected = 0
        self._game_over = False

        # Internal timers (ms)
        self._collectible_spawn_timer = 0.0
        self._enemy_spawn_timer = 0.0

        self.reset()

    # ----------------------------
    # Host API
    # ----------------------------

    def reset(self):
        """Start over: full health, no score, empty arena, avatar centred"""
        self.avatar = Avatar(x=self.width * 0.5, y=self.height * 0.5)
        self.collectibles = []
        self.enemies = []
        self.particles = []

        self.score = 0
        self.health = MAX_HEALTH
        self.collected = 0
        self._game_over = False

        self._collectible_spawn_timer = 0.0
        self._enemy_spawn_timer = 0.0

    def is_game_over(self) -> bool:
        return self._game_over

    def tick(self, dt_ms: float, keys: Optional[InputState] = None) -> SessionSnapshot:
        """Advance the simulation by one frame of ``dt_ms`` milliseconds."""
        if self._game_over:
            return self.snapshot()

        # NaN fails the comparison; inf would overflow the bob phase
        if not (dt_ms > 0 and math.isfinite(dt_ms)):
            dt_ms = 0.0
        if keys is None:
            keys = InputState()

        # Avatar
        self.avatar.move(keys.up, keys.down, keys.left, keys.right)
        self.avatar.clamp_to(self.width, self.height)

        # Spawn logic
        self._spawn_logic(dt_ms)

        # Update world
        for c in self.collectibles:
            c.update(dt_ms)
        for e in self.enemies:
            e.update()
        for p in self.particles:
            p.update()

        # Handle collisions
        self._handle_collisions()

        # Cleanup
        self.enemies = [
            e for e in self.enemies
            if not e.out_of_bounds(self.width, self.height, ENEMY_DESPAWN_MARGIN)
        ]
        self.particles = [p for p in self.particles if p.alive]

        if self.health <= 0:
            self._game_over = True

        return self.snapshot()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            score=self.score,
            health=self.health,
            collected=self.collected,
            game_over=self._game_over,
            avatar=replace(self.avatar),
            collectibles=tuple(replace(c) for c in self.collectibles),
            enemies=tuple(replace(e) for e in self.enemies),
            particles=tuple(replace(p) for p in self.particles),
        )

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _spawn_logic(self, dt_ms: float):
        # Overshoot past the interval is dropped, not carried into the next one
        self._collectible_spawn_timer += dt_ms
        if self._collectible_spawn_timer > self.collectible_spawn_ms:
            self.spawn_collectible()
            self._collectible_spawn_timer = 0.0

        self._enemy_spawn_timer += dt_ms
        if self._enemy_spawn_timer > self.enemy_spawn_ms:
            self.spawn_enemy()
            self._enemy_spawn_timer = 0.0

    def spawn_collectible(self) -> Collectible:
        item = roll_collectible(self.rng, self.width, self.height)
        self.collectibles.append(item)
        return item

    def spawn_enemy(self) -> Enemy:
        # Just outside a random edge so it walks in from off-screen
        side = EDGES[min(int(self.rng() * 4), 3)]
        off = ENEMY_SPAWN_OFFSET

        if side == "left":
            x, y = -off, self.rng() * self.height
        elif side == "right":
            x, y = self.width + off, self.rng() * self.height
        elif side == "top":
            x, y = self.rng() * self.width, -off
        else:
            x, y = self.rng() * self.width, self.height + off

        enemy = Enemy(x=x, y=y, target=self.avatar)
        self.enemies.append(enemy)
        return enemy

    def _handle_collisions(self):
        a = self.avatar

        # Avatar vs collectibles
        remaining_collectibles = []
        for c in self.collectibles:
            if circle_collide(a.x, a.y, a.radius, c.x, c.y, c.radius):
                self._collect(c)
            else:
                remaining_collectibles.append(c)
        self.collectibles = remaining_collectibles

        # Avatar vs enemies (contact damage, enemy is spent)
        remaining_enemies = []
        for e in self.enemies:
            if circle_collide(a.x, a.y, a.radius, e.x, e.y, e.radius):
                self.health = int(clamp(self.health - e.damage, 0, MAX_HEALTH))
            else:
                remaining_enemies.append(e)
        self.enemies = remaining_enemies

    def _collect(self, item: Collectible):
        self.score += item.points
        self.collected += 1

        for _ in range(PARTICLES_PER_PICKUP):
            self.particles.append(self._make_particle(item))

    def _make_particle(self, item: Collectible) -> Particle:
        vx = (self.rng() - 0.5) * 4
        vy = (self.rng() - 0.5) * 4
        radius = self.rng() * 3 + 1
        return Particle(x=item.x, y=item.y, vx=vx, vy=vy, color=item.color, radius=radius)
