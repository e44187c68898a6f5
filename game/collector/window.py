"""
Arcade host for the collector game

The window owns the frame loop: every ``on_update`` samples the held keys,
ticks the session once and keeps the returned snapshot for ``on_draw``.
Game over freezes the session; R or Enter starts a new one.

Play:
    python -m game.collector.window
"""

from __future__ import annotations

import argparse
import math
import random
from typing import Optional, Set

import arcade

from .host import FrameDriver, game_over_message
from .session import Session, SessionSnapshot, InputState, MAX_HEALTH
from .utils import clamp

BG_COLOR = (15, 15, 35)
GRID_COLOR = (255, 255, 255, 25)
GRID_STEP = 50
FACE_COLOR = (0, 0, 0)
HUD_COLOR = (220, 220, 220)

UP_KEYS = {arcade.key.W, arcade.key.UP}
DOWN_KEYS = {arcade.key.S, arcade.key.DOWN}
LEFT_KEYS = {arcade.key.A, arcade.key.LEFT}
RIGHT_KEYS = {arcade.key.D, arcade.key.RIGHT}
RESTART_KEYS = {arcade.key.R, arcade.key.ENTER}


def with_alpha(color, alpha: float):
    return (color[0], color[1], color[2], int(clamp(alpha, 0.0, 1.0) * 255))


class CollectorWindow(arcade.Window):
    """Arcade window that plays (or just shows) a collector session"""

    def __init__(self, session: Session, interactive: bool = True, title: str = "Collector"):
        super().__init__(int(session.width), int(session.height), title)
        self.session = session
        self.interactive = interactive
        self.background_color = BG_COLOR

        self._held: Set[int] = set()
        self.driver = FrameDriver(session)

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        self._held.add(symbol)
        if self.interactive and symbol in RESTART_KEYS:
            self.driver.restart()

    def on_key_release(self, symbol: int, modifiers: int):
        self._held.discard(symbol)

    def current_input(self) -> InputState:
        held = self._held
        return InputState(
            up=bool(held & UP_KEYS),
            down=bool(held & DOWN_KEYS),
            left=bool(held & LEFT_KEYS),
            right=bool(held & RIGHT_KEYS),
        )

    # ----------------------------
    # Frame loop
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.interactive:
            return

        message = self.driver.advance(delta_time * 1000.0, self.current_input())
        if message:
            print(message)

    def on_draw(self):
        if not self.interactive:
            self.driver.snapshot = self.session.snapshot()

        self.clear()
        self._draw_grid()

        s = self.driver.snapshot
        for c in s.collectibles:
            self._draw_collectible(c)
        for e in s.enemies:
            self._draw_enemy(e)
        for p in s.particles:
            arcade.draw_circle_filled(p.x, self._sy(p.y), max(p.radius, 0.1),
                                      with_alpha(p.color, p.life))
        self._draw_avatar(s.avatar)
        self._draw_hud(s)

    # ----------------------------
    # Drawing helpers
    # ----------------------------

    def _sy(self, y: float) -> float:
        # Session y grows downward, Arcade y grows upward
        return self.height - y

    def _draw_grid(self):
        for x in range(0, self.width, GRID_STEP):
            arcade.draw_line(x, 0, x, self.height, GRID_COLOR, 1)
        for y in range(0, self.height, GRID_STEP):
            arcade.draw_line(0, y, self.width, y, GRID_COLOR, 1)

    def _draw_avatar(self, a):
        x, y = a.x, self._sy(a.y)
        arcade.draw_circle_filled(x, y, a.radius + 6, with_alpha(a.color, 0.25))
        arcade.draw_circle_filled(x, y, a.radius, a.color)
        arcade.draw_circle_filled(x - 5, y + 3, 2, FACE_COLOR)
        arcade.draw_circle_filled(x + 5, y + 3, 2, FACE_COLOR)
        arcade.draw_arc_outline(x, y - 3, 10, 10, FACE_COLOR, 180, 360, 2)

    def _draw_collectible(self, c):
        x, y = c.x, self._sy(c.y)
        color = c.render_color
        if c.glows:
            arcade.draw_circle_filled(x, y, c.radius + 6, with_alpha(color, 0.3))
        arcade.draw_circle_filled(x, y, c.radius, color)
        arcade.draw_circle_filled(x - 4, y + 2, 1.5, FACE_COLOR)
        arcade.draw_circle_filled(x + 4, y + 2, 1.5, FACE_COLOR)
        if c.is_mutated:
            arcade.draw_circle_outline(x, y, c.radius + 3, (255, 255, 255), 2)

    def _draw_enemy(self, e):
        x, y = e.x, self._sy(e.y)
        arcade.draw_circle_filled(x, y, e.radius, e.color)
        for i in range(6):
            ang = (math.pi * 2 / 6) * i + e.angle
            arcade.draw_line(
                x + math.cos(ang) * e.radius, y - math.sin(ang) * e.radius,
                x + math.cos(ang) * (e.radius + 5), y - math.sin(ang) * (e.radius + 5),
                e.color, 2,
            )
        arcade.draw_circle_filled(x - 3, y + 2, 2, (255, 255, 255))
        arcade.draw_circle_filled(x + 3, y + 2, 2, (255, 255, 255))
        arcade.draw_circle_filled(x - 3, y + 2, 1, FACE_COLOR)
        arcade.draw_circle_filled(x + 3, y + 2, 1, FACE_COLOR)

    def _draw_hud(self, s: SessionSnapshot):
        # Health bar
        bar_w, bar_h = 180, 10
        x0, y0 = 12, self.height - 22
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + bar_h, (60, 60, 60))
        fill = bar_w * clamp(s.health / MAX_HEALTH, 0.0, 1.0)
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, y0, y0 + bar_h, s.avatar.color)

        txt = (f"Score: {s.score}  "
               f"Health: {s.health}  "
               f"Collected: {s.collected}")
        arcade.draw_text(txt, 12, self.height - 40, HUD_COLOR, 14)

        if s.game_over:
            arcade.draw_text(
                game_over_message(s),
                self.width / 2 - 230, self.height / 2, HUD_COLOR, 18,
            )
            arcade.draw_text("Press R or Enter to play again",
                             self.width / 2 - 150, self.height / 2 - 30, HUD_COLOR, 14)


def main(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(description="Play the collector game")
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=600)
    parser.add_argument("--seed", type=int, default=None, help="Seed for a repeatable game")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed).random
    session = Session(width=args.width, height=args.height, rng=rng)

    print("WASD / arrow keys to move. Collect pickups, dodge the red spikes.")
    CollectorWindow(session)
    arcade.run()


if __name__ == "__main__":
    main()
