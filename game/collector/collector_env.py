"""
CollectorEnv - Gymnasium wrapper around the collector game session
-------------------------------------------------------------------
- Each step advances the Session by one fixed-length frame
- Action: MultiDiscrete([2, 2, 2, 2]) = held up / down / left / right keys
- Vector observation: avatar state + top-K nearest enemies + top-M nearest collectibles
- Reward: points scored, minus damage taken, a small time cost and a death penalty
- Arcade window for human rendering (opened lazily)

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.collector.collector_env
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .session import Session, InputState, MAX_HEALTH
from .rarity import TIERS
from .utils import clamp

MAX_POINTS = max(t.points for t in TIERS) * 2

DEFAULT_REWARDS = {
    "R_POINTS": 0.01,
    "R_DAMAGE": 0.05,
    "R_TIME": 0.001,
    "R_DEATH": 5.0,
}


class CollectorEnv(gym.Env):
    """Collector game exposed through the Gymnasium API"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        frame_ms: float = 1000 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 5,
        m_collectibles: int = 3,
        collectible_spawn_ms: float = 2000.0,
        enemy_spawn_ms: float = 3000.0,
        rewards: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.frame_ms = frame_ms
        self.max_steps = max_steps

        # Observation config
        self.k_enemies = k_enemies
        self.m_collectibles = m_collectibles

        self.rewards = dict(DEFAULT_REWARDS)
        if rewards:
            self.rewards.update(rewards)

        # up, down, left, right
        self.action_space = spaces.MultiDiscrete([2, 2, 2, 2])

        # Avatar: pos(2) health(1)
        # Each enemy: rel pos(2)
        # Each collectible: rel pos(2) points(1)
        obs_dim = 2 + 1 + (self.k_enemies * 2) + (self.m_collectibles * 3)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        # The session draws from the env's seeded generator
        self.session = Session(
            width=width,
            height=height,
            rng=self._uniform,
            collectible_spawn_ms=collectible_spawn_ms,
            enemy_spawn_ms=enemy_spawn_ms,
        )

        self._window = None
        self._step_count = 0

    def _uniform(self) -> float:
        return float(self.np_random.random())

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        self.session.reset()

        obs = self._get_obs()
        info = self._get_info()
        return obs, info

    def step(self, action):
        up, down, left, right = (bool(int(a)) for a in action)

        score_before = self.session.score
        health_before = self.session.health

        self.session.tick(self.frame_ms, InputState(up=up, down=down, left=left, right=right))

        points = self.session.score - score_before
        damage = health_before - self.session.health
        terminated = self.session.is_game_over()

        reward = self._compute_reward(points, damage, terminated)

        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.session
        a = s.avatar

        obs_parts = [(a.x / self.width) * 2 - 1,
                     (a.y / self.height) * 2 - 1,  # map to [-1,1]
                     (s.health / MAX_HEALTH) * 2 - 1]

        # Enemies: top-K nearest
        enemies_sorted = sorted(
            s.enemies,
            key=lambda e: (e.x - a.x) ** 2 + (e.y - a.y) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                dx = (e.x - a.x) / self.width
                dy = (e.y - a.y) / self.height
                obs_parts += [clamp(dx, -1, 1), clamp(dy, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        # Collectibles: top-M nearest
        items_sorted = sorted(
            s.collectibles,
            key=lambda c: (c.x - a.x) ** 2 + (c.y - a.y) ** 2
        )
        for i in range(self.m_collectibles):
            if i < len(items_sorted):
                c = items_sorted[i]
                dx = (c.x - a.x) / self.width
                dy = (c.y - a.y) / self.height
                obs_parts += [clamp(dx, -1, 1), clamp(dy, -1, 1), c.points / MAX_POINTS]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, points: int, damage: int, terminated: bool) -> float:
        r = self.rewards
        reward = r["R_POINTS"] * points
        reward -= r["R_DAMAGE"] * damage
        reward -= r["R_TIME"]

        if terminated:
            reward -= r["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.session
        return {
            "score": s.score,
            "health": s.health,
            "collected": s.collected,
            "num_enemies": len(s.enemies),
            "num_collectibles": len(s.collectibles),
            "num_particles": len(s.particles),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import CollectorWindow
            self._window = CollectorWindow(self.session, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42) -> float:
    """Run a random episode for testing"""
    env = CollectorEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render:
            time.sleep(env.frame_ms / 1000.0)

    print(f"Random episode return: {total:.3f}  "
          f"score={info['score']} collected={info['collected']} health={info['health']}")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
