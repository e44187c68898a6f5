import math

import numpy as np
import pytest

from game.collector import CollectorEnv
from game.collector.collector_env import DEFAULT_REWARDS

from .conftest import make_item


@pytest.fixture
def env():
    env = CollectorEnv(render_mode=None)
    yield env
    env.close()


def test_reset_observation(env):
    obs, info = env.reset(seed=0)

    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["score"] == 0
    assert info["health"] == 100
    assert info["step"] == 0


def test_step_contract(env):
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(np.array([1, 0, 0, 1]))

    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)
    assert not terminated
    assert not truncated
    assert info["step"] == 1
    assert (env.session.avatar.x, env.session.avatar.y) == (405, 295)


def test_pickup_reward(env):
    env.reset(seed=0)
    env.session.collectibles.append(make_item(400, 300, "rare"))
    _, reward, _, _, info = env.step([0, 0, 0, 0])

    assert info["score"] == 50
    assert info["collected"] == 1
    assert math.isclose(reward, DEFAULT_REWARDS["R_POINTS"] * 50 - DEFAULT_REWARDS["R_TIME"])


def test_game_over_terminates(env):
    env.reset(seed=0)
    env.session.health = 10
    env.session.spawn_enemy()
    env.session.enemies[0].x, env.session.enemies[0].y = 400, 300

    _, reward, terminated, _, info = env.step([0, 0, 0, 0])

    assert terminated
    assert info["health"] == 0
    expected = -10 * DEFAULT_REWARDS["R_DAMAGE"] - DEFAULT_REWARDS["R_TIME"] - DEFAULT_REWARDS["R_DEATH"]
    assert math.isclose(reward, expected)


def test_truncation():
    env = CollectorEnv(max_steps=5)
    env.reset(seed=1)
    for i in range(5):
        _, _, terminated, truncated, _ = env.step([0, 0, 0, 0])
    assert truncated
    assert not terminated


def test_same_seed_same_game():
    actions = [[i % 2, 0, (i // 7) % 2, 1 - (i // 7) % 2] for i in range(600)]

    def play(seed):
        env = CollectorEnv()
        env.reset(seed=seed)
        trace = []
        for a in actions:
            obs, _, terminated, _, info = env.step(a)
            trace.append(obs)
            if terminated:
                break
        return np.stack(trace), info

    a_obs, a_info = play(3)
    b_obs, b_info = play(3)

    np.testing.assert_array_equal(a_obs, b_obs)
    assert a_info == b_info
    assert a_info["num_collectibles"] + a_info["collected"] >= 1


def test_nearest_slots_are_padded(env):
    env.reset(seed=0)
    obs = env._get_obs()
    # No enemies or collectibles yet: everything past the avatar block is zero
    assert np.all(obs[3:] == 0)

    env.session.collectibles.append(make_item(600, 300, "mythic"))
    obs = env._get_obs()
    start = 3 + env.k_enemies * 2
    assert obs[start] == pytest.approx(200 / 800)
    assert obs[start + 1] == pytest.approx(0.0)
    assert obs[start + 2] == pytest.approx(0.5)


def test_rejects_unknown_render_mode():
    with pytest.raises(AssertionError):
        CollectorEnv(render_mode="rgb_array")
