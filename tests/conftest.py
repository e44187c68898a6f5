"""Shared fixtures for the collector game tests"""

import random
from typing import Iterable

import pytest

from game.collector.entities import Collectible
from game.collector.rarity import TIERS_BY_NAME
from game.collector.session import Session


def scripted(values: Iterable[float], fallback: float = 0.5):
    """Random source that replays ``values`` and then keeps returning ``fallback``"""
    it = iter(values)

    def draw() -> float:
        return next(it, fallback)
    return draw


def make_item(x: float, y: float, tier: str = "common", phase: float = 0.0) -> Collectible:
    t = TIERS_BY_NAME[tier]
    return Collectible(x=x, y=y, tier=t.name, color=t.color, points=t.points,
                       has_glow=t.glow, bob_phase=phase)


@pytest.fixture
def rng():
    return random.Random(1234).random


@pytest.fixture
def session(rng):
    return Session(width=800, height=600, rng=rng)
