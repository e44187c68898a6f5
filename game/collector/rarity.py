"""
Rarity tiers and collectible rolling
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from .entities import Collectible, Color

MUTATION_CHANCE = 0.10
MUTATION_RADIUS_SCALE = 1.5
MUTATION_POINTS_SCALE = 2


@dataclass(frozen=True)
class Tier:
    """One rarity class: where it sits on [0, 1) and what it is worth"""
    name: str
    upper: float  # exclusive upper edge of the cumulative band
    color: Color
    points: int
    glow: bool


# Ordered by cumulative band; the last tier closes the range at 1.0
TIERS: Tuple[Tier, ...] = (
    Tier("common", 0.40, (158, 158, 158), 10, False),
    Tier("uncommon", 0.65, (76, 175, 80), 25, False),
    Tier("rare", 0.80, (33, 150, 243), 50, True),
    Tier("epic", 0.92, (156, 39, 176), 100, True),
    Tier("legendary", 0.98, (255, 152, 0), 200, True),
    Tier("mythic", 1.00, (244, 67, 54), 500, True),
)

TIERS_BY_NAME: Dict[str, Tier] = {t.name: t for t in TIERS}
TIER_NAMES: List[str] = [t.name for t in TIERS]


def tier_for_roll(roll: float) -> Tier:
    """Map a uniform draw in [0, 1) onto its tier band"""
    for tier in TIERS:
        if roll < tier.upper:
            return tier
    # Only reachable for a roll of exactly 1.0 or above
    return TIERS[-1]


def band_probabilities() -> Dict[str, float]:
    """Width of each tier's band, i.e. its spawn probability"""
    probs = {}
    lower = 0.0
    for tier in TIERS:
        probs[tier.name] = tier.upper - lower
        lower = tier.upper
    return probs


def roll_collectible(
    rng: Callable[[], float],
    width: float,
    height: float,
) -> Collectible:
    """
    Spawn a collectible uniformly inside the world.

    Draws, in order: x, y, bob phase, tier, mutation.
    """
    x = rng() * width
    y = rng() * height
    phase = rng() * math.pi * 2

    tier = tier_for_roll(rng())
    item = Collectible(
        x=x,
        y=y,
        tier=tier.name,
        color=tier.color,
        points=tier.points,
        has_glow=tier.glow,
        bob_phase=phase,
    )

    if rng() < MUTATION_CHANCE:
        mutate(item)
    return item


def mutate(item: Collectible) -> Collectible:
    """Flag a collectible as mutated: bigger, worth double, hue-cycling"""
    if item.is_mutated:
        return item
    item.is_mutated = True
    item.radius *= MUTATION_RADIUS_SCALE
    item.points *= MUTATION_POINTS_SCALE
    item.mutation_hue = 0.0
    return item
