import math

from game.collector.utils import clamp, distance, normalize, circle_collide, hue_to_rgb


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


def test_normalize_unit_length():
    nx, ny = normalize(3.0, 4.0)
    assert math.isclose(nx, 0.6)
    assert math.isclose(ny, 0.8)


def test_normalize_zero_vector():
    assert normalize(0.0, 0.0) == (0.0, 0.0)


def test_distance():
    assert distance(0, 0, 3, 4) == 5.0


def test_circle_collide_is_strict():
    # 27 apart with radii 15 + 12: touching, not overlapping
    assert not circle_collide(400, 300, 15, 427, 300, 12)
    assert circle_collide(400, 300, 15, 426.9, 300, 12)
    assert circle_collide(400, 300, 15, 405, 300, 12)


def test_hue_to_rgb():
    assert hue_to_rgb(0) == (255, 0, 0)
    assert hue_to_rgb(120) == (0, 255, 0)
    assert hue_to_rgb(360) == hue_to_rgb(0)
