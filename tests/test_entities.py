import math

from game.collector.entities import Avatar, Collectible, Enemy, Particle, BOB_SPEED
from game.collector.rarity import mutate
from game.collector.utils import distance, hue_to_rgb

from .conftest import make_item


class TestAvatar:
    def test_moves_are_combinable(self):
        a = Avatar(x=100, y=100)
        a.move(up=True, down=False, left=True, right=False)
        assert (a.x, a.y) == (95, 95)

    def test_opposite_keys_cancel(self):
        a = Avatar(x=100, y=100)
        a.move(up=True, down=True, left=True, right=True)
        assert (a.x, a.y) == (100, 100)

    def test_clamped_by_radius(self):
        a = Avatar(x=-20, y=700)
        a.clamp_to(800, 600)
        assert (a.x, a.y) == (15, 585)


class TestCollectible:
    def test_spawn_height_defaults_to_y(self):
        assert make_item(10, 250).spawn_y == 250
        item = Collectible(x=0, y=40, tier="common", color=(1, 2, 3), points=10,
                           has_glow=False, spawn_y=42.0)
        assert item.spawn_y == 42.0

    def test_bobs_around_spawn_height(self):
        item = make_item(100, 200)
        item.update(100)
        assert math.isclose(item.bob_phase, BOB_SPEED * 100)
        assert math.isclose(item.y, 200 + math.sin(0.3) * 5)
        assert item.spawn_y == 200

        for _ in range(1000):
            item.update(16)
            assert 195 <= item.y <= 205
        assert item.x == 100

    def test_phase_is_not_wrapped(self):
        item = make_item(0, 0)
        for _ in range(10):
            item.update(1000)
        assert math.isclose(item.bob_phase, 30.0)

    def test_zero_dt_keeps_position(self):
        item = make_item(405, 300)
        item.update(0)
        assert item.y == 300

    def test_hue_cycles_only_when_mutated(self):
        plain = make_item(0, 0)
        plain.update(16)
        assert plain.mutation_hue == 0.0
        assert plain.render_color == plain.color

        odd = mutate(make_item(0, 0))
        odd.update(16)
        assert math.isclose(odd.mutation_hue, 0.01)
        assert odd.render_color == hue_to_rgb(odd.mutation_hue)

    def test_hue_wraps_past_360(self):
        odd = mutate(make_item(0, 0))
        odd.mutation_hue = 359.995
        odd.update(16)
        assert odd.mutation_hue == 0.0


class TestEnemy:
    def test_pursuit_closes_distance_each_tick(self):
        target = Avatar(x=400, y=300)
        e = Enemy(x=-30, y=300, target=target)

        prev = distance(e.x, e.y, target.x, target.y)
        for _ in range(100):
            e.update()
            d = distance(e.x, e.y, target.x, target.y)
            assert math.isclose(prev - d, e.speed)
            prev = d

    def test_reads_target_live(self):
        target = Avatar(x=400, y=300)
        e = Enemy(x=0, y=0, target=target)
        target.x, target.y = 0, 100
        e.update()
        assert math.isclose(e.x, 0.0, abs_tol=1e-9)
        assert math.isclose(e.y, 2.0)

    def test_no_movement_on_top_of_target(self):
        target = Avatar(x=50, y=50)
        e = Enemy(x=50, y=50, target=target)
        e.update()
        assert (e.x, e.y) == (50, 50)
        assert math.isclose(e.angle, 0.1)

    def test_out_of_bounds_margin(self):
        target = Avatar(x=0, y=0)
        assert not Enemy(x=-30, y=300, target=target).out_of_bounds(800, 600, 50)
        assert not Enemy(x=849, y=300, target=target).out_of_bounds(800, 600, 50)
        assert Enemy(x=-50, y=300, target=target).out_of_bounds(800, 600, 50)
        assert Enemy(x=400, y=651, target=target).out_of_bounds(800, 600, 50)


class TestParticle:
    def test_update(self):
        p = Particle(x=10, y=10, vx=1.5, vy=-2, color=(1, 2, 3), radius=2)
        p.update()
        assert (p.x, p.y) == (11.5, 8)
        assert math.isclose(p.life, 0.98)
        assert math.isclose(p.radius, 1.96)

    def test_dies_after_about_fifty_ticks(self):
        p = Particle(x=0, y=0, vx=0, vy=0, color=(1, 2, 3), radius=3)
        ticks = 0
        while p.alive:
            p.update()
            ticks += 1
        assert 50 <= ticks <= 51
        assert p.life <= 0
