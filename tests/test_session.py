import math

import pytest

from rocket_arena.controls import UP, RIGHT
from rocket_arena.entities import DARK, LIGHT
from rocket_arena.session import GameSession

from conftest import make_bullet, make_obstacle


def test_ship_starts_at_center(session):
    assert (session.ship.x, session.ship.y) == (400, 300)
    assert (session.ship.vx, session.ship.vy) == (0.0, 0.0)
    assert len(session.stars) == 200


def test_held_key_accelerates_with_friction(session, controls):
    controls.key_down(UP)
    session.step(0.0, controls)

    assert session.ship.vy == pytest.approx(0.3 * 0.98)
    assert session.ship.y == pytest.approx(300 + 0.3 * 0.98)
    assert session.ship.vx == 0.0


def test_speed_is_capped(session, controls):
    controls.key_down(UP)
    controls.key_down(RIGHT)
    for i in range(40):
        session.step(i / 60, controls)
        assert math.hypot(session.ship.vx, session.ship.vy) <= session.ship.max_speed + 1e-9


def test_ship_is_clamped_inside_arena(session, controls):
    controls.key_down(UP)
    controls.key_down(RIGHT)
    lo = session.margin + session.ship.radius
    for i in range(600):
        session.step(i / 60, controls)
        assert lo <= session.ship.x <= session.width - lo
        assert lo <= session.ship.y <= session.height - lo
    assert session.ship.x == pytest.approx(session.width - lo)
    assert session.ship.y == pytest.approx(session.height - lo)


def test_heading_follows_pointer(session, controls):
    controls.pointer_move(500, 400)
    session.step(0.0, controls)
    assert session.ship.angle == pytest.approx(math.pi / 4)


def test_heading_unchanged_without_pointer(session, controls):
    session.ship.angle = 1.0
    session.step(0.0, controls)
    assert session.ship.angle == 1.0


def test_bullet_removed_when_leaving_arena(session):
    inner_right = session.width - session.margin
    session.bullets = [make_bullet(inner_right - 1, 300, vx=8.0), make_bullet(400, 300, vx=8.0)]
    session.update_bullets()
    assert len(session.bullets) == 1
    assert session.bullets[0].x == 408


def test_obstacle_bounces_off_walls(session):
    m = session.margin
    left = make_obstacle(m + 31, 300, radius=30, vx=-3.0)
    top = make_obstacle(400, session.height - m - 31, radius=30, vy=3.0)
    session.obstacles = [left, top]

    session.update_obstacles()

    assert left.x == m + 30
    assert left.vx == 3.0
    assert top.y == session.height - m - 30
    assert top.vy == -3.0


def test_spawned_obstacle_shape_and_stats(session):
    for _ in range(50):
        o = session.spawn_obstacle()
        assert isinstance(o.shape, tuple)
        assert 6 <= len(o.shape) <= 9
        assert all(0.7 <= factor <= 1.3 for _, factor in o.shape)
        assert 1 <= o.health <= 5
        assert 20 <= o.radius <= 45
        assert 1.5 <= math.hypot(o.vx, o.vy) <= 3.5
        assert o.color in (LIGHT, DARK)

        outside_top = o.y > session.height - session.border
        outside_bottom = o.y < session.border
        outside_left = o.x < session.border
        outside_right = o.x > session.width - session.border
        assert outside_top or outside_bottom or outside_left or outside_right


def test_spawn_timer():
    session = GameSession(width=800, height=600, spawn_interval=5, seed=3)
    for i in range(4):
        session.step(i / 60)
    assert session.obstacles == []
    session.step(4 / 60)
    assert len(session.obstacles) == 1
    assert session.frame_count == 5


def test_no_spawns_after_game_over():
    session = GameSession(width=800, height=600, spawn_interval=1, seed=3)
    session.game_over = True
    for i in range(10):
        session.step(i / 60)
    assert session.obstacles == []
    assert session.frame_count == 0


def test_same_seed_same_run():
    a = GameSession(width=800, height=600, spawn_interval=3, seed=11)
    b = GameSession(width=800, height=600, spawn_interval=3, seed=11)
    for i in range(30):
        a.step(i / 60)
        b.step(i / 60)
    assert a.obstacles == b.obstacles
    assert a.stars == b.stars
