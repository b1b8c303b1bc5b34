import math

import pytest

from rocket_arena.utils import (
    circle_collide,
    clamp,
    limit_speed,
    point_in_rect,
    polygon_points,
    rounded_rect_points,
    ship_triangle,
    twinkle_alpha,
)


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


def test_limit_speed_rescales_uniformly():
    vx, vy = limit_speed(6.0, 8.0, 5.0)
    assert math.hypot(vx, vy) == pytest.approx(5.0)
    assert vx / vy == pytest.approx(6.0 / 8.0)
    assert limit_speed(1.0, 1.0, 5.0) == (1.0, 1.0)


def test_circle_collide_is_strict():
    assert circle_collide(0, 0, 10, 19, 0, 10)
    assert not circle_collide(0, 0, 10, 20, 0, 10)


def test_point_in_rect_inclusive_edges():
    assert point_in_rect(10, 20, 10, 20, 5, 5)
    assert point_in_rect(15, 25, 10, 20, 5, 5)
    assert not point_in_rect(15.1, 25, 10, 20, 5, 5)


def test_rounded_rect_stays_inside_bounds():
    points = rounded_rect_points(48, 48, 704, 504, 20)
    assert len(points) == 4 * 7
    for x, y in points:
        assert 48 - 1e-9 <= x <= 752 + 1e-9
        assert 48 - 1e-9 <= y <= 552 + 1e-9


def test_polygon_points_scale_with_radius():
    points = polygon_points(100, 100, 20, ((0.0, 1.0), (math.pi / 2, 0.5)))
    assert points[0] == pytest.approx((120, 100))
    assert points[1] == pytest.approx((100, 110))


def test_ship_triangle_nose_points_along_heading():
    nose = ship_triangle(0, 0, math.pi / 2, 15)[0]
    assert nose == pytest.approx((0, 15), abs=1e-9)


def test_twinkle_alpha_range():
    values = [twinkle_alpha(t * 0.1, 5.0, 1.0) for t in range(200)]
    assert min(values) >= 0.3 - 1e-9
    assert max(values) <= 1.0 + 1e-9
