import pytest

from rocket_arena.controls import InputState, DIRECTIONS
from rocket_arena.entities import Bullet, Obstacle
from rocket_arena.session import GameSession

HEXAGON = tuple((i / 6 * 6.283185307179586, 1.0) for i in range(6))


@pytest.fixture
def session():
    # No timed spawns unless a test asks for them
    return GameSession(width=800, height=600, spawn_interval=10**9, seed=7)


@pytest.fixture
def controls():
    return InputState({d: d for d in DIRECTIONS})


def make_obstacle(x, y, radius=30.0, health=1, vx=0.0, vy=0.0):
    return Obstacle(x=x, y=y, vx=vx, vy=vy, radius=radius, shape=HEXAGON, health=health)


def make_bullet(x, y, vx=0.0, vy=0.0):
    return Bullet(x=x, y=y, vx=vx, vy=vy)
