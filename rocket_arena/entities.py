"""
Game entity dataclasses
"""

from dataclasses import dataclass
from typing import Tuple

# (angle in radians, radius factor) per vertex
Shape = Tuple[Tuple[float, float], ...]

LIGHT = "white"
DARK = "black"


@dataclass
class Ship:
    """Player ship, steered by keys and aimed by the pointer"""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    angle: float = 0.0
    radius: float = 15.0
    accel: float = 0.3  # px/step^2 per held direction
    friction: float = 0.98
    max_speed: float = 5.0  # px/step


@dataclass
class Bullet:
    """Bullet projectile entity"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = 3.0


@dataclass
class Obstacle:
    """Polygonal hazard with hit points"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    shape: Shape
    health: int
    color: str = DARK


@dataclass(frozen=True)
class Star:
    """Decorative background star"""
    x: float
    y: float
    size: float
    phase: float
    rate: float  # rad/s
