"""
Utility functions for game mechanics and geometry
"""

from __future__ import annotations
import math
from typing import List, Sequence, Tuple


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def limit_speed(vx: float, vy: float, max_speed: float) -> Tuple[float, float]:
    """Rescale (vx, vy) uniformly so its length does not exceed max_speed"""
    speed = math.hypot(vx, vy)
    if speed > max_speed:
        return vx / speed * max_speed, vy / speed * max_speed
    return vx, vy


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (strictly)"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) < (rr * rr)


def point_in_rect(x: float, y: float, left: float, bottom: float,
                  width: float, height: float) -> bool:
    """Inclusive point-in-rectangle test"""
    return left <= x <= left + width and bottom <= y <= bottom + height


def rounded_rect_points(left: float, bottom: float, width: float, height: float,
                        radius: float, segments: int = 6) -> List[Tuple[float, float]]:
    """
    Outline of a rectangle with rounded corners as a closed point list.

    Corners are approximated by `segments` straight pieces each, walked
    counter-clockwise starting at the bottom-right corner.
    """
    radius = max(0.0, min(radius, width / 2, height / 2))
    right = left + width
    top = bottom + height
    corners = [
        (right - radius, bottom + radius, -math.pi / 2),
        (right - radius, top - radius, 0.0),
        (left + radius, top - radius, math.pi / 2),
        (left + radius, bottom + radius, math.pi),
    ]
    points = []
    for cx, cy, start in corners:
        for i in range(segments + 1):
            ang = start + (math.pi / 2) * (i / segments)
            points.append((cx + math.cos(ang) * radius, cy + math.sin(ang) * radius))
    return points


def polygon_points(x: float, y: float, radius: float,
                   shape: Sequence[Tuple[float, float]]) -> List[Tuple[float, float]]:
    """Place an (angle, radius factor) outline around a center point"""
    return [
        (x + math.cos(ang) * radius * factor, y + math.sin(ang) * radius * factor)
        for ang, factor in shape
    ]


def ship_triangle(x: float, y: float, heading: float, size: float) -> List[Tuple[float, float]]:
    """Triangle with its nose pointing along heading"""
    cos_h, sin_h = math.cos(heading), math.sin(heading)

    def _local(lx: float, ly: float) -> Tuple[float, float]:
        # local +x is the nose direction
        return x + lx * cos_h - ly * sin_h, y + lx * sin_h + ly * cos_h

    return [
        _local(size, 0.0),
        _local(-size * 0.7, size * 0.7),
        _local(-size * 0.7, -size * 0.7),
    ]


def twinkle_alpha(elapsed: float, rate: float, phase: float) -> float:
    """Star opacity in [0.3, 1.0] oscillating with time"""
    twinkle = math.sin(elapsed * rate + phase) * 0.5 + 0.5
    return 0.3 + twinkle * 0.7

