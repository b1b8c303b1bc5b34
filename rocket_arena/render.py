"""
Drawing for a GameSession using Arcade primitives.

Everything here reads the session and never writes to it.
"""

from __future__ import annotations

import arcade

from .entities import LIGHT
from .session import GameSession
from .utils import (
    polygon_points,
    rounded_rect_points,
    ship_triangle,
    twinkle_alpha,
)

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
BUTTON_C = (34, 34, 34)
BUTTON_PRESSED_C = (68, 68, 68)
GLOW_C = (255, 255, 255, 60)

FONT = ("Courier New", "monospace")


def draw_session(session: GameSession):
    """Draw one full frame"""
    draw_background(session)
    if session.game_over:
        draw_game_over(session)
        return
    draw_ship(session)
    draw_bullets(session)
    draw_obstacles(session)
    draw_score(session)


def draw_background(session: GameSession):
    arcade.draw_lrbt_rectangle_filled(0, session.width, 0, session.height, BLACK)

    b = session.border
    outline = rounded_rect_points(
        b, b, session.width - 2 * b, session.height - 2 * b, session.border_radius
    )
    arcade.draw_polygon_outline(outline, WHITE, 4)

    for star in session.stars:
        alpha = int(255 * twinkle_alpha(session.now, star.rate, star.phase))
        arcade.draw_lrbt_rectangle_filled(
            star.x, star.x + star.size, star.y, star.y + star.size, (*WHITE, alpha)
        )


def draw_ship(session: GameSession):
    s = session.ship
    arcade.draw_polygon_filled(ship_triangle(s.x, s.y, s.angle, s.radius), WHITE)


def draw_bullets(session: GameSession):
    for b in session.bullets:
        # Glow
        arcade.draw_circle_filled(b.x, b.y, b.radius * 3, GLOW_C)
        arcade.draw_circle_filled(b.x, b.y, b.radius, WHITE)


def draw_obstacles(session: GameSession):
    for o in session.obstacles:
        points = polygon_points(o.x, o.y, o.radius, o.shape)
        fill = WHITE if o.color == LIGHT else BLACK
        arcade.draw_polygon_filled(points, fill)
        arcade.draw_polygon_outline(points, WHITE, 2)

        if o.health > 0:
            label = BLACK if o.color == LIGHT else WHITE
            arcade.draw_text(
                str(o.health), o.x, o.y, label, 16,
                font_name=FONT, bold=True, anchor_x="center", anchor_y="center",
            )


def draw_score(session: GameSession):
    arcade.draw_text(
        f"SCORE: {session.score}", 60, session.height - 35, WHITE, 24,
        font_name=FONT, bold=True,
    )


def draw_game_over(session: GameSession):
    cx = session.width / 2
    cy = session.height / 2

    arcade.draw_text(
        "GAME OVER", cx, cy, WHITE, 48,
        font_name=FONT, bold=True, anchor_x="center",
    )
    arcade.draw_text(
        f"FINAL SCORE: {session.score}", cx, cy - 50, WHITE, 20,
        font_name=FONT, bold=True, anchor_x="center",
    )

    # Restart button, lighter while pressed
    left, bottom, bw, bh = session.restart_button_rect()
    button = rounded_rect_points(left, bottom, bw, bh, 12)
    fill = BUTTON_PRESSED_C if session.restart_pressed else BUTTON_C
    arcade.draw_polygon_filled(button, fill)
    arcade.draw_polygon_outline(button, WHITE, 2)
    arcade.draw_text(
        "RESTART", left + bw / 2, bottom + bh / 2, WHITE, 18,
        font_name=FONT, bold=True, anchor_x="center", anchor_y="center",
    )
