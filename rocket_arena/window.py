"""
Arcade window that drives a GameSession
---------------------------------------
- on_update: advance the session one frame and play the sounds it reports
- on_draw: render the session
- key/mouse handlers only write to the InputState

Run:
    python -m rocket_arena
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional

import arcade

from .controls import InputState, UP, DOWN, LEFT, RIGHT
from .render import draw_session
from .session import GameSession
from .sound import SoundBank

logger = logging.getLogger(__name__)

TITLE = "Rocket Arena"
FPS = 60

MOVE_BINDINGS = {
    arcade.key.W: UP,
    arcade.key.UP: UP,
    arcade.key.S: DOWN,
    arcade.key.DOWN: DOWN,
    arcade.key.A: LEFT,
    arcade.key.LEFT: LEFT,
    arcade.key.D: RIGHT,
    arcade.key.RIGHT: RIGHT,
}


class RocketWindow(arcade.Window):
    """Arcade window for playing (or watching) a session"""

    def __init__(
        self,
        session: GameSession,
        sound: Optional[SoundBank] = None,
        fullscreen: bool = False,
        drive: bool = True,
    ):
        super().__init__(
            session.width, session.height, TITLE,
            fullscreen=fullscreen, update_rate=1 / FPS,
        )
        self.session = session
        self.sound = sound if sound is not None else SoundBank()
        self.controls = InputState(MOVE_BINDINGS)
        # When False something else (the gym env) steps the session
        self.drive = drive
        self.clock = 0.0
        self.background_color = arcade.color.BLACK

    def on_update(self, delta_time: float):
        if not self.drive:
            return
        self.clock += delta_time
        for event in self.session.step(self.clock, self.controls):
            self.sound.play(event)

    def on_draw(self):
        self.clear()
        draw_session(self.session)

    def on_key_press(self, symbol: int, modifiers: int):
        self.sound.ensure_init()
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        self.controls.key_down(symbol)

    def on_key_release(self, symbol: int, modifiers: int):
        self.controls.key_up(symbol)

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int):
        self.controls.pointer_move(x, y)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        self.sound.ensure_init()
        self.controls.pointer_down(x, y, primary=button == arcade.MOUSE_BUTTON_LEFT)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Rocket Arena")
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Window width (default: 1280, or the display width with --fullscreen)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Window height (default: 720, or the display height with --fullscreen)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Open a fullscreen window sized to the display",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for stars and obstacle spawns",
    )
    parser.add_argument(
        "--mute",
        action="store_true",
        help="Disable sound",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    width, height = 1280, 720
    if args.fullscreen:
        width, height = arcade.get_display_size()
    width = args.width or width
    height = args.height or height

    session = GameSession(width=width, height=height, seed=args.seed)
    sound = SoundBank(backend=None if args.mute else arcade)
    RocketWindow(session, sound=sound, fullscreen=args.fullscreen)

    logger.info("Starting %dx%d arena", width, height)
    arcade.run()
