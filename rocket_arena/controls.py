"""
Input state shared between the window's event handlers and the frame loop.

Event handlers only record what happened (held keys, pointer position,
pointer presses); the session reads and drains it once per frame.
"""

from __future__ import annotations

from typing import Dict, Hashable, List, Mapping, Optional, Tuple

UP, DOWN, LEFT, RIGHT = "up", "down", "left", "right"
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)


class InputState:
    """Held keys, last pointer position and queued primary presses"""

    def __init__(self, bindings: Optional[Mapping[Hashable, str]] = None):
        # key code -> logical direction
        self.bindings: Dict[Hashable, str] = dict(bindings or {})
        self.keys: Dict[Hashable, bool] = {}
        self.pointer: Optional[Tuple[float, float]] = None
        self._presses: List[Tuple[float, float]] = []

    def key_down(self, code: Hashable):
        self.keys[code] = True

    def key_up(self, code: Hashable):
        self.keys[code] = False

    def is_held(self, direction: str) -> bool:
        """A direction is held while any key bound to it is down"""
        return any(
            self.keys.get(code, False)
            for code, bound in self.bindings.items()
            if bound == direction
        )

    def held_directions(self) -> List[str]:
        return [d for d in DIRECTIONS if self.is_held(d)]

    def pointer_move(self, x: float, y: float):
        self.pointer = (x, y)

    def pointer_down(self, x: float, y: float, primary: bool = True):
        self.pointer = (x, y)
        if primary:
            self._presses.append((x, y))

    def drain_presses(self) -> List[Tuple[float, float]]:
        presses, self._presses = self._presses, []
        return presses

    def clear(self):
        self.keys.clear()
        self.pointer = None
        self._presses.clear()
