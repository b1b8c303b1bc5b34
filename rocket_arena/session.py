"""
GameSession - everything that changes while the arena is being played
----------------------------------------------------------------------
- One aggregate owns ship, bullets, obstacles, stars, score and timers
- step(now, controls) runs one frame: aim -> presses -> restart deadline -> move -> collisions -> spawn
- Deferred effects (fire cooldown, restart delay) are deadlines compared against `now`
- Sound and other side effects are reported as event names in `events`

Coordinates follow the window: origin bottom-left, y grows upward.
"""

from __future__ import annotations

import logging
import math
import random
from typing import List, Optional, Tuple

from .controls import InputState, UP, DOWN, LEFT, RIGHT
from .entities import Ship, Bullet, Obstacle, Star, LIGHT, DARK
from .utils import clamp, circle_collide, limit_speed, point_in_rect

logger = logging.getLogger(__name__)

# Events emitted by step()
FIRE = "fire"
EXPLOSION = "explosion"
GAME_OVER = "game_over"
CLICK = "click"


class GameSession:
    """State and per-frame stages of one arena"""

    def __init__(
        self,
        width: int = 1280,
        height: int = 720,
        border: float = 48.0,  # drawn border inset
        margin: float = 52.0,  # physics boundary inset
        border_radius: float = 20.0,
        ship_radius: float = 15.0,
        ship_accel: float = 0.3,
        ship_friction: float = 0.98,
        ship_max_speed: float = 5.0,
        bullet_speed: float = 8.0,
        bullet_radius: float = 3.0,
        fire_cooldown: float = 0.15,  # seconds
        spawn_interval: int = 120,  # steps
        spawn_offset: float = 30.0,
        obstacle_speed_range: Tuple[float, float] = (1.5, 3.5),
        obstacle_size_range: Tuple[float, float] = (20.0, 45.0),
        obstacle_sides_range: Tuple[int, int] = (6, 9),
        vertex_jitter_range: Tuple[float, float] = (0.7, 1.3),
        max_health: int = 5,
        light_chance: float = 0.3,
        aim_spread: float = math.pi / 2,
        kill_award: int = 10,
        restart_delay: float = 0.15,  # seconds
        button_size: Tuple[float, float] = (180.0, 45.0),
        button_offset: float = 80.0,
        num_stars: int = 200,
        star_rate_range: Tuple[float, float] = (4.0, 8.0),  # rad/s
        seed: Optional[int] = None,
    ):
        # Arena
        self.width = width
        self.height = height
        self.border = border
        self.margin = margin
        self.border_radius = border_radius

        # Ship / bullets
        self.ship_radius = ship_radius
        self.ship_accel = ship_accel
        self.ship_friction = ship_friction
        self.ship_max_speed = ship_max_speed
        self.bullet_speed = bullet_speed
        self.bullet_radius = bullet_radius
        self.fire_cooldown = fire_cooldown

        # Obstacles
        self.spawn_interval = spawn_interval
        self.spawn_offset = spawn_offset
        self.obstacle_speed_range = obstacle_speed_range
        self.obstacle_size_range = obstacle_size_range
        self.obstacle_sides_range = obstacle_sides_range
        self.vertex_jitter_range = vertex_jitter_range
        self.max_health = max_health
        self.light_chance = light_chance
        self.aim_spread = aim_spread
        self.kill_award = kill_award

        # Game-over screen
        self.restart_delay = restart_delay
        self.button_size = button_size
        self.button_offset = button_offset

        self.rng = random.Random(seed)

        self.stars: List[Star] = self._make_stars(num_stars, star_rate_range)

        # World state
        self.ship: Ship = None  # type: ignore
        self.bullets: List[Bullet] = []
        self.obstacles: List[Obstacle] = []
        self.score = 0
        self.game_over = False
        self.frame_count = 0
        self.restart_pressed = False

        # Per-run counters
        self.kills = 0
        self.hits = 0
        self.shots = 0

        # Clock and deadlines
        self.now = 0.0
        self._fire_ready_at = 0.0
        self._restart_at: Optional[float] = None

        self.events: List[str] = []

        self.restart()

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def restart(self):
        """Back to the running state with an empty arena"""
        if self.ship is None:
            self.ship = Ship(
                x=self.width / 2,
                y=self.height / 2,
                radius=self.ship_radius,
                accel=self.ship_accel,
                friction=self.ship_friction,
                max_speed=self.ship_max_speed,
            )
        else:
            self.ship.x = self.width / 2
            self.ship.y = self.height / 2
            self.ship.vx = 0.0
            self.ship.vy = 0.0
            logger.info("Restarting run")

        self.bullets = []
        self.obstacles = []
        self.score = 0
        self.frame_count = 0
        self.game_over = False
        self.restart_pressed = False
        self._restart_at = None
        self.kills = 0
        self.hits = 0
        self.shots = 0

    def step(self, now: float, controls: Optional[InputState] = None) -> List[str]:
        """Advance one frame at wall time `now` (seconds). Returns emitted events."""
        self.now = now
        self.events = []

        if controls is not None:
            if not self.game_over:
                self.aim_ship(controls.pointer)
            for x, y in controls.drain_presses():
                self.press(x, y)

        if self._restart_at is not None and now >= self._restart_at:
            self.restart()
            return self.events

        if self.game_over:
            return self.events

        self.frame_count += 1
        self.update_ship(controls)
        self.update_bullets()
        self.update_obstacles()
        self.detect_collisions()

        if not self.game_over and self.frame_count % self.spawn_interval == 0:
            self.spawn_obstacle()

        return self.events

    # ----------------------------
    # Controls
    # ----------------------------

    @property
    def can_fire(self) -> bool:
        return not self.game_over and self.now >= self._fire_ready_at

    @property
    def restart_pending(self) -> bool:
        return self._restart_at is not None

    def press(self, x: float, y: float):
        """Primary pointer press: fire while running, restart button once over"""
        if self.game_over:
            self.press_restart(x, y)
        else:
            self.fire()

    def fire(self) -> bool:
        if not self.can_fire:
            return False

        s = self.ship
        self.bullets.append(Bullet(
            x=s.x,
            y=s.y,
            vx=math.cos(s.angle) * self.bullet_speed,
            vy=math.sin(s.angle) * self.bullet_speed,
            radius=self.bullet_radius,
        ))
        self._fire_ready_at = self.now + self.fire_cooldown
        self.shots += 1
        self.events.append(FIRE)
        return True

    def restart_button_rect(self) -> Tuple[float, float, float, float]:
        """(left, bottom, width, height) of the restart button, below screen center"""
        bw, bh = self.button_size
        left = self.width / 2 - bw / 2
        bottom = self.height / 2 - self.button_offset - bh
        return left, bottom, bw, bh

    def press_restart(self, x: float, y: float) -> bool:
        if not self.game_over or self.restart_pending:
            return False
        if not point_in_rect(x, y, *self.restart_button_rect()):
            return False

        self.restart_pressed = True
        self._restart_at = self.now + self.restart_delay
        self.events.append(CLICK)
        return True

    # ----------------------------
    # Update stage
    # ----------------------------

    def aim_ship(self, pointer: Optional[Tuple[float, float]]):
        """Face the pointer; heading is kept until a pointer has been seen"""
        if pointer is None:
            return
        px, py = pointer
        self.ship.angle = math.atan2(py - self.ship.y, px - self.ship.x)

    def update_ship(self, controls: Optional[InputState] = None):
        s = self.ship

        if controls is not None:
            if controls.is_held(UP):
                s.vy += s.accel
            if controls.is_held(DOWN):
                s.vy -= s.accel
            if controls.is_held(LEFT):
                s.vx -= s.accel
            if controls.is_held(RIGHT):
                s.vx += s.accel

        s.vx *= s.friction
        s.vy *= s.friction
        s.vx, s.vy = limit_speed(s.vx, s.vy, s.max_speed)

        s.x += s.vx
        s.y += s.vy

        # Keep in bounds (inside the border)
        inset = self.margin + s.radius
        s.x = clamp(s.x, inset, self.width - inset)
        s.y = clamp(s.y, inset, self.height - inset)

    def update_bullets(self):
        lo_x, hi_x = self.margin, self.width - self.margin
        lo_y, hi_y = self.margin, self.height - self.margin

        remaining = []
        for b in self.bullets:
            b.x += b.vx
            b.y += b.vy
            if lo_x <= b.x <= hi_x and lo_y <= b.y <= hi_y:
                remaining.append(b)
        self.bullets = remaining

    def update_obstacles(self):
        m = self.margin
        for o in self.obstacles:
            o.x += o.vx
            o.y += o.vy

            # Bounce off the inner boundary
            if o.x - o.radius < m:
                o.x = m + o.radius
                o.vx = abs(o.vx)
            elif o.x + o.radius > self.width - m:
                o.x = self.width - m - o.radius
                o.vx = -abs(o.vx)

            if o.y - o.radius < m:
                o.y = m + o.radius
                o.vy = abs(o.vy)
            elif o.y + o.radius > self.height - m:
                o.y = self.height - m - o.radius
                o.vy = -abs(o.vy)

    def spawn_obstacle(self) -> Obstacle:
        """Spawn one obstacle just outside a random border edge, aimed near the center"""
        rng = self.rng
        outside = self.spawn_offset
        side = rng.choice(["top", "bottom", "left", "right"])

        if side == "top":
            x = rng.uniform(0, self.width)
            y = self.height - self.border + outside
        elif side == "bottom":
            x = rng.uniform(0, self.width)
            y = self.border - outside
        elif side == "left":
            x = self.border - outside
            y = rng.uniform(0, self.height)
        else:
            x = self.width - self.border + outside
            y = rng.uniform(0, self.height)

        heading = math.atan2(self.height / 2 - y, self.width / 2 - x)
        heading += (rng.random() - 0.5) * self.aim_spread
        speed = rng.uniform(*self.obstacle_speed_range)

        sides = rng.randint(*self.obstacle_sides_range)
        shape = tuple(
            ((i / sides) * math.pi * 2, rng.uniform(*self.vertex_jitter_range))
            for i in range(sides)
        )

        obstacle = Obstacle(
            x=x,
            y=y,
            vx=math.cos(heading) * speed,
            vy=math.sin(heading) * speed,
            radius=rng.uniform(*self.obstacle_size_range),
            shape=shape,
            health=rng.randint(1, self.max_health),
            color=LIGHT if rng.random() < self.light_chance else DARK,
        )
        self.obstacles.append(obstacle)
        logger.debug("Spawned obstacle from %s with health %d", side, obstacle.health)
        return obstacle

    # ----------------------------
    # Collision stage
    # ----------------------------

    def detect_collisions(self):
        # Bullets vs obstacles
        consumed = set()
        survivors = []
        for o in self.obstacles:
            for i, b in enumerate(self.bullets):
                if i in consumed:
                    continue
                if math.hypot(o.x - b.x, o.y - b.y) < o.radius:
                    consumed.add(i)
                    o.health -= 1
                    self.hits += 1
                    if o.health <= 0:
                        break

            if o.health <= 0:
                self.score += self.kill_award
                self.kills += 1
                self.events.append(EXPLOSION)
            else:
                survivors.append(o)

        self.obstacles = survivors
        if consumed:
            self.bullets = [b for i, b in enumerate(self.bullets) if i not in consumed]

        # Ship vs obstacles
        s = self.ship
        for o in self.obstacles:
            if circle_collide(s.x, s.y, s.radius, o.x, o.y, o.radius):
                self._end_run()
                break

    def _end_run(self):
        self.game_over = True
        self.events.append(GAME_OVER)
        logger.info("Game over at frame %d with score %d", self.frame_count, self.score)

    # ----------------------------
    # Setup
    # ----------------------------

    def _make_stars(self, count: int, rate_range: Tuple[float, float]) -> List[Star]:
        rng = self.rng
        m = self.margin
        return [
            Star(
                x=m + rng.random() * (self.width - 2 * m),
                y=m + rng.random() * (self.height - 2 * m),
                size=rng.random() * 2 + 1,
                phase=rng.random() * math.pi * 2,
                rate=rng.uniform(*rate_range),
            )
            for _ in range(count)
        ]
