"""
RocketEnv - Gymnasium wrapper around a GameSession
--------------------------------------------------
- Same rules as the interactive game, advanced at a fixed simulated clock
- MultiDiscrete action space: [move(5), fire(2), aim(8)]
- Vector observation: ship state + top-K nearest obstacles
- Reward from the events of each frame (kills, hits, shots, survival, death)

Quick test:
    python -m rocket_arena.env
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .controls import InputState, DIRECTIONS, UP, DOWN, LEFT, RIGHT
from .session import GameSession, EXPLOSION, FIRE, GAME_OVER
from .utils import clamp

DEFAULT_REWARDS = {
    "R_KILL": 1.0,    # obstacle destroyed
    "R_HIT": 0.2,     # bullet landed
    "R_SHOT": 0.01,   # penalty per shot
    "R_ALIVE": 0.001, # per surviving step
    "R_DEATH": 5.0,   # penalty on game over
}

# move index -> held direction
MOVES = [None, UP, DOWN, LEFT, RIGHT]


class RocketEnv(gym.Env):
    """Rocket Arena as an RL environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        dt: float = 1 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_obstacles: int = 5,
        aim_distance: float = 100.0,
        reward_config: Optional[Mapping[str, float]] = None,
        session_kwargs: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps
        self.k_obstacles = k_obstacles
        self.aim_distance = aim_distance
        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})
        self.session_kwargs = dict(session_kwargs or {})

        # move: 0 none, 1 up, 2 down, 3 left, 4 right
        # fire: 0/1
        # aim: 0..7 (8 directions)
        self.action_space = spaces.MultiDiscrete([5, 2, 8])

        # Ship: pos(2) vel(2) heading(2) can_fire(1)
        # Each obstacle: rel pos(2) rel vel(2) radius(1) health(1)
        obs_dim = 2 + 2 + 2 + 1 + (self.k_obstacles * 6)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._aim_dirs = []
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._aim_dirs.append((math.cos(ang), math.sin(ang)))

        self.session: GameSession = None  # type: ignore
        # Direction names double as key codes
        self.controls = InputState({d: d for d in DIRECTIONS})
        self._window = None
        self._step_count = 0
        self._events: List[str] = []

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        session_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.session = GameSession(
            width=self.width, height=self.height, seed=session_seed, **self.session_kwargs
        )
        self.controls.clear()
        self._step_count = 0
        self._events = []

        if self._window is not None:
            self._window.session = self.session

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, fire, aim = int(action[0]), int(action[1]), int(action[2])
        self._apply_action(move, fire, aim)

        hits_before = self.session.hits
        self._events = self.session.step(self._step_count * self.dt, self.controls)
        hits = self.session.hits - hits_before

        reward = self._compute_reward(hits)

        terminated = self.session.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def _apply_action(self, move: int, fire: int, aim: int):
        for d in DIRECTIONS:
            self.controls.key_up(d)
        direction = MOVES[move % len(MOVES)]
        if direction is not None:
            self.controls.key_down(direction)

        s = self.session.ship
        dx, dy = self._aim_dirs[aim % 8]
        px = s.x + dx * self.aim_distance
        py = s.y + dy * self.aim_distance
        if fire:
            self.controls.pointer_down(px, py)
        else:
            self.controls.pointer_move(px, py)

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        sess = self.session
        s = sess.ship

        obs_parts = [
            s.x / self.width * 2 - 1,
            s.y / self.height * 2 - 1,
            clamp(s.vx / s.max_speed, -1, 1),
            clamp(s.vy / s.max_speed, -1, 1),
            math.cos(s.angle),
            math.sin(s.angle),
            1.0 if sess.can_fire else -1.0,
        ]

        max_rel_speed = sess.obstacle_speed_range[1] + s.max_speed
        max_radius = sess.obstacle_size_range[1]

        nearest = sorted(
            sess.obstacles,
            key=lambda o: (o.x - s.x) ** 2 + (o.y - s.y) ** 2
        )
        for i in range(self.k_obstacles):
            if i < len(nearest):
                o = nearest[i]
                obs_parts += [
                    clamp((o.x - s.x) / self.width, -1, 1),
                    clamp((o.y - s.y) / self.height, -1, 1),
                    clamp((o.vx - s.vx) / max_rel_speed, -1, 1),
                    clamp((o.vy - s.vy) / max_rel_speed, -1, 1),
                    clamp(o.radius / max_radius, 0, 1),
                    clamp(o.health / sess.max_health, 0, 1),
                ]
            else:
                obs_parts += [0.0] * 6

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, hits: int) -> float:
        r = self.rewards
        reward = 0.0

        reward += r["R_KILL"] * self._events.count(EXPLOSION)
        reward += r["R_HIT"] * hits
        reward -= r["R_SHOT"] * self._events.count(FIRE)

        if GAME_OVER in self._events:
            reward -= r["R_DEATH"]
        elif not self.session.game_over:
            reward += r["R_ALIVE"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        sess = self.session
        return {
            "score": sess.score,
            "kills": sess.kills,
            "hits": sess.hits,
            "shots": sess.shots,
            "game_over": sess.game_over,
            "num_obstacles": len(sess.obstacles),
            "num_bullets": len(sess.bullets),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import RocketWindow
            self._window = RocketWindow(self.session, drive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42, max_steps: int = 3600):
    """Run a random-policy episode and return its final info"""
    env = RocketEnv(render_mode="human" if render else None, max_steps=max_steps)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  score: {info['score']}  steps: {info['step']}")

    env.close()
    return info


if __name__ == "__main__":
    run_random_episode(render=True)
