"""Rocket Arena - single-screen arcade shooter with a Gymnasium environment"""

from .controls import InputState
from .session import GameSession
from .sound import SoundBank
from .env import RocketEnv, run_random_episode

__all__ = ['GameSession', 'InputState', 'SoundBank', 'RocketEnv', 'run_random_episode']
