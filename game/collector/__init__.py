"""Collector game - rarity pickups, homing enemies, Gymnasium wrapper"""

from .session import Session, SessionSnapshot, InputState
from .collector_env import CollectorEnv, run_random_episode

__all__ = ['Session', 'SessionSnapshot', 'InputState', 'CollectorEnv', 'run_random_episode']
