"""Bugs game module - avoidance arcade game with a heuristic bot"""

from .entities import Bug, KeyState, MovementIntent, TickResult
from .world import World, new_world, new_bug
from .controllers import Controller, BotController, ManualController, make_controller
from .loop import FixedStepClock, GameSession
from .bugs_env import BugsEnv, run_bot_episode

__all__ = [
    'Bug',
    'KeyState',
    'MovementIntent',
    'TickResult',
    'World',
    'new_world',
    'new_bug',
    'Controller',
    'BotController',
    'ManualController',
    'make_controller',
    'FixedStepClock',
    'GameSession',
    'BugsEnv',
    'run_bot_episode',
]
