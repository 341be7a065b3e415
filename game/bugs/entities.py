"""
Game entity dataclasses and size constants
"""

from dataclasses import dataclass

import numpy as np


# Side lengths of the three square kinds (positions are centers)
PLAYER_SIZE = 20.0
SCORE_SIZE = 30.0
BUG_SIZE = 10.0

PLAYER_HALF = PLAYER_SIZE / 2.0
SCORE_HALF = SCORE_SIZE / 2.0
BUG_HALF = BUG_SIZE / 2.0

PLAYER_SPEED = 5.0

# Bug speed is drawn from [BUG_MIN_SPEED, BUG_MIN_SPEED + BUG_SPEED_RANGE)
BUG_MIN_SPEED = 2.0
BUG_SPEED_RANGE = 3.0


def point(x: float, y: float) -> np.ndarray:
    """Build a 2D point/vector as a float array"""
    return np.array([x, y], dtype=np.float64)


@dataclass(eq=False)
class Bug:
    """Hazard that moves in a straight line and bounces off the screen edges"""
    pos: np.ndarray
    vel: np.ndarray

    @property
    def speed(self) -> float:
        return float(np.hypot(self.vel[0], self.vel[1]))


@dataclass(frozen=True)
class MovementIntent:
    """Per-tick desired player velocity, each component in {-speed, 0, +speed}"""
    dx: float = 0.0
    dy: float = 0.0


@dataclass
class KeyState:
    """Directional key states supplied by the input collaborator"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    def clear(self):
        self.up = self.down = self.left = self.right = False


@dataclass(frozen=True)
class TickResult:
    """Outcome of one world tick"""
    terminated: bool = False
    score: int = 0
    captured: bool = False
