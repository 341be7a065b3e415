"""
World state and the per-tick simulation step
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .entities import (
    Bug,
    MovementIntent,
    TickResult,
    BUG_HALF,
    BUG_MIN_SPEED,
    BUG_SPEED_RANGE,
    PLAYER_HALF,
    SCORE_HALF,
    point,
)
from .utils import overlaps, spawn_position

logger = logging.getLogger(__name__)


def new_bug(
    player_pos: np.ndarray,
    screen_size: Tuple[float, float],
    rng: Optional[random.Random] = None,
) -> Bug:
    """Spawn a bug away from the player moving along one random axis"""
    rng = rng or random
    speed = rng.random() * BUG_SPEED_RANGE + BUG_MIN_SPEED
    if rng.random() < 0.5:
        vel = point(speed, 0.0)
    else:
        vel = point(0.0, speed)
    pos = spawn_position(player_pos, PLAYER_HALF, screen_size, BUG_HALF, rng)
    bug = Bug(pos=pos, vel=vel)
    logger.debug("Spawned bug at %s, speed %.2f", pos, bug.speed)
    return bug


@dataclass
class World:
    """All mutable state of one game session"""
    player_pos: np.ndarray
    score_pos: np.ndarray
    screen_size: Tuple[float, float]
    bugs: List[Bug] = field(default_factory=list)
    score: int = 0
    game_over: bool = False
    rng: Optional[random.Random] = field(default=None, repr=False)

    @property
    def width(self) -> float:
        return self.screen_size[0]

    @property
    def height(self) -> float:
        return self.screen_size[1]

    def tick(self, intent: MovementIntent) -> TickResult:
        """Advance the simulation by one fixed step"""
        if self.game_over:
            return TickResult(terminated=True, score=self.score)

        self._move_player(intent)

        # Score system
        captured = False
        if overlaps(self.score_pos, SCORE_HALF, self.player_pos, PLAYER_HALF):
            self.score_pos = spawn_position(
                self.player_pos, PLAYER_HALF, self.screen_size, SCORE_HALF, self.rng
            )
            self.score += 1
            self.bugs.append(new_bug(self.player_pos, self.screen_size, self.rng))
            captured = True
            logger.info("Score: %d", self.score)

        # Bug system
        for bug in self.bugs:
            bug.pos += bug.vel
            self._reflect(bug)

        for bug in self.bugs:
            if overlaps(bug.pos, BUG_HALF, self.player_pos, PLAYER_HALF):
                self.game_over = True
                logger.info("Game over! High score %d", self.score)
                return TickResult(terminated=True, score=self.score, captured=captured)

        return TickResult(terminated=False, score=self.score, captured=captured)

    def _move_player(self, intent: MovementIntent):
        # Reject any axis move that would push the box past a screen edge
        for axis, delta in enumerate((intent.dx, intent.dy)):
            if delta == 0:
                continue
            target = self.player_pos[axis] + delta
            if target - PLAYER_HALF >= 0.0 and target + PLAYER_HALF <= self.screen_size[axis]:
                self.player_pos[axis] = target

    def _reflect(self, bug: Bug):
        # Only one axis is corrected per tick; x is checked first
        w, h = self.screen_size
        if bug.pos[0] - BUG_HALF < 0.0 or bug.pos[0] + BUG_HALF > w:
            bug.vel[0] *= -1.0
        elif bug.pos[1] - BUG_HALF < 0.0 or bug.pos[1] + BUG_HALF > h:
            bug.vel[1] *= -1.0


def new_world(
    width: float = 800.0,
    height: float = 600.0,
    seed: Optional[int] = None,
) -> World:
    """Create a session: player near the center, one target and one bug"""
    rng = random.Random(seed)
    screen_size = (float(width), float(height))
    player_pos = point(width / 2.0 - PLAYER_HALF, height / 2.0 - PLAYER_HALF)
    world = World(
        player_pos=player_pos,
        score_pos=spawn_position(player_pos, PLAYER_HALF, screen_size, SCORE_HALF, rng),
        screen_size=screen_size,
        rng=rng,
    )
    world.bugs.append(new_bug(player_pos, screen_size, rng))
    return world
