"""
Movement controllers
--------------------
A controller looks at the World and returns the MovementIntent for the next
tick. Two variants exist:

- ManualController: arrow keys mapped straight to the player speed
- BotController: greedy pursuit of the score target with a short collision
  lookahead against every bug

Both return a fresh value and never mutate the World.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .entities import (
    KeyState,
    MovementIntent,
    BUG_HALF,
    PLAYER_HALF,
    PLAYER_SPEED,
    SCORE_HALF,
)
from .utils import overlaps, sign
from .world import World

logger = logging.getLogger(__name__)

CONTROLLER_MODES = ("manual", "autonomous", "bot")


class Controller(ABC):
    """Source of the player's movement for each tick"""

    @abstractmethod
    def decide(self, world: World) -> MovementIntent:
        ...


class ManualController(Controller):
    """Maps directional key states to movement, one axis at a time"""

    def __init__(self, keys: Optional[KeyState] = None, speed: float = PLAYER_SPEED):
        self.keys = keys if keys is not None else KeyState()
        self.speed = speed

    def decide(self, world: World) -> MovementIntent:
        dx = dy = 0.0
        if self.keys.left:
            dx = -self.speed
        elif self.keys.right:
            dx = self.speed
        if self.keys.up:
            dy = -self.speed
        elif self.keys.down:
            dy = self.speed
        return MovementIntent(dx, dy)


@dataclass
class SafetyFlags:
    """Which moves stay clear of every bug over the lookahead"""
    left: bool = True
    right: bool = True
    up: bool = True
    down: bool = True
    wait: bool = True


class BotController(Controller):
    """
    Heuristic autoplayer.

    Each tick it walks toward the edge of the score target, then projects the
    player and every bug a few ticks ahead. A projected overlap disables the
    direction whose player edge runs into the bug, and a bug reaching the
    player's current box disables waiting. The final move per axis comes from
    a small priority table over those flags. When nothing is safe the bot
    keeps pursuing and accepts the hit.
    """

    def __init__(self, speed: float = PLAYER_SPEED, horizon: int = 3):
        self.speed = speed
        self.horizon = horizon

    def decide(self, world: World) -> MovementIntent:
        desired = self.pursuit(world)
        vel = np.array([sign(desired[0]), sign(desired[1])]) * self.speed

        flags, escape = self.safety(world, vel)
        logger.debug(
            "move up=%s down=%s left=%s right=%s wait=%s",
            flags.up, flags.down, flags.left, flags.right, flags.wait,
        )

        move_x = self._resolve(desired[0], flags.right, flags.left, flags.wait, escape[0])
        move_y = self._resolve(desired[1], flags.down, flags.up, flags.wait, escape[1])
        return MovementIntent(sign(move_x) * self.speed, sign(move_y) * self.speed)

    def pursuit(self, world: World) -> np.ndarray:
        """Desired direction per axis toward the target's edge, scaled by 1/speed"""
        reach = PLAYER_HALF + SCORE_HALF
        desired = np.zeros(2)
        for axis in range(2):
            delta = float(world.score_pos[axis] - world.player_pos[axis])
            # only need to touch the edge of the score target
            delta -= math.fmod(delta, reach)
            if delta != 0.0:
                desired[axis] = delta / (abs(delta) * self.speed)
        return desired

    def safety(self, world: World, vel: np.ndarray):
        """Collect the safety flags and an escape direction for a wait conflict"""
        flags = SafetyFlags()
        escape = np.zeros(2)
        player = world.player_pos

        for bug in world.bugs:
            # standing still while the bug takes one step
            next_bug = bug.pos + bug.vel
            if overlaps(player, PLAYER_HALF, next_bug, BUG_HALF):
                logger.debug("collide 0 %s %s", player, next_bug)
                if flags.wait:
                    escape = np.array([sign(player[0] - next_bug[0]), sign(player[1] - next_bug[1])])
                flags.wait = False

            for n in range(1, self.horizon):
                new_player = player + vel * n
                new_bug = bug.pos + bug.vel * n
                if not overlaps(new_player, PLAYER_HALF, new_bug, BUG_HALF):
                    continue
                logger.debug("collide %d %s %s", n, new_player, new_bug)
                if self._mark_edges(flags, new_player, new_bug):
                    break

        return flags, escape

    @staticmethod
    def _mark_edges(flags: SafetyFlags, p: np.ndarray, b: np.ndarray) -> bool:
        # Disable each direction whose leading player edge lies inside the bug
        hit = False
        lo_x, hi_x = b[0] - BUG_HALF, b[0] + BUG_HALF
        lo_y, hi_y = b[1] - BUG_HALF, b[1] + BUG_HALF
        if lo_x <= p[0] - PLAYER_HALF <= hi_x:
            flags.left = False
            hit = True
        if lo_x <= p[0] + PLAYER_HALF <= hi_x:
            flags.right = False
            hit = True
        if lo_y <= p[1] - PLAYER_HALF <= hi_y:
            flags.up = False
            hit = True
        if lo_y <= p[1] + PLAYER_HALF <= hi_y:
            flags.down = False
            hit = True
        return hit

    def _resolve(
        self,
        desired: float,
        positive: bool,
        negative: bool,
        wait: bool,
        escape: float,
    ) -> float:
        if positive and negative:
            if wait or desired != 0.0:
                return desired
            return escape * self.speed
        # Only the pursuit direction was projected, so the opposite "safe" move
        # is unchecked and can run into a bug coming from behind.
        if positive:
            return self.speed
        if negative:
            return -self.speed
        if wait:
            return 0.0
        logger.debug("Cornered, keep chasing the target")
        return desired


def make_controller(mode: str, keys: Optional[KeyState] = None, **kwargs) -> Controller:
    """Build the controller selected by the `mode` config value"""
    if mode == "manual":
        return ManualController(keys=keys, **kwargs)
    elif mode in ("autonomous", "bot"):
        return BotController(**kwargs)
    else:
        raise ValueError(f"Unknown controller mode: {mode}")
