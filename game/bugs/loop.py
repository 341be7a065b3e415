"""
Fixed-timestep game loop driver
"""

from __future__ import annotations

import logging
from typing import Optional

from .controllers import Controller
from .entities import TickResult
from .world import World

logger = logging.getLogger(__name__)


class FixedStepClock:
    """Turns elapsed wall-clock time into a bounded number of fixed steps"""

    def __init__(self, rate: int = 30, max_steps: int = 5):
        self.rate = rate
        self.dt = 1.0 / rate
        self.max_steps = max_steps
        self._residual = 0.0

    def advance(self, elapsed: float) -> int:
        self._residual += max(0.0, elapsed)
        steps = int(self._residual // self.dt)
        if steps > self.max_steps:
            # Drop the backlog instead of spiralling
            steps = self.max_steps
            self._residual = 0.0
        else:
            self._residual -= steps * self.dt
        return steps

    def reset(self):
        self._residual = 0.0


class GameSession:
    """Runs controller + world ticks for each frame until a bug hits the player"""

    def __init__(
        self,
        world: World,
        controller: Controller,
        clock: Optional[FixedStepClock] = None,
    ):
        self.world = world
        self.controller = controller
        self.clock = clock or FixedStepClock()
        self.ticks = 0
        self._result = TickResult(score=world.score)

    @property
    def finished(self) -> bool:
        return self._result.terminated

    @property
    def result(self) -> TickResult:
        return self._result

    def step(self) -> TickResult:
        """Run exactly one fixed update"""
        if self.finished:
            return self._result
        intent = self.controller.decide(self.world)
        self._result = self.world.tick(intent)
        self.ticks += 1
        if self._result.terminated:
            logger.info("Session over after %d ticks, final score %d", self.ticks, self._result.score)
        return self._result

    def update(self, elapsed: float) -> TickResult:
        """Run the fixed updates owed for `elapsed` seconds of wall time"""
        for _ in range(self.clock.advance(elapsed)):
            self.step()
            if self.finished:
                break
        return self._result
