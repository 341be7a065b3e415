"""
Arcade window: draws the World and feeds arrow keys to the manual controller
"""

from __future__ import annotations

import logging
from typing import Optional

import arcade

from .entities import KeyState, BUG_HALF, PLAYER_HALF, SCORE_HALF
from .loop import GameSession
from .world import World

logger = logging.getLogger(__name__)


class BugsWindow(arcade.Window):
    """Arcade window for rendering a bugs session"""

    def __init__(
        self,
        world: World,
        session: Optional[GameSession] = None,
        keys: Optional[KeyState] = None,
        title: str = "Bugs - Arcade",
    ):
        super().__init__(int(world.width), int(world.height), title)
        self.world = world
        self.session = session
        self.keys = keys

        # Colors
        self.BG = arcade.color.BLACK
        self.SCORE_C = (0, 0, 255)
        self.PLAYER_C = (0, 255, 0)
        self.BUG_C = (255, 0, 0)
        self.HUD_C = (220, 220, 220)
        self.background_color = self.BG

    def _draw_square(self, pos, half: float, color):
        # World y grows downward, arcade y grows upward
        y = self.world.height - pos[1]
        arcade.draw_lrbt_rectangle_filled(
            pos[0] - half, pos[0] + half, y - half, y + half, color
        )

    def on_draw(self):
        """Draw the current game state"""
        self.clear()

        self._draw_square(self.world.score_pos, SCORE_HALF, self.SCORE_C)
        self._draw_square(self.world.player_pos, PLAYER_HALF, self.PLAYER_C)
        for bug in self.world.bugs:
            self._draw_square(bug.pos, BUG_HALF, self.BUG_C)

        txt = f"Score: {self.world.score}  Bugs: {len(self.world.bugs)}"
        arcade.draw_text(txt, 12, self.height - 24, self.HUD_C, 14)

    def on_update(self, delta_time: float):
        if delta_time > 0:
            logger.debug("Framerate: %.1f", 1.0 / delta_time)
        if self.session is None:
            return
        self.session.update(delta_time)
        if self.session.finished:
            self.close()

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            logger.info("Quit requested, score %d", self.world.score)
            self.close()
        else:
            self._set_key(symbol, True)

    def on_key_release(self, symbol: int, modifiers: int):
        self._set_key(symbol, False)

    def _set_key(self, symbol: int, pressed: bool):
        if self.keys is None:
            return
        if symbol == arcade.key.UP:
            self.keys.up = pressed
        elif symbol == arcade.key.DOWN:
            self.keys.down = pressed
        elif symbol == arcade.key.LEFT:
            self.keys.left = pressed
        elif symbol == arcade.key.RIGHT:
            self.keys.right = pressed

    def on_deactivate(self):
        # Key releases are not delivered while unfocused
        if self.keys is not None:
            self.keys.clear()
