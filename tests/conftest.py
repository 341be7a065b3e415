"""Shared fixtures for the bugs game tests."""

import random

import pytest

from game.bugs.entities import Bug, point
from game.bugs.world import World


@pytest.fixture
def make_world():
    """Build a World with explicit positions and bugs."""

    def _make(player=(100.0, 100.0), score=(400.0, 500.0), bugs=(), size=(800.0, 600.0), seed=0):
        return World(
            player_pos=point(*player),
            score_pos=point(*score),
            screen_size=size,
            bugs=[Bug(pos=point(*pos), vel=point(*vel)) for pos, vel in bugs],
            rng=random.Random(seed),
        )

    return _make
