"""
Utility functions for game mechanics
"""

from __future__ import annotations
import random
from typing import Tuple, Optional
import numpy as np


def sign(x: float) -> float:
    """Sign of x as -1.0, 0.0 or 1.0"""
    return 1.0 if x > 0 else -1.0 if x < 0 else 0.0


def overlaps(a: np.ndarray, a_half: float, b: np.ndarray, b_half: float) -> bool:
    """Check if two axis-aligned squares (center, half side) overlap.

    Edges that only touch do not count as an overlap.
    """
    return bool(
        a[0] - a_half < b[0] + b_half
        and a[0] + a_half > b[0] - b_half
        and a[1] - a_half < b[1] + b_half
        and a[1] + a_half > b[1] - b_half
    )


def spawn_position(
    avoid: np.ndarray,
    avoid_half: float,
    screen_size: Tuple[float, float],
    entity_half: float,
    rng: Optional[random.Random] = None,
) -> np.ndarray:
    """Random position for an entity that tries not to land on `avoid`.

    The candidate is drawn from [h, size - 2 * avoid_half - 3 * h] on each axis.
    If its far edge reaches the near edge of the avoided box, it is pushed once
    by the size of both boxes, which keeps it inside [h, size - h]. The push is
    a single shot, so the result can still overlap the avoided box.
    """
    rng = rng or random
    span = 2.0 * avoid_half + 2.0 * entity_half
    coords = []
    for axis in range(2):
        c = rng.random() * (screen_size[axis] - span - 2.0 * entity_half) + entity_half
        if c + entity_half >= avoid[axis] - avoid_half:
            c += span
        coords.append(c)
    return np.array(coords, dtype=np.float64)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
