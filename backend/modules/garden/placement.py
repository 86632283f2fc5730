"""
Cosmic Garden - Flower Placement
Rejection sampling for non-overlapping garden coordinates.
"""
import random
from typing import Iterable, Optional, Tuple

from .models import Position

X_BAND: Tuple[float, float] = (10.0, 90.0)
Y_BAND: Tuple[float, float] = (65.0, 90.0)   # lower part of the scene
MIN_SEPARATION = 8.0
MAX_ATTEMPTS = 50


def _draw(rng: random.Random, x_band: Tuple[float, float], y_band: Tuple[float, float]) -> Position:
    return Position(rng.uniform(*x_band), rng.uniform(*y_band))


def is_too_close(candidate: Position, other: Position, min_separation: float = MIN_SEPARATION) -> bool:
    """Two flowers overlap when they are within the window on both axes"""
    return (abs(candidate.x - other.x) < min_separation
            and abs(candidate.y - other.y) < min_separation)


def generate_position(
    existing: Iterable[Position],
    rng: Optional[random.Random] = None,
    x_band: Tuple[float, float] = X_BAND,
    y_band: Tuple[float, float] = Y_BAND,
    min_separation: float = MIN_SEPARATION,
    max_attempts: int = MAX_ATTEMPTS,
) -> Position:
    """
    Pick a spot for a new flower.

    Tries up to max_attempts candidates and returns the first one clear of
    every existing position. A crowded garden keeps the last candidate drawn
    instead of raising, so planting never fails here.
    """
    rng = rng or random
    taken = [Position(float(p[0]), float(p[1])) for p in existing]

    candidate = None
    for _ in range(max_attempts):
        candidate = _draw(rng, x_band, y_band)
        if not any(is_too_close(candidate, other, min_separation) for other in taken):
            return candidate

    return candidate if candidate is not None else _draw(rng, x_band, y_band)
