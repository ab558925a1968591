"""Numeric helpers for clamped percentages and game-style rounding."""

import math


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round .5 upward (2.5 -> 3), unlike Python's banker's rounding."""
    return math.floor(value + 0.5)


def round_to(value: float, places: int = 2) -> float:
    """Round to a fixed number of decimal places for display-stable stat values."""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor
