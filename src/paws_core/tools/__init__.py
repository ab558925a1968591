"""Ports and small helpers shared by the simulation systems."""

from .clock import Clock, SystemClock, FixedClock, ensure_utc, hours_between
from .rng import Rng, make_rng, roll, uniform, weighted_choice
from .numbers import clamp, round_half_up, round_to

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "ensure_utc",
    "hours_between",
    "Rng",
    "make_rng",
    "roll",
    "uniform",
    "weighted_choice",
    "clamp",
    "round_half_up",
    "round_to",
]
