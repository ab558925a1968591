"""
Daily training point pool.

The pool refills once per 24 hours measured from the dog's own last reset
(not wall-clock midnight). A tired, hungry, unhappy or sick dog wakes up
with less capacity to train: the refill is capped by its care stats.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from ..state.schema import Delta, Dog
from ..tools.clock import hours_between

logger = logging.getLogger(__name__)


TP_REGEN_INTERVAL_HOURS = 24
MAX_TRAINING_POINTS = 100


def training_points_capacity(dog: Dog) -> int:
    """
    Pool size after a refill.

    100 scaled by the average of hunger, happiness, energy and health,
    each weighted 25%.
    """
    total = dog.hunger + dog.happiness + dog.energy + dog.health
    return max(0, min(MAX_TRAINING_POINTS, math.floor(total / 4)))


def should_regenerate_tp(dog: Dog, now: datetime) -> bool:
    return hours_between(dog.last_training_reset, now) >= TP_REGEN_INTERVAL_HOURS


def regenerate_tp(dog: Dog, now: datetime) -> Delta:
    """Refill the pool and reset the daily gem-refill counter, if a day has passed."""
    if not should_regenerate_tp(dog, now):
        return {}

    capacity = training_points_capacity(dog)
    logger.debug(f"{dog.name} TP refilled to {capacity}")
    return {
        "training_points": capacity,
        "last_training_reset": now,
        "tp_refills_today": 0,
    }


def can_afford_training(dog: Dog, tp_cost: int) -> bool:
    return dog.training_points >= tp_cost
