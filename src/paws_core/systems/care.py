"""
Hunger, thirst and day-to-day care checks.

Hunger and thirst drain from 100 to 0 over four days since the dog was last
fed / watered. Like health, they are derived from timestamps: recomputing
with the same ``now`` gives the same values, and a merged delta is a fixed
point. Low hunger or thirst caps happiness and energy.
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..state.results import Eligibility
from ..state.schema import ActivityKind, Delta, Dog
from ..tools.clock import hours_between
from ..tools.numbers import clamp, round_half_up
from .health import current_health, reset_care_clock

logger = logging.getLogger(__name__)


FULL_DRAIN_HOURS = 96
DECAY_RATE_PER_HOUR = 100 / FULL_DRAIN_HOURS

SEVERE_THRESHOLD = 20
MODERATE_THRESHOLD = 50

SEVERE_HAPPINESS_PENALTY = 30
MODERATE_HAPPINESS_PENALTY = 15
SEVERE_ENERGY_PENALTY = 40
MODERATE_ENERGY_PENALTY = 20

# Minimum energy to start an activity
ENERGY_THRESHOLDS: dict[ActivityKind, int] = {
    ActivityKind.TRAINING: 30,
    ActivityKind.COMPETITION: 40,
}

ACTIVITY_VERBS: dict[ActivityKind, str] = {
    ActivityKind.TRAINING: "train",
    ActivityKind.COMPETITION: "compete",
}

# Weights for the 0-100 care quality score
CARE_QUALITY_WEIGHTS: dict[str, float] = {
    "hunger": 0.25,
    "thirst": 0.25,
    "energy": 0.2,
    "health": 0.2,
    "happiness": 0.1,
}


def level_since(timestamp: datetime, now: datetime) -> float:
    """A 0-100 stat that started full at ``timestamp`` and drains linearly."""
    hours = max(0.0, hours_between(timestamp, now))
    return clamp(100 - hours * DECAY_RATE_PER_HOUR)


def current_hunger(dog: Dog, now: datetime) -> float:
    return level_since(dog.last_fed, now)


def current_thirst(dog: Dog, now: datetime) -> float:
    return level_since(dog.last_watered or dog.last_fed, now)


def _banded_penalty(hunger: float, thirst: float, severe: int, moderate: int) -> int:
    penalty = 0
    for value in (hunger, thirst):
        if value <= SEVERE_THRESHOLD:
            penalty += severe
        elif value <= MODERATE_THRESHOLD:
            penalty += moderate
    return penalty


def happiness_penalty(hunger: float, thirst: float) -> int:
    return _banded_penalty(hunger, thirst, SEVERE_HAPPINESS_PENALTY, MODERATE_HAPPINESS_PENALTY)


def energy_penalty(hunger: float, thirst: float) -> int:
    return _banded_penalty(hunger, thirst, SEVERE_ENERGY_PENALTY, MODERATE_ENERGY_PENALTY)


def apply_hunger_thirst_decay(dog: Dog, now: datetime) -> Delta:
    """
    Bring hunger and thirst up to date and apply their penalties.

    Penalties cap happiness at ``100 - penalty`` and energy likewise; they
    never raise a value. Only fields that actually change are returned.
    """
    hunger = current_hunger(dog, now)
    thirst = current_thirst(dog, now)

    candidate = {
        "hunger": hunger,
        "thirst": thirst,
        "happiness": min(dog.happiness, clamp(100 - happiness_penalty(hunger, thirst))),
        "energy": min(dog.energy, int(clamp(100 - energy_penalty(hunger, thirst)))),
    }
    return {k: v for k, v in candidate.items() if getattr(dog, k) != v}


def hunger_thirst_status(hunger: float, thirst: float) -> tuple[str, str | None]:
    """
    Overall feeding status: ("good" | "warning" | "critical", message).

    The message names whichever need is worse.
    """
    if hunger <= SEVERE_THRESHOLD or thirst <= SEVERE_THRESHOLD:
        if hunger <= thirst:
            return "critical", "CRITICAL: Your dog is starving!"
        return "critical", "CRITICAL: Your dog is severely dehydrated!"

    if hunger <= MODERATE_THRESHOLD or thirst <= MODERATE_THRESHOLD:
        if hunger <= thirst:
            return "warning", "Your dog is getting hungry"
        return "warning", "Your dog needs water"

    return "good", None


def feed(dog: Dog, now: datetime) -> Delta:
    """
    Fill the dog up and restart the hunger and health clocks.

    Health decay accrued so far is written into ``health`` first, otherwise
    resetting ``last_fed`` would erase it. A dead dog can't be fed back to
    life; that takes a revival. A dog never watered has its thirst clock
    pinned to the old ``last_fed`` so eating doesn't quench it.
    """
    health = current_health(dog, now)
    if health <= 0:
        return {}
    return {"hunger": 100, "health": health, **reset_care_clock(dog, now)}


def water(dog: Dog, now: datetime) -> Delta:
    if current_health(dog, now) <= 0:
        return {}
    return {"thirst": 100, "last_watered": now}


def care_quality(dog: Dog) -> int:
    """Weighted 0-100 score of overall condition."""
    total = sum(getattr(dog, stat) * weight for stat, weight in CARE_QUALITY_WEIGHTS.items())
    return round_half_up(total)


def has_enough_energy(dog: Dog, activity: ActivityKind) -> Eligibility:
    threshold = ENERGY_THRESHOLDS[activity]
    if dog.energy < threshold:
        return Eligibility.blocked(
            f"{dog.name} is too tired to {ACTIVITY_VERBS[activity]} "
            f"(needs {threshold}% energy, has {dog.energy}%). Feed or rest your dog first!"
        )
    return Eligibility.ok()


def urgent_care_needs(dog: Dog) -> list[str]:
    needs = []
    if dog.hunger < 20:
        needs.append("Starving! Feed immediately!")
    if dog.thirst < 20:
        needs.append("Dehydrated! Water immediately!")
    if dog.energy < 15:
        needs.append("Exhausted! Let them rest!")
    if dog.health < 30:
        needs.append("Sick! Use medicine!")
    if dog.happiness < 20:
        needs.append("Miserable! Play with them!")
    return needs


def needs_care(dog: Dog) -> dict[str, bool]:
    """Softer thresholds than urgent_care_needs, for reminders."""
    return {
        "food": dog.hunger < 60,
        "water": dog.thirst < 60,
        "rest": dog.energy < 40,
        "play": dog.happiness < 50,
    }
