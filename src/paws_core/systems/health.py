"""
Health decay from neglect.

A dog loses a fixed share of health for every whole day since it was last
fed. Health is never stored as it decays; it is derived from the stored
value and the feeding timestamp, so repeated reads with the same ``now``
always agree. Feeding (care.feed) or a vet visit settles it.

Statuses, worst first:
    dead       health 0         -> revive (gems, heavy stat loss)
    emergency  health <= 5      -> emergency vet (stat loss)
    critical   health <= 10     -> vet
    declining  health < 100     -> watch, feed daily
    healthy    health 100       -> nothing
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from ..state.results import HealthStatus
from ..state.schema import CareAction, Delta, Dog, HealthLevel
from ..state.stats import penalise_all_trained
from ..tools.clock import hours_between
from .kennel import apply_vet_cost_reduction

logger = logging.getLogger(__name__)


HOURS_PER_DAY = 24
HEALTH_DECAY_PER_DAY = 10
CRITICAL_HEALTH = 10
EMERGENCY_HEALTH = 5

VET_COST = 500
EMERGENCY_VET_COST = 2000
REVIVAL_GEM_COST = 100

EMERGENCY_STAT_LOSS = 5
REVIVAL_STAT_LOSS = EMERGENCY_STAT_LOSS * 2
REVIVAL_HEALTH = 50

# Days of neglect before a full-health dog reaches the emergency stage,
# and how long past that it can still be brought back.
DAYS_TO_EMERGENCY = 10
REVIVAL_WINDOW_DAYS = 7


LEVEL_ACTIONS: dict[HealthLevel, CareAction] = {
    HealthLevel.HEALTHY: CareAction.NONE,
    HealthLevel.DECLINING: CareAction.WATCH,
    HealthLevel.CRITICAL: CareAction.VET,
    HealthLevel.EMERGENCY: CareAction.EMERGENCY_VET,
    HealthLevel.DEAD: CareAction.REVIVE,
}


def days_since_care(dog: Dog, now: datetime) -> int:
    """Whole days since last fed. Partial days and clock skew count as 0."""
    hours = hours_between(dog.last_fed, now)
    if hours <= 0:
        return 0
    return math.floor(hours / HOURS_PER_DAY)


def current_health(dog: Dog, now: datetime) -> int:
    """Stored health minus accrued decay, floored at 0."""
    days = days_since_care(dog, now)
    if days == 0:
        return dog.health
    return max(0, dog.health - days * HEALTH_DECAY_PER_DAY)


def with_current_health(dog: Dog, now: datetime) -> Dog:
    """
    Read-only view of the dog with decayed health in place of the stored value.

    For rules that weigh health (energy regen, TP capacity, illness risk).
    Never merge the view back: health_status() on it would decay twice.
    """
    return dog.model_copy(update={"health": current_health(dog, now)})


def classify_health(health: int) -> HealthLevel:
    if health <= 0:
        return HealthLevel.DEAD
    if health <= EMERGENCY_HEALTH:
        return HealthLevel.EMERGENCY
    if health <= CRITICAL_HEALTH:
        return HealthLevel.CRITICAL
    if health < 100:
        return HealthLevel.DECLINING
    return HealthLevel.HEALTHY


def health_status(dog: Dog, now: datetime) -> HealthStatus:
    """Classify the dog's decayed health and say what the owner must do."""
    health = current_health(dog, now)
    days = days_since_care(dog, now)
    level = classify_health(health)

    can_revive = False
    if level == HealthLevel.DEAD:
        days_dead = max(0, days - DAYS_TO_EMERGENCY)
        can_revive = days_dead <= REVIVAL_WINDOW_DAYS
        warning = "Your dog has died from neglect. Use gems to revive or adopt a new dog."
    elif level == HealthLevel.EMERGENCY:
        warning = (
            f"EMERGENCY! Your dog needs immediate emergency vet care "
            f"({EMERGENCY_VET_COST} cash). Stats will be reduced."
        )
    elif level == HealthLevel.CRITICAL:
        warning = f"CRITICAL! Your dog needs vet care ({VET_COST} cash) immediately!"
    elif level == HealthLevel.DECLINING:
        warning = "Your dog's health is declining. Feed and water them daily!"
    else:
        warning = ""

    return HealthStatus(
        level=level,
        action=LEVEL_ACTIONS[level],
        health=health,
        days_without_care=days,
        can_revive=can_revive,
        warning=warning,
    )


def should_update_health(dog: Dog, now: datetime) -> bool:
    """True once at least one whole day of decay has accrued."""
    return days_since_care(dog, now) > 0


# -----------------------------------------------------------------------------
# Recovery actions (deltas)
# -----------------------------------------------------------------------------

def reset_care_clock(dog: Dog, now: datetime) -> Delta:
    """
    Restart the care timer at ``now``.

    Thirst reads ``last_fed`` while ``last_watered`` is unset, so a dog that
    was never watered gets its thirst clock pinned to the old ``last_fed``.
    """
    delta: Delta = {"last_fed": now}
    if dog.last_watered is None:
        delta["last_watered"] = dog.last_fed
    return delta


def visit_vet(dog: Dog, now: datetime) -> Delta:
    """Full restore; resets the care timer."""
    return {"health": 100, **reset_care_clock(dog, now)}


def visit_emergency_vet(dog: Dog, now: datetime) -> Delta:
    """Full restore, but every trained attribute drops by a flat penalty."""
    delta: Delta = {"health": 100, **reset_care_clock(dog, now)}
    delta.update(penalise_all_trained(dog, EMERGENCY_STAT_LOSS))
    logger.debug(f"Emergency vet for {dog.name}: -{EMERGENCY_STAT_LOSS} trained stats")
    return delta


def revive(dog: Dog, now: datetime) -> Delta:
    """Bring a dead dog back at partial health with a heavier stat penalty."""
    delta: Delta = {"health": REVIVAL_HEALTH, **reset_care_clock(dog, now)}
    delta.update(penalise_all_trained(dog, REVIVAL_STAT_LOSS))
    logger.debug(f"Revived {dog.name}: -{REVIVAL_STAT_LOSS} trained stats")
    return delta


def vet_cost(action: CareAction, kennel_level: int = 1) -> int:
    """
    Cash cost of a vet action after the kennel discount.

    Revival is paid in gems (REVIVAL_GEM_COST) and is not discounted, so it
    costs 0 cash here, as do actions that need no vet.
    """
    if action == CareAction.VET:
        return apply_vet_cost_reduction(VET_COST, kennel_level)
    if action == CareAction.EMERGENCY_VET:
        return apply_vet_cost_reduction(EMERGENCY_VET_COST, kennel_level)
    return 0
