"""
Passive energy regeneration.

Energy comes back by the hour. The hourly rate depends on how well the dog
is looked after, whether it is already exhausted, whether it is sick or
recovering, and the kennel's flat bonus.

Elapsed time is measured from the latest activity timestamp, and a regen
writes ``last_played = now``, so calling regenerate_energy() again with the
same ``now`` returns an empty delta.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from ..state.results import EnergyRegenInfo
from ..state.schema import Delta, Dog
from ..tools.clock import hours_between
from ..tools.numbers import round_half_up
from .kennel import energy_regen_bonus

logger = logging.getLogger(__name__)


MAX_ENERGY = 100
BASE_REGEN_PER_HOUR = 5
LOW_ENERGY_THRESHOLD = 30       # Below this, tired dogs rest more deeply
LOW_ENERGY_BONUS = 3
REGEN_CHECK_INTERVAL_HOURS = 1
AILMENT_REGEN_PENALTY = 0.5

WELL_CARED_QUALITY = 0.8
POOR_CARE_QUALITY = 0.4
WELL_CARED_MULTIPLIER = 1.5
POOR_CARE_MULTIPLIER = 0.5

# Reported when the rate is zero and the dog will never fill up
NEVER_FULL_HOURS = 999


def last_activity(dog: Dog) -> datetime:
    """Most recent timestamp that counts as the dog doing something."""
    return max(dog.last_played, dog.last_training_reset, dog.last_fed, dog.created_at)


def hours_since_activity(dog: Dog, now: datetime) -> float:
    return max(0.0, hours_between(last_activity(dog), now))


def should_regenerate_energy(dog: Dog, now: datetime) -> bool:
    """Energy below max and at least one check interval since the last activity."""
    if dog.energy >= MAX_ENERGY:
        return False
    return hours_since_activity(dog, now) >= REGEN_CHECK_INTERVAL_HOURS


def care_quality_ratio(dog: Dog) -> float:
    """Average of hunger, happiness and health as fractions (0.0-1.0)."""
    return (dog.hunger + dog.happiness + dog.health) / 300


def care_quality_multiplier(dog: Dog) -> float:
    """
    Scale the base rate by care quality.

    >= 0.8 gets x1.5, < 0.4 gets x0.5, anything between interpolates as
    0.5 + quality (0.9x to 1.3x).
    """
    quality = care_quality_ratio(dog)
    if quality >= WELL_CARED_QUALITY:
        return WELL_CARED_MULTIPLIER
    if quality < POOR_CARE_QUALITY:
        return POOR_CARE_MULTIPLIER
    return 0.5 + quality


def energy_regen_rate(dog: Dog, kennel_level: int = 1) -> int:
    """Whole energy points regained per hour."""
    rate = BASE_REGEN_PER_HOUR * care_quality_multiplier(dog)

    if dog.energy < LOW_ENERGY_THRESHOLD:
        rate += LOW_ENERGY_BONUS

    if dog.has_ailment:
        rate *= AILMENT_REGEN_PENALTY

    rate += energy_regen_bonus(kennel_level)
    return round_half_up(rate)


def regenerate_energy(dog: Dog, now: datetime, kennel_level: int = 1) -> Delta:
    """
    Energy regained since the last activity.

    Returns ``{}`` when regen isn't due or nothing would change.
    """
    if not should_regenerate_energy(dog, now):
        return {}

    hours = hours_since_activity(dog, now)
    rate = energy_regen_rate(dog, kennel_level)
    gained = math.floor(hours * rate)
    energy = min(MAX_ENERGY, dog.energy + gained)

    if energy == dog.energy:
        return {}

    logger.debug(f"{dog.name} regained {energy - dog.energy} energy over {hours:.1f}h at {rate}/h")
    return {"energy": energy, "last_played": now}


def energy_regen_info(dog: Dog, kennel_level: int = 1) -> EnergyRegenInfo:
    """Display summary of how fast the dog is recovering."""
    rate = energy_regen_rate(dog, kennel_level)
    needed = MAX_ENERGY - dog.energy
    hours_to_full = math.ceil(needed / rate) if rate > 0 else NEVER_FULL_HOURS

    return EnergyRegenInfo(
        is_regenerating=dog.energy < MAX_ENERGY,
        rate_per_hour=rate,
        hours_to_full=hours_to_full,
        care_bonus=care_quality_ratio(dog) >= WELL_CARED_QUALITY,
        low_energy_bonus=dog.energy < LOW_ENERGY_THRESHOLD,
        ailment_penalty=dog.has_ailment,
        kennel_bonus=energy_regen_bonus(kennel_level),
    )
