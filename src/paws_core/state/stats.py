"""
Single stat accessor.

Training, competition scoring and ailment penalties all address attributes by
StatName. This table is the one place that knows which Dog fields back each
name: obedience has no breed value, intelligence and trainability can't be
trained.
"""

from __future__ import annotations

from typing import NamedTuple

from .schema import Delta, Dog, StatName


class StatFields(NamedTuple):
    base: str | None
    trained: str | None


STAT_FIELDS: dict[StatName, StatFields] = {
    StatName.SPEED: StatFields("speed", "speed_trained"),
    StatName.AGILITY: StatFields("agility", "agility_trained"),
    StatName.STRENGTH: StatFields("strength", "strength_trained"),
    StatName.ENDURANCE: StatFields("endurance", "endurance_trained"),
    StatName.OBEDIENCE: StatFields(None, "obedience_trained"),
    StatName.INTELLIGENCE: StatFields("intelligence", None),
    StatName.TRAINABILITY: StatFields("trainability", None),
}

TRAINABLE_STATS: list[StatName] = [s for s, f in STAT_FIELDS.items() if f.trained]


def base_value(dog: Dog, stat: StatName) -> float:
    field = STAT_FIELDS[stat].base
    return getattr(dog, field) if field else 0


def trained_value(dog: Dog, stat: StatName) -> float:
    field = STAT_FIELDS[stat].trained
    return getattr(dog, field) if field else 0


def total_value(dog: Dog, stat: StatName) -> float:
    """Base plus trained, with the missing half counted as zero."""
    return base_value(dog, stat) + trained_value(dog, stat)


def trained_field(stat: StatName) -> str | None:
    """Dog field holding the trained value, or None for breed-only stats."""
    return STAT_FIELDS[stat].trained


def adjust_trained(dog: Dog, changes: dict[StatName, float]) -> Delta:
    """
    Delta that adds each change to a trained attribute, floored at 0.

    Breed-only stats are skipped; they have nothing to adjust.
    """
    delta: Delta = {}
    for stat, change in changes.items():
        field = trained_field(stat)
        if field is None:
            continue
        delta[field] = max(0, getattr(dog, field) + change)
    return delta


def penalise_all_trained(dog: Dog, penalty: float) -> Delta:
    """Reduce every trained attribute by the same flat amount."""
    return adjust_trained(dog, {stat: -penalty for stat in TRAINABLE_STATS})
