"""
Owner-dog bond.

Bond XP accrues from time spent together (self-training, play). Every
BOND_XP_PER_LEVEL XP is a level, up to MAX_BOND_LEVEL. A strong bond lifts
competition scores for every dog, and rescue dogs train noticeably better
once they trust their owner.
"""

from __future__ import annotations

from ..state.schema import Delta, Dog

BOND_XP_PER_LEVEL = 100
MAX_BOND_LEVEL = 10
TRAINING_BOND_XP = 3

MAX_COMPETITION_BONUS = 0.1

# Rescue training bonus by bond level. Levels 0-2 get nothing; the dog is
# still settling in.
RESCUE_TRAINING_BONUS: dict[int, float] = {
    3: 0.04,
    4: 0.08,
    5: 0.12,
    6: 0.15,
    7: 0.18,
    8: 0.21,
    9: 0.23,
    10: 0.25,
}


def evaluate_bond(level: int, xp: int) -> tuple[int, int]:
    """
    Roll XP over into levels.

    Excess XP carries into the next level. At max level XP is held just
    under the threshold so it never reads as a pending level-up.
    """
    level = max(0, min(MAX_BOND_LEVEL, level))
    xp = max(0, xp)
    while xp >= BOND_XP_PER_LEVEL and level < MAX_BOND_LEVEL:
        level += 1
        xp -= BOND_XP_PER_LEVEL
    if level >= MAX_BOND_LEVEL:
        xp = min(xp, BOND_XP_PER_LEVEL - 1)
    return level, xp


def add_bond_xp(dog: Dog, amount: int) -> Delta:
    level, xp = evaluate_bond(dog.bond_level, dog.bond_xp + amount)
    delta: Delta = {"bond_xp": xp}
    if level != dog.bond_level:
        delta["bond_level"] = level
    return delta


def rescue_training_bonus(dog: Dog) -> float:
    """Fractional training bonus for rescue dogs (0.0-0.25)."""
    if not dog.is_rescue:
        return 0.0
    return RESCUE_TRAINING_BONUS.get(dog.bond_level, 0.0)


def rescue_bonus_description(dog: Dog) -> str | None:
    bonus = rescue_training_bonus(dog)
    if bonus == 0:
        return None

    percentage = round(bonus * 100)
    if dog.bond_level <= 5:
        mood = "Growing trust!"
    elif dog.bond_level <= 8:
        mood = "Strong bond!"
    else:
        mood = "Unbreakable!"
    return f"Rescue Bond: +{percentage}% training ({mood})"


def bond_competition_bonus(bond_level: int) -> float:
    """Up to +10% competition score at max bond, linear in level."""
    return bond_level / MAX_BOND_LEVEL * MAX_COMPETITION_BONUS
