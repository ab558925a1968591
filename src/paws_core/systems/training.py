"""
Training gain calculator.

A session spends training points and adds a small permanent gain to one
trained attribute. The gain scales with the trainer (owner skill, or a paid
NPC's multiplier), the dog's trainability and the kennel's training
bonus. Self-training also scales with how well the owner did in the
mini-game and, for rescues, with the bond.

The TP cost and the gain always travel in the same delta.
"""

from __future__ import annotations

import logging

from ..state.results import TrainingResult
from ..state.schema import Delta, Dog, Owner, StatName, TrainerType, TrainingType
from ..state.stats import trained_field
from ..tools.numbers import round_to
from ..tools.rng import Rng, uniform
from .bond import TRAINING_BOND_XP, add_bond_xp, rescue_training_bonus
from .kennel import apply_training_bonus
from .training_points import can_afford_training

logger = logging.getLogger(__name__)


BASE_GAIN_MIN = 0.1
BASE_GAIN_MAX = 0.3

# Obedience comes along more slowly than physical stats
STAT_DIFFICULTY: dict[StatName, float] = {
    StatName.OBEDIENCE: 0.9,
}


TRAINING_TYPES: dict[str, TrainingType] = {t.id: t for t in [
    TrainingType(id="speed", name="Sprint Training",
                 description="Run sprints to improve speed",
                 stat=StatName.SPEED, tp_cost=10),
    TrainingType(id="agility", name="Obstacle Course",
                 description="Navigate obstacles to improve agility",
                 stat=StatName.AGILITY, tp_cost=15),
    TrainingType(id="strength", name="Weight Pull",
                 description="Pull weights to build strength",
                 stat=StatName.STRENGTH, tp_cost=20),
    TrainingType(id="endurance", name="Distance Run",
                 description="Long-distance running for endurance",
                 stat=StatName.ENDURANCE, tp_cost=15),
    TrainingType(id="obedience", name="Command Drills",
                 description="Practice commands and obedience",
                 stat=StatName.OBEDIENCE, tp_cost=10),
]}


def get_training_type(training_id: str) -> TrainingType | None:
    return TRAINING_TYPES.get(training_id)


def user_training_multiplier(training_skill: int) -> float:
    """0.8x for a novice owner, 2.0x at skill 100."""
    return 0.8 + (training_skill / 100) * 1.2


def calculate_training_gain(
    dog: Dog,
    stat: StatName,
    multiplier: float,
    operator_skill: int,
    kennel_level: int,
    rng: Rng,
) -> float:
    """
    Stat gain for one session, before any mini-game scaling.

    gain = U[0.1, 0.3) x multiplier x (1 + skill/100) x (1 + trainability/100),
    with the kennel bonus applied on top and the result kept to 2 decimals.
    """
    base = uniform(rng, BASE_GAIN_MIN, BASE_GAIN_MAX)
    total = (
        base
        * multiplier
        * (1 + operator_skill / 100)
        * (1 + dog.trainability / 100)
        * STAT_DIFFICULTY.get(stat, 1.0)
    )
    with_kennel = apply_training_bonus(total * 100, kennel_level) / 100
    return max(0.0, round_to(with_kennel, 2))


def self_training_gain(
    dog: Dog,
    stat: StatName,
    operator_skill: int,
    kennel_level: int,
    performance_multiplier: float,
    rng: Rng,
) -> float:
    """Owner-led session: the mini-game result and rescue bond scale the gain."""
    gain = calculate_training_gain(
        dog, stat, user_training_multiplier(operator_skill), operator_skill, kennel_level, rng,
    )
    gain *= max(0.0, performance_multiplier)
    gain *= 1 + rescue_training_bonus(dog)
    return round_to(gain, 2)


def performance_remark(performance_multiplier: float) -> str:
    if performance_multiplier >= 1.5:
        return "Perfect performance! "
    if performance_multiplier >= 1.2:
        return "Great performance! "
    if performance_multiplier >= 1.0:
        return "Good job! "
    return ""


def _npc_terms(training_type: TrainingType, trainer: TrainerType) -> tuple[int, float]:
    if trainer == TrainerType.PRO_NPC:
        return training_type.npc_pro_cost, training_type.npc_pro_multiplier
    return training_type.npc_basic_cost, training_type.npc_basic_multiplier


def train(
    dog: Dog,
    training_type: TrainingType,
    trainer: TrainerType,
    owner: Owner,
    rng: Rng,
    performance_multiplier: float | None = None,
) -> TrainingResult:
    """
    Run one training session.

    Checks TP and (for NPC trainers) cash, then returns the dog delta with
    the TP deduction and the stat gain together. Self-training adds bond XP;
    NPC training charges the owner.
    """
    stat = training_type.stat
    field = trained_field(stat)
    if field is None:
        return TrainingResult(success=False, message=f"{stat.value} can't be trained.")

    if not can_afford_training(dog, training_type.tp_cost):
        return TrainingResult(
            success=False,
            message=f"Not enough Training Points! Need {training_type.tp_cost} TP.",
        )

    owner_delta: Delta = {}
    if trainer == TrainerType.SELF:
        performance = 1.0 if performance_multiplier is None else performance_multiplier
        gain = self_training_gain(
            dog, stat, owner.training_skill, owner.kennel_level, performance, rng,
        )
        remark = performance_remark(performance)
    else:
        cost, multiplier = _npc_terms(training_type, trainer)
        if owner.cash < cost:
            return TrainingResult(success=False, message=f"Not enough cash! Need ${cost}.")
        gain = calculate_training_gain(
            dog, stat, multiplier, owner.training_skill, owner.kennel_level, rng,
        )
        owner_delta["cash"] = owner.cash - cost
        remark = ""

    dog_delta: Delta = {
        "training_points": dog.training_points - training_type.tp_cost,
        field: getattr(dog, field) + gain,
    }
    if trainer == TrainerType.SELF:
        dog_delta.update(add_bond_xp(dog, TRAINING_BOND_XP))

    logger.debug(f"{dog.name} trained {stat.value} (+{gain}) with {trainer.value}")
    return TrainingResult(
        success=True,
        message=f"{remark}{dog.name} gained +{gain:.1f} {stat.value}!",
        gain=gain,
        dog_delta=dog_delta,
        owner_delta=owner_delta,
    )
