"""
Kennel facility levels for paws-core.

Pure lookup: a kennel level (1-10) maps to capacity, storage and a set of
percentage bonuses that other systems fold into their results. Nothing here
touches an owner; upgrades are checked with can_upgrade() and paid by the
caller.
"""

from __future__ import annotations

from ..state.results import Eligibility
from ..state.schema import KennelLevel
from ..tools.numbers import round_half_up

MIN_KENNEL_LEVEL = 1
MAX_KENNEL_LEVEL = 10

_BASIC = ["Basic care"]
_AUTO = ["Auto-feed system"]
_ELITE = [
    "Auto-feed system", "Trophy room", "Elite training", "Medical wing",
    "Lineage tracking", "Bulk training",
]


KENNEL_LEVELS: dict[int, KennelLevel] = {
    1: KennelLevel(
        level=1, name="Starter Kennel",
        description="A humble beginning for your dog breeding journey",
        upgrade_cost=0, capacity=2, storage_max=100,
        features=_BASIC + ["Manual feeding"],
    ),
    2: KennelLevel(
        level=2, name="Backyard Kennel",
        description="Expanded space with basic improvements",
        upgrade_cost=500, capacity=4, storage_max=150,
        energy_regen_bonus=0.5, training_effectiveness_bonus=5, recovery_reduction=5,
        job_income_multiplier=1.05, prize_bonus=5, vet_cost_reduction=5,
        features=_BASIC + ["Improved kennels"],
    ),
    3: KennelLevel(
        level=3, name="Small Facility",
        description="Professional-grade kennels with better amenities",
        upgrade_cost=1000, capacity=6, storage_max=200,
        energy_regen_bonus=1, training_effectiveness_bonus=8, recovery_reduction=10,
        job_income_multiplier=1.10, prize_bonus=10, vet_cost_reduction=10,
        features=_BASIC + ["Training yard", "Improved storage"],
    ),
    4: KennelLevel(
        level=4, name="Growing Operation",
        description="Multiple kennels with dedicated training areas",
        upgrade_cost=2000, capacity=8, storage_max=250,
        energy_regen_bonus=1.5, training_effectiveness_bonus=12, recovery_reduction=15,
        job_income_multiplier=1.15, prize_bonus=15, vet_cost_reduction=12,
        features=_BASIC + ["Training yard", "Medical station"],
    ),
    5: KennelLevel(
        level=5, name="Professional Kennel",
        description="Top-tier facilities with automated systems",
        upgrade_cost=4000, capacity=12, storage_max=300,
        energy_regen_bonus=2, training_effectiveness_bonus=15, recovery_reduction=20,
        job_income_multiplier=1.20, prize_bonus=20, vet_cost_reduction=15,
        features=_AUTO + ["Training yard", "Medical station", "Climate control"],
    ),
    6: KennelLevel(
        level=6, name="Champion's Estate",
        description="Luxurious facility for breeding champions",
        upgrade_cost=8000, capacity=16, storage_max=350,
        energy_regen_bonus=2.5, training_effectiveness_bonus=18, recovery_reduction=22,
        job_income_multiplier=1.25, prize_bonus=25, vet_cost_reduction=18,
        features=_AUTO + ["Trophy room", "Advanced training", "Medical wing", "Breeding records"],
    ),
    7: KennelLevel(
        level=7, name="Elite Breeding Center",
        description="State-of-the-art breeding and training complex",
        upgrade_cost=15000, capacity=20, storage_max=400,
        energy_regen_bonus=3, training_effectiveness_bonus=22, recovery_reduction=25,
        job_income_multiplier=1.30, prize_bonus=28, vet_cost_reduction=20,
        features=list(_ELITE),
    ),
    8: KennelLevel(
        level=8, name="Grand Championship Facility",
        description="World-class facility with kennel assistants",
        upgrade_cost=25000, capacity=25, storage_max=450,
        energy_regen_bonus=3.5, training_effectiveness_bonus=25, recovery_reduction=28,
        job_income_multiplier=1.35, prize_bonus=30, vet_cost_reduction=22,
        features=_ELITE + ["Kennel assistant", "Advanced genetics"],
    ),
    9: KennelLevel(
        level=9, name="Legendary Complex",
        description="Premium facility rivaling the best in the world",
        upgrade_cost=40000, capacity=30, storage_max=500,
        energy_regen_bonus=4, training_effectiveness_bonus=28, recovery_reduction=30,
        job_income_multiplier=1.40, prize_bonus=32, vet_cost_reduction=25,
        features=_ELITE + ["Kennel assistant", "Advanced genetics", "Breeding services"],
    ),
    10: KennelLevel(
        level=10, name="Ultimate Dynasty",
        description="The pinnacle of dog breeding excellence",
        upgrade_cost=60000, capacity=40, storage_max=600,
        energy_regen_bonus=5, training_effectiveness_bonus=30, recovery_reduction=35,
        job_income_multiplier=1.50, prize_bonus=35, vet_cost_reduction=30,
        features=_ELITE + [
            "Kennel assistant", "Advanced genetics", "Breeding services", "Hall of Fame",
        ],
    ),
}


def clamp_level(level: int) -> int:
    return max(MIN_KENNEL_LEVEL, min(MAX_KENNEL_LEVEL, int(level)))


def level_info(level: int) -> KennelLevel:
    """Table row for a level. Out-of-range levels clamp to 1 or 10."""
    return KENNEL_LEVELS[clamp_level(level)]


def upgrade_cost(level: int) -> int:
    """Cost of moving from ``level`` to the next one (0 at max)."""
    current = clamp_level(level)
    if current >= MAX_KENNEL_LEVEL:
        return 0
    return KENNEL_LEVELS[current + 1].upgrade_cost


def can_upgrade(level: int, funds: int) -> Eligibility:
    """Whether the owner can afford the next kennel level."""
    if clamp_level(level) >= MAX_KENNEL_LEVEL:
        return Eligibility.blocked("Already at maximum kennel level!")

    cost = upgrade_cost(level)
    if funds < cost:
        return Eligibility.blocked(f"Not enough cash! Need ${cost}, have ${funds}", cost=cost)

    return Eligibility.ok(cost=cost)


# -----------------------------------------------------------------------------
# Bonus helpers: one multiply, one half-up round
# -----------------------------------------------------------------------------

def apply_training_bonus(base_gain: float, level: int) -> int:
    bonus = level_info(level).training_effectiveness_bonus / 100
    return round_half_up(base_gain * (1 + bonus))


def apply_job_income_bonus(base_income: float, level: int) -> int:
    return round_half_up(base_income * level_info(level).job_income_multiplier)


def apply_competition_bonus(base_prize: float, level: int) -> int:
    bonus = level_info(level).prize_bonus / 100
    return round_half_up(base_prize * (1 + bonus))


def apply_vet_cost_reduction(base_cost: float, level: int) -> int:
    reduction = level_info(level).vet_cost_reduction / 100
    return round_half_up(base_cost * (1 - reduction))


def apply_recovery_bonus(base_hours: float, level: int) -> int:
    reduction = level_info(level).recovery_reduction / 100
    return round_half_up(base_hours * (1 - reduction))


def energy_regen_bonus(level: int) -> float:
    """Flat energy per hour added on top of the regen rate."""
    return level_info(level).energy_regen_bonus


def storage_max(level: int) -> int:
    return level_info(level).storage_max


def capacity(level: int) -> int:
    return level_info(level).capacity


def is_feature_unlocked(feature: str, level: int) -> bool:
    return feature in level_info(level).features


def new_features_at_level(level: int) -> list[str]:
    """Features that appear at ``level`` but not at the level below."""
    if level <= MIN_KENNEL_LEVEL:
        return []
    current = level_info(level).features
    previous = level_info(level - 1).features
    return [f for f in current if f not in previous]
