"""
Simulation systems for paws-core.

Each module is a set of pure functions over Dog/Owner snapshots that return
deltas or read-only results. ActivityOrchestrator sequences them.
"""

from .activities import ActivityOrchestrator
from .ailments import (
    AILMENTS,
    illness_risk,
    training_injury_risk,
    competition_injury_risk,
    select_ailment,
    apply_ailment,
    treat_ailment,
    complete_recovery,
    can_perform_activity,
)
from .competition import (
    COMPETITION_TYPES,
    COMPETITION_TIERS,
    score,
    generate_opponents,
    determine_winner,
    run_competition,
)
from .energy import regenerate_energy, energy_regen_rate
from .health import current_health, health_status, visit_vet, visit_emergency_vet, revive
from .kennel import KENNEL_LEVELS, level_info, can_upgrade
from .training import TRAINING_TYPES, calculate_training_gain, train
from .training_points import regenerate_tp, training_points_capacity

__all__ = [
    "ActivityOrchestrator",
    # Ailments
    "AILMENTS",
    "illness_risk",
    "training_injury_risk",
    "competition_injury_risk",
    "select_ailment",
    "apply_ailment",
    "treat_ailment",
    "complete_recovery",
    "can_perform_activity",
    # Competition
    "COMPETITION_TYPES",
    "COMPETITION_TIERS",
    "score",
    "generate_opponents",
    "determine_winner",
    "run_competition",
    # Resources
    "regenerate_energy",
    "energy_regen_rate",
    "current_health",
    "health_status",
    "visit_vet",
    "visit_emergency_vet",
    "revive",
    "regenerate_tp",
    "training_points_capacity",
    # Kennel
    "KENNEL_LEVELS",
    "level_info",
    "can_upgrade",
    # Training
    "TRAINING_TYPES",
    "calculate_training_gain",
    "train",
]
