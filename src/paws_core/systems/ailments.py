"""
Illness and injury for paws-core.

Neglect raises the chance of illness; training and competition carry an
injury risk scaled by intensity or tier. When a roll succeeds an ailment is
drawn from the catalog (mild ones far more often than severe) and applied.

Each dog's ailment state is one of:

    Healthy ──(risk roll)──> Afflicted(id, onset)
    Afflicted ──(treat, pay vet)──> Recovering(id, due)
    Recovering ──(now >= due)──> Healthy

Afflicted and Recovering both block training and competition; callers
check can_perform_activity() first. Illness is rolled on a daily cadence
(should_check_for_illness()), so how often a caller ticks does not change
how often a dog falls ill.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Mapping

from ..state.results import Eligibility, TreatmentResult
from ..state.schema import (
    Afflicted,
    Ailment,
    AilmentKind,
    Delta,
    Dog,
    Healthy,
    Recovering,
    Severity,
    StatName,
    TierId,
    TrainingIntensity,
)
from ..state.stats import adjust_trained
from ..tools.clock import hours_between
from ..tools.numbers import clamp
from ..tools.rng import Rng, roll, weighted_choice
from .kennel import apply_recovery_bonus, apply_vet_cost_reduction

logger = logging.getLogger(__name__)


def _ailment(id, name, kind, severity, description, symptoms, cost, hours, health, stats=None):
    return Ailment(
        id=id, name=name, kind=kind, severity=severity, description=description,
        symptoms=symptoms, treatment_cost=cost, recovery_hours=hours,
        health_impact=health, stat_impact=stats or {},
    )


_I, _J = AilmentKind.ILLNESS, AilmentKind.INJURY
_MILD, _MOD, _SEV = Severity.MILD, Severity.MODERATE, Severity.SEVERE

AILMENTS: dict[str, Ailment] = {a.id: a for a in [
    # Illnesses
    _ailment("kennel_cough", "Kennel Cough", _I, _MILD,
             "Respiratory infection causing persistent coughing",
             ["Coughing", "Reduced energy", "Loss of appetite"],
             150, 48, -15, {StatName.ENDURANCE: -3}),
    _ailment("upset_stomach", "Upset Stomach", _I, _MILD,
             "Digestive issues from poor diet or stress",
             ["Vomiting", "Diarrhea", "Lethargy"],
             100, 24, -10),
    _ailment("ear_infection", "Ear Infection", _I, _MOD,
             "Bacterial infection in the ear canal",
             ["Head shaking", "Ear discharge", "Pain"],
             250, 72, -20, {StatName.OBEDIENCE: -5}),
    _ailment("skin_infection", "Skin Infection", _I, _MOD,
             "Bacterial or fungal skin infection",
             ["Itching", "Hair loss", "Red patches"],
             300, 96, -25),
    _ailment("parvovirus", "Parvovirus", _I, _SEV,
             "Serious viral infection affecting intestines",
             ["Severe vomiting", "Bloody diarrhea", "Lethargy"],
             1500, 168, -50, {StatName.ENDURANCE: -10, StatName.STRENGTH: -8}),
    # Injuries
    _ailment("sprained_paw", "Sprained Paw", _J, _MILD,
             "Twisted ankle or paw from overexertion",
             ["Limping", "Reluctance to walk", "Swelling"],
             200, 48, -15, {StatName.AGILITY: -5, StatName.SPEED: -5}),
    _ailment("pulled_muscle", "Pulled Muscle", _J, _MILD,
             "Strained muscle from intense activity",
             ["Stiffness", "Reduced mobility", "Pain"],
             175, 36, -12, {StatName.STRENGTH: -4, StatName.ENDURANCE: -3}),
    _ailment("torn_ligament", "Torn Ligament", _J, _MOD,
             "Partial tear in leg ligament",
             ["Severe limping", "Swelling", "Pain"],
             800, 120, -30, {StatName.AGILITY: -10, StatName.SPEED: -8, StatName.ENDURANCE: -5}),
    _ailment("fractured_bone", "Fractured Bone", _J, _SEV,
             "Bone fracture requiring immediate care",
             ["Cannot bear weight", "Intense pain", "Swelling"],
             2500, 240, -45,
             {StatName.AGILITY: -15, StatName.SPEED: -12, StatName.STRENGTH: -10, StatName.ENDURANCE: -8}),
    _ailment("heat_exhaustion", "Heat Exhaustion", _J, _MOD,
             "Overheating from intense activity",
             ["Excessive panting", "Weakness", "Drooling"],
             400, 24, -20, {StatName.ENDURANCE: -7}),
]}

# Stand-in for ids a caller's catalog no longer knows about
UNKNOWN_AILMENT = _ailment(
    "unknown", "Unknown Ailment", _I, _MILD,
    "An ailment missing from the current catalog", [],
    100, 24, -10,
)

SEVERITY_WEIGHTS: dict[Severity, int] = {
    Severity.MILD: 50,
    Severity.MODERATE: 30,
    Severity.SEVERE: 10,
}

# Illness
BASE_ILLNESS_RISK = 0.01
MAX_ILLNESS_RISK = 0.15
EXCELLENT_CARE_REDUCTION = 0.015
ILLNESS_CHECK_INTERVAL_HOURS = 24     # At most one illness roll per day

# Injury
INTENSITY_RISK: dict[TrainingIntensity, float] = {
    TrainingIntensity.LIGHT: 0.005,
    TrainingIntensity.MODERATE: 0.015,
    TrainingIntensity.INTENSE: 0.03,
}
MAX_TRAINING_INJURY_RISK = 0.15

TIER_RISK: dict[TierId, float] = {
    TierId.LOCAL: 0.01,
    TierId.REGIONAL: 0.025,
    TierId.NATIONAL: 0.04,
    TierId.CHAMPIONSHIP: 0.06,
}
MAX_COMPETITION_INJURY_RISK = 0.20

TREATMENT_HEALTH_BOOST = 30
RECOVERY_HEALTH_BOOST = 20


# -----------------------------------------------------------------------------
# Catalog lookups
# -----------------------------------------------------------------------------

def ailment_catalog() -> dict[str, Ailment]:
    """A copy of the built-in catalog, safe to modify."""
    return dict(AILMENTS)


def get_ailment(ailment_id: str, catalog: Mapping[str, Ailment] | None = None) -> Ailment | None:
    return (catalog if catalog is not None else AILMENTS).get(ailment_id)


def resolve_ailment(ailment_id: str, catalog: Mapping[str, Ailment] | None = None) -> Ailment:
    """Like get_ailment, but unknown ids fall back to UNKNOWN_AILMENT."""
    ailment = get_ailment(ailment_id, catalog)
    if ailment is None:
        logger.warning(f"Unknown ailment id {ailment_id!r}, using default")
        return UNKNOWN_AILMENT
    return ailment


# -----------------------------------------------------------------------------
# Risk
# -----------------------------------------------------------------------------

def _banded(value: float, low: float, low_add: float, mid: float, mid_add: float) -> float:
    if value < low:
        return low_add
    if value < mid:
        return mid_add
    return 0.0


def illness_risk(dog: Dog) -> float:
    """
    Chance of falling ill on one check.

    Neglect adds to a 1% base; excellent care takes a little off, but never
    below the base.
    """
    risk = 0.0
    risk += _banded(dog.hunger, 30, 0.05, 60, 0.02)
    risk += _banded(dog.thirst, 30, 0.05, 60, 0.02)
    risk += _banded(dog.happiness, 30, 0.03, 60, 0.01)
    risk += _banded(dog.health, 50, 0.04, 75, 0.02)

    if dog.hunger > 80 and dog.thirst > 80 and dog.happiness > 80:
        risk -= EXCELLENT_CARE_REDUCTION

    return clamp(BASE_ILLNESS_RISK + risk, BASE_ILLNESS_RISK, MAX_ILLNESS_RISK)


def training_injury_risk(dog: Dog, intensity: TrainingIntensity) -> float:
    risk = INTENSITY_RISK[intensity]
    risk += _banded(dog.health, 50, 0.05, 75, 0.02)
    risk += _banded(dog.energy, 30, 0.04, 60, 0.02)   # Tired means sloppy
    if dog.is_afflicted:
        risk += 0.03
    if dog.health > 90 and dog.energy > 70:
        risk -= 0.01
    return clamp(risk, 0.0, MAX_TRAINING_INJURY_RISK)


def competition_injury_risk(dog: Dog, tier: TierId) -> float:
    """Same shape as training risk with bigger numbers: higher stakes, harder pushes."""
    risk = TIER_RISK[tier]
    risk += _banded(dog.health, 50, 0.08, 75, 0.04)
    risk += _banded(dog.energy, 40, 0.05, 70, 0.02)
    if dog.is_afflicted:
        risk += 0.05
    if dog.health > 95 and dog.energy > 80:
        risk -= 0.015
    return clamp(risk, 0.0, MAX_COMPETITION_INJURY_RISK)


# -----------------------------------------------------------------------------
# Selection
# -----------------------------------------------------------------------------

def select_ailment(
    rng: Rng,
    kind: AilmentKind | None = None,
    severity: Severity | None = None,
    catalog: Mapping[str, Ailment] | None = None,
) -> Ailment | None:
    """
    Weighted draw from the catalog, filtered by kind and severity.

    Returns None when the filter leaves nothing to draw.
    """
    source = catalog if catalog is not None else AILMENTS
    candidates = [
        a for a in source.values()
        if (kind is None or a.kind == kind) and (severity is None or a.severity == severity)
    ]
    weights = [SEVERITY_WEIGHTS[a.severity] for a in candidates]
    chosen = weighted_choice(rng, candidates, weights)
    if chosen is not None:
        logger.debug(f"Selected ailment {chosen.id} from {len(candidates)} candidates")
    return chosen


def _check(dog: Dog, risk: float, kind: AilmentKind, rng: Rng, catalog) -> Ailment | None:
    # Only a healthy dog can pick up something new
    if not isinstance(dog.ailment, Healthy):
        return None
    if not roll(rng, risk):
        return None
    logger.debug(f"{dog.name} failed a {kind.value} roll at {risk:.3f}")
    return select_ailment(rng, kind=kind, catalog=catalog)


def should_check_for_illness(dog: Dog, now: datetime) -> bool:
    """A full check interval has passed since the last illness roll."""
    return hours_between(dog.last_illness_check, now) >= ILLNESS_CHECK_INTERVAL_HOURS


def check_for_illness(
    dog: Dog, rng: Rng, catalog: Mapping[str, Ailment] | None = None,
) -> Ailment | None:
    return _check(dog, illness_risk(dog), AilmentKind.ILLNESS, rng, catalog)


def check_for_training_injury(
    dog: Dog,
    intensity: TrainingIntensity,
    rng: Rng,
    catalog: Mapping[str, Ailment] | None = None,
) -> Ailment | None:
    return _check(dog, training_injury_risk(dog, intensity), AilmentKind.INJURY, rng, catalog)


def check_for_competition_injury(
    dog: Dog,
    tier: TierId,
    rng: Rng,
    catalog: Mapping[str, Ailment] | None = None,
) -> Ailment | None:
    return _check(dog, competition_injury_risk(dog, tier), AilmentKind.INJURY, rng, catalog)


# -----------------------------------------------------------------------------
# State machine
# -----------------------------------------------------------------------------

def apply_ailment(dog: Dog, ailment: Ailment, now: datetime) -> Delta:
    """
    Contract an ailment: health drops by its impact and trained stats take
    its penalties, all floored at 0. A dog that isn't healthy is unchanged.
    """
    if not isinstance(dog.ailment, Healthy):
        return {}

    delta: Delta = {
        "ailment": Afflicted(ailment_id=ailment.id, onset=now),
        "health": max(0, dog.health + ailment.health_impact),
    }
    delta.update(adjust_trained(dog, ailment.stat_impact))
    logger.info(f"{dog.name} contracted {ailment.name}")
    return delta


def treatment_cost(ailment: Ailment, kennel_level: int = 1) -> int:
    return apply_vet_cost_reduction(ailment.treatment_cost, kennel_level)


def recovery_hours(ailment: Ailment, kennel_level: int = 1) -> int:
    return apply_recovery_bonus(ailment.recovery_hours, kennel_level)


def treat_ailment(
    dog: Dog,
    now: datetime,
    kennel_level: int = 1,
    catalog: Mapping[str, Ailment] | None = None,
    funds: int | None = None,
) -> TreatmentResult:
    """
    Take an afflicted dog to the vet.

    Moves Afflicted -> Recovering and restores some health. The cost is
    reported, not charged; pass ``funds`` to have affordability checked.
    """
    if not isinstance(dog.ailment, Afflicted):
        return TreatmentResult(success=False, message=f"{dog.name} has nothing to treat.")

    ailment = resolve_ailment(dog.ailment.ailment_id, catalog)
    cost = treatment_cost(ailment, kennel_level)

    if funds is not None and funds < cost:
        return TreatmentResult(
            success=False,
            message=f"Not enough cash! Need ${cost}, have ${funds}",
            cost=cost,
        )

    hours = recovery_hours(ailment, kennel_level)
    delta: Delta = {
        "ailment": Recovering(ailment_id=ailment.id, due=now + timedelta(hours=hours)),
        "health": min(100, dog.health + TREATMENT_HEALTH_BOOST),
    }
    return TreatmentResult(
        success=True,
        message=f"{dog.name} was treated for {ailment.name}. Recovery takes {hours} hours.",
        cost=cost,
        delta=delta,
    )


def is_recovery_complete(dog: Dog, now: datetime) -> bool:
    return isinstance(dog.ailment, Recovering) and now >= dog.ailment.due


def complete_recovery(dog: Dog, now: datetime) -> Delta:
    """Recovering -> Healthy once the due time has passed."""
    if not is_recovery_complete(dog, now):
        return {}
    return {
        "ailment": Healthy(),
        "health": min(100, dog.health + RECOVERY_HEALTH_BOOST),
    }


def can_perform_activity(
    dog: Dog, catalog: Mapping[str, Ailment] | None = None,
) -> Eligibility:
    """Training and competition are off-limits while afflicted or recovering."""
    state = dog.ailment
    if isinstance(state, Afflicted):
        name = resolve_ailment(state.ailment_id, catalog).name
        return Eligibility.blocked(
            f"{dog.name} has {name} and cannot train or compete until treated."
        )
    if isinstance(state, Recovering):
        name = resolve_ailment(state.ailment_id, catalog).name
        return Eligibility.blocked(f"{dog.name} is recovering from {name}. Rest is required.")
    return Eligibility.ok()
