"""
Pydantic models for paws-core simulation state.

Snapshots are plain data. Systems read them and return partial-update
records (deltas: field name -> new value) that callers merge with
apply_delta(). Nothing here mutates a snapshot in place.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, TypeVar, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..tools.clock import ensure_utc


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class StatName(str, Enum):
    """Attributes that training, competitions and ailments refer to by name."""
    SPEED = "speed"
    AGILITY = "agility"
    STRENGTH = "strength"
    ENDURANCE = "endurance"
    OBEDIENCE = "obedience"          # Trained only, no breed value
    INTELLIGENCE = "intelligence"    # Breed only, not trainable
    TRAINABILITY = "trainability"    # Breed only, not trainable


class AilmentKind(str, Enum):
    ILLNESS = "illness"
    INJURY = "injury"


class Severity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class TrainingIntensity(str, Enum):
    LIGHT = "light"
    MODERATE = "moderate"
    INTENSE = "intense"


class TierId(str, Enum):
    """Competition brackets, easiest first."""
    LOCAL = "local"
    REGIONAL = "regional"
    NATIONAL = "national"
    CHAMPIONSHIP = "championship"


class TrainerType(str, Enum):
    SELF = "self"                      # Owner trains, mini-game supplies performance
    BASIC_NPC = "basic_npc"
    PRO_NPC = "professional_npc"


class HealthLevel(str, Enum):
    HEALTHY = "healthy"
    DECLINING = "declining"
    CRITICAL = "critical"
    EMERGENCY = "emergency"
    DEAD = "dead"


class CareAction(str, Enum):
    """What the owner has to do about a health level."""
    NONE = "none"
    WATCH = "watch"
    VET = "vet"
    EMERGENCY_VET = "emergency_vet"
    REVIVE = "revive"


class ActivityKind(str, Enum):
    TRAINING = "training"
    COMPETITION = "competition"


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def generate_id() -> str:
    """Generate a short unique ID."""
    return str(uuid4())[:8]


def utc_now() -> datetime:
    """Default factory for timestamps on freshly created snapshots."""
    return datetime.now(timezone.utc)


# -----------------------------------------------------------------------------
# Ailment state (tagged union)
# -----------------------------------------------------------------------------

class Healthy(BaseModel):
    """No ailment, no recovery in progress."""
    model_config = ConfigDict(frozen=True)

    status: Literal["healthy"] = "healthy"


class Afflicted(BaseModel):
    """Ailment contracted and untreated. Blocks training and competition."""
    model_config = ConfigDict(frozen=True)

    status: Literal["afflicted"] = "afflicted"
    ailment_id: str
    onset: datetime

    @field_validator("onset")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class Recovering(BaseModel):
    """Treated, resting until ``due``. Still blocks training and competition."""
    model_config = ConfigDict(frozen=True)

    status: Literal["recovering"] = "recovering"
    ailment_id: str
    due: datetime

    @field_validator("due")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


# A dog is in exactly one of these states, never two at once.
AilmentState = Annotated[
    Union[Healthy, Afflicted, Recovering],
    Field(discriminator="status"),
]


# -----------------------------------------------------------------------------
# Snapshots
# -----------------------------------------------------------------------------

class Dog(BaseModel):
    """
    A dog snapshot: the only entity the simulation reads and writes.

    Care stats and training points are percentages in [0, 100]. Trained
    attributes accumulate fractional gains and never go negative.
    """
    id: str = Field(default_factory=generate_id)
    name: str

    # Care stats (0-100)
    hunger: float = Field(default=100, ge=0, le=100)     # 100 = full
    thirst: float = Field(default=100, ge=0, le=100)     # 100 = hydrated
    happiness: float = Field(default=100, ge=0, le=100)
    energy: int = Field(default=100, ge=0, le=100)
    health: int = Field(default=100, ge=0, le=100)

    # Breed attributes, read-only to the simulation
    speed: float = Field(default=5, ge=0)
    agility: float = Field(default=5, ge=0)
    strength: float = Field(default=5, ge=0)
    endurance: float = Field(default=5, ge=0)
    intelligence: float = Field(default=5, ge=0)
    trainability: float = Field(default=5, ge=0)

    # Trained attributes
    speed_trained: float = Field(default=0, ge=0)
    agility_trained: float = Field(default=0, ge=0)
    strength_trained: float = Field(default=0, ge=0)
    endurance_trained: float = Field(default=0, ge=0)
    obedience_trained: float = Field(default=0, ge=0)

    # Bond
    bond_level: int = Field(default=0, ge=0, le=10)
    bond_xp: int = Field(default=0, ge=0)

    # Training point pool
    training_points: int = Field(default=100, ge=0, le=100)
    last_training_reset: datetime = Field(default_factory=utc_now)
    tp_refills_today: int = Field(default=0, ge=0)

    # Temporal markers (only ever used to measure elapsed time)
    created_at: datetime = Field(default_factory=utc_now)
    last_fed: datetime = Field(default_factory=utc_now)
    last_played: datetime = Field(default_factory=utc_now)
    last_watered: datetime | None = None   # Falls back to last_fed
    last_illness_check: datetime = Field(default_factory=utc_now)

    ailment: AilmentState = Field(default_factory=Healthy)
    is_rescue: bool = False

    @field_validator(
        "last_training_reset", "created_at", "last_fed", "last_played", "last_watered", "last_illness_check",
    )
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    @property
    def is_afflicted(self) -> bool:
        return isinstance(self.ailment, Afflicted)

    @property
    def is_recovering(self) -> bool:
        return isinstance(self.ailment, Recovering)

    @property
    def has_ailment(self) -> bool:
        """Afflicted or still recovering."""
        return not isinstance(self.ailment, Healthy)


class Owner(BaseModel):
    """The player-side values the simulation consumes."""
    id: str = Field(default_factory=generate_id)
    name: str = "Player"
    cash: int = Field(default=500, ge=0)
    gems: int = Field(default=50, ge=0)
    training_skill: int = Field(default=1, ge=1, le=100)
    competition_strategy: int = Field(default=1, ge=0, le=100)
    kennel_level: int = Field(default=1, ge=1, le=10)
    competition_wins: dict[TierId, int] = Field(default_factory=dict)

    def wins(self, tier: TierId) -> int:
        """First-place finishes recorded for a tier."""
        return self.competition_wins.get(tier, 0)


# -----------------------------------------------------------------------------
# Static catalogs (caller-controlled configuration)
# -----------------------------------------------------------------------------

class KennelLevel(BaseModel):
    """One row of the kennel facility table."""
    level: int
    name: str
    description: str = ""
    upgrade_cost: int                     # Cost to reach this level
    capacity: int                         # Dogs housed
    storage_max: int                      # Food storage units
    energy_regen_bonus: float = 0         # Flat energy per hour
    training_effectiveness_bonus: float = 0   # % added to stat gains
    recovery_reduction: float = 0         # % off ailment recovery time
    job_income_multiplier: float = 1.0
    prize_bonus: float = 0                # % added to competition prizes
    vet_cost_reduction: float = 0         # % off vet bills
    features: list[str] = Field(default_factory=list)


class Ailment(BaseModel):
    """A catalog illness or injury."""
    id: str
    name: str
    kind: AilmentKind
    severity: Severity
    description: str = ""
    symptoms: list[str] = Field(default_factory=list)
    treatment_cost: int = Field(ge=0)
    recovery_hours: int = Field(ge=0)
    health_impact: int = Field(le=0)      # Negative health delta on contraction
    stat_impact: dict[StatName, int] = Field(default_factory=dict)  # Negative trained deltas


class CompetitionType(BaseModel):
    """A competition discipline and how it weighs stats."""
    id: str
    name: str
    description: str = ""
    primary_stat: StatName
    # Scaling factors; they need not sum to 1
    stat_weights: dict[StatName, float]


class Prizes(BaseModel):
    first: int
    second: int
    third: int
    participation: int


class CompetitionTier(BaseModel):
    """A competition bracket: fee, eligibility bar, prizes and opponent strength."""
    id: TierId
    name: str
    entry_fee: int = Field(ge=0)
    min_requirement: float = Field(ge=0)  # Aggregate relevant-stat total
    prizes: Prizes
    opponent_min: float
    opponent_max: float
    unlock_tier: TierId | None = None     # Tier whose wins unlock this one
    unlock_wins: int = 0


class TrainingType(BaseModel):
    """A training exercise and what it costs."""
    id: str
    name: str
    description: str = ""
    stat: StatName
    tp_cost: int = Field(gt=0)
    npc_basic_cost: int = 50
    npc_basic_multiplier: float = 1.2
    npc_pro_cost: int = 200
    npc_pro_multiplier: float = 1.5


# -----------------------------------------------------------------------------
# Delta merge
# -----------------------------------------------------------------------------

Delta = dict[str, Any]

M = TypeVar("M", bound=BaseModel)


def apply_delta(snapshot: M, delta: Delta) -> M:
    """
    Merge a partial update into a snapshot and re-validate it.

    Returns a new instance; the input is left untouched. Unknown field
    names are rejected so a typo can't silently drop an update.
    """
    if not delta:
        return snapshot

    model = type(snapshot)
    unknown = set(delta) - set(model.model_fields)
    if unknown:
        raise ValueError(f"Unknown {model.__name__} fields in delta: {sorted(unknown)}")

    data = snapshot.model_dump()
    for key, value in delta.items():
        data[key] = value.model_dump() if isinstance(value, BaseModel) else value
    return model.model_validate(data)


def merge_deltas(*deltas: Delta) -> Delta:
    """Combine deltas left to right; later values win."""
    merged: Delta = {}
    for delta in deltas:
        merged.update(delta)
    return merged
