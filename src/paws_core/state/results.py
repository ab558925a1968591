"""
Read-only result records returned by the systems.

Usage errors come back as data (allowed=False / success=False with a reason)
so a caller can show the message directly.
"""

from pydantic import BaseModel, Field

from .schema import CareAction, Delta, Dog, HealthLevel, Owner


class Eligibility(BaseModel):
    """Outcome of a pure can-I-do-this predicate."""
    allowed: bool
    reason: str | None = None
    cost: int = 0

    @classmethod
    def ok(cls, cost: int = 0) -> "Eligibility":
        return cls(allowed=True, cost=cost)

    @classmethod
    def blocked(cls, reason: str, cost: int = 0) -> "Eligibility":
        return cls(allowed=False, reason=reason, cost=cost)


class HealthStatus(BaseModel):
    level: HealthLevel
    action: CareAction
    health: int
    days_without_care: int
    can_revive: bool = False
    warning: str = ""


class EnergyRegenInfo(BaseModel):
    is_regenerating: bool
    rate_per_hour: int
    hours_to_full: int
    care_bonus: bool
    low_energy_bonus: bool
    ailment_penalty: bool
    kennel_bonus: float


class Competitor(BaseModel):
    name: str
    score: int
    is_player: bool = False


class Placement(BaseModel):
    name: str
    score: int
    placement: int = Field(ge=1)
    is_player: bool = False


class CompetitionResult(BaseModel):
    success: bool
    message: str
    score: int = 0
    placements: list[Placement] = Field(default_factory=list)
    placement: int | None = None
    prize: int = 0
    owner_delta: Delta = Field(default_factory=dict)


class TrainingResult(BaseModel):
    success: bool
    message: str
    gain: float = 0
    dog_delta: Delta = Field(default_factory=dict)
    owner_delta: Delta = Field(default_factory=dict)


class TreatmentResult(BaseModel):
    success: bool
    message: str
    cost: int = 0
    delta: Delta = Field(default_factory=dict)


class ActivityOutcome(BaseModel):
    """What the orchestrator hands back after sequencing an activity."""
    success: bool
    message: str
    dog: Dog
    owner: Owner
    notices: list[str] = Field(default_factory=list)
