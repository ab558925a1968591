"""State models and persistence for paws-core."""

from .schema import (
    Dog,
    Owner,
    Healthy,
    Afflicted,
    Recovering,
    AilmentState,
    Ailment,
    AilmentKind,
    Severity,
    KennelLevel,
    CompetitionType,
    CompetitionTier,
    Prizes,
    TrainingType,
    StatName,
    TierId,
    TrainerType,
    TrainingIntensity,
    HealthLevel,
    CareAction,
    ActivityKind,
    Delta,
    apply_delta,
    merge_deltas,
)
from .results import (
    Eligibility,
    HealthStatus,
    EnergyRegenInfo,
    Competitor,
    Placement,
    CompetitionResult,
    TrainingResult,
    TreatmentResult,
    ActivityOutcome,
)
from .store import (
    Kennel,
    KennelStore,
    JsonKennelStore,
    MemoryKennelStore,
    update_dog,
    update_owner,
    read_kennel_file,
    write_kennel_file,
)
from .catalog import CatalogError, load_ailment_catalog

__all__ = [
    # Schema
    "Dog",
    "Owner",
    "Healthy",
    "Afflicted",
    "Recovering",
    "AilmentState",
    "Ailment",
    "AilmentKind",
    "Severity",
    "KennelLevel",
    "CompetitionType",
    "CompetitionTier",
    "Prizes",
    "TrainingType",
    "StatName",
    "TierId",
    "TrainerType",
    "TrainingIntensity",
    "HealthLevel",
    "CareAction",
    "ActivityKind",
    "Delta",
    "apply_delta",
    "merge_deltas",
    # Results
    "Eligibility",
    "HealthStatus",
    "EnergyRegenInfo",
    "Competitor",
    "Placement",
    "CompetitionResult",
    "TrainingResult",
    "TreatmentResult",
    "ActivityOutcome",
    # Store
    "Kennel",
    "KennelStore",
    "JsonKennelStore",
    "MemoryKennelStore",
    "update_dog",
    "update_owner",
    "read_kennel_file",
    "write_kennel_file",
    # Catalog
    "CatalogError",
    "load_ailment_catalog",
]
