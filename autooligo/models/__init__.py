"""Models package."""

from autooligo.models.enums import (
    Strand,
    RepairStrategy,
    AAChangeStatus,
    ScoreCategory,
)
from autooligo.models.data_classes import (
    GeneInfo,
    Cas9Site,
    AlignmentData,
    CloningOligoPair,
    RepairResult,
    DesignResults,
)

__all__ = [
    # Enums
    "Strand",
    "RepairStrategy",
    "AAChangeStatus",
    "ScoreCategory",
    # Data classes
    "GeneInfo",
    "Cas9Site",
    "AlignmentData",
    "CloningOligoPair",
    "RepairResult",
    "DesignResults",
]
