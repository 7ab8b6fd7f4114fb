"""
Core enumerations for AutoOligo.
"""

from enum import Enum


class Strand(str, Enum):
    """Strand a Cas9 site was matched on."""
    FORWARD = "forward"  # N20-NGG on the coding strand
    REVERSE = "reverse"  # CCN-N20, guide targets the template strand


class RepairStrategy(str, Enum):
    """How re-cutting of the edited locus is prevented."""
    PAM_DISRUPTED_BY_TARGET = "PAM_DISRUPTED_BY_TARGET"  # Desired edit hits the PAM
    PAM_SILENT = "PAM_SILENT"                            # Synonymous PAM edit
    SEED_SILENT = "SEED_SILENT"                          # >=2 synonymous seed edits

    @property
    def priority(self) -> int:
        """Ranking priority, PAM-based strategies first."""
        if self is RepairStrategy.SEED_SILENT:
            return 1
        return 2


class AAChangeStatus(str, Enum):
    """Outcome of translation-based verification."""
    SUCCESS = "success"


class ScoreCategory(str, Enum):
    """Coarse efficiency buckets used for ranking and display."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_score(cls, score: int) -> "ScoreCategory":
        if score >= 70:
            return cls.HIGH
        if score >= 50:
            return cls.MEDIUM
        return cls.LOW

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]
