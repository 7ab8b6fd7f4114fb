"""
Pydantic data classes for AutoOligo.

All core data structures passed between the design engine, the CLI and the API.
"""

from __future__ import annotations

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, computed_field
from datetime import datetime, timezone

from autooligo.models.enums import (
    Strand,
    RepairStrategy,
    AAChangeStatus,
    ScoreCategory,
)


# Cut site sits 3 bp upstream of the PAM, i.e. 17 nt into a 23-nt match.
CUT_OFFSET = 17
SPACER_LENGTH = 20
SITE_LENGTH = 23


# =============================================================================
# Gene Data Structures
# =============================================================================

class GeneInfo(BaseModel):
    """A resolved gene, as handed over by a gene-resolution collaborator."""
    id: str
    symbol: str
    sequence: str  # Uppercase coding sequence, starts at the ATG
    description: Optional[str] = None
    transcript_id: Optional[str] = None
    entrez_id: Optional[str] = None

    @computed_field
    @property
    def protein_length(self) -> int:
        return len(self.sequence) // 3


# =============================================================================
# Cas9 Sites
# =============================================================================

class Cas9Site(BaseModel):
    """A PAM-containing 23-nt match in the gene sequence."""
    model_config = ConfigDict(frozen=True)

    position: int  # Offset of the match start in the gene
    sequence: str  # Raw 23-nt match text on the forward strand
    strand: Strand

    @computed_field
    @property
    def cut_position(self) -> int:
        return self.position + CUT_OFFSET

    @computed_field
    @property
    def guide_with_pam(self) -> str:
        """Spacer + PAM read 5'->3' on the strand the guide binds."""
        if self.strand == Strand.REVERSE:
            from autooligo.design.codons import reverse_complement
            return reverse_complement(self.sequence)
        return self.sequence

    @property
    def spacer(self) -> str:
        return self.guide_with_pam[:SPACER_LENGTH].upper()

    @property
    def pam(self) -> str:
        return self.guide_with_pam[SPACER_LENGTH:SITE_LENGTH].upper()


# =============================================================================
# Design Output
# =============================================================================

class AlignmentData(BaseModel):
    """Original/modified sequences with a '|' match track."""
    model_config = ConfigDict(frozen=True)

    original: str
    modified: str
    match_string: str


class CloningOligoPair(BaseModel):
    """Top/bottom oligos for cloning a spacer into the guide vector."""
    model_config = ConfigDict(frozen=True)

    spacer_sequence: str
    oligo_a: str
    oligo_b: str
    vector_name: str = "pML104"


class RepairResult(BaseModel):
    """One accepted repair-template design."""
    model_config = ConfigDict(frozen=True)

    site: Cas9Site
    cloning_oligo_a: str
    cloning_oligo_b: str
    repair_template: str  # Changed bases lowercase
    repair_template_rev_comp: str
    original_region: str
    homology_start: int
    mutation_position: int
    aa_change_status: AAChangeStatus = AAChangeStatus.SUCCESS
    aa_changes_count: int
    dna_alignment: AlignmentData
    aa_alignment: AlignmentData
    strategy: RepairStrategy
    silent_mutation_count: int
    score: int = Field(ge=0, le=100)

    @computed_field
    @property
    def score_category(self) -> ScoreCategory:
        return ScoreCategory.from_score(self.score)

    @property
    def homology_end(self) -> int:
        return self.homology_start + len(self.original_region)

    @property
    def changed_offsets(self) -> List[int]:
        """Offsets within the arm that carry an edit."""
        return [i for i, base in enumerate(self.repair_template) if base.islower()]


class DesignResults(BaseModel):
    """Complete results from one point-mutation design request."""
    gene: GeneInfo
    residue: int
    original_amino_acid: Optional[str] = None
    new_amino_acid: str
    oligo_length: Optional[int] = None
    n_sites_found: int = 0
    results: List[RepairResult] = Field(default_factory=list)

    # Metadata
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    autooligo_version: str = "0.1.0"
    parameters: Dict[str, Any] = Field(default_factory=dict)

    @computed_field
    @property
    def mutation_label(self) -> str:
        """HGVS-like protein change, e.g. L10P."""
        return f"{self.original_amino_acid or '?'}{self.residue}{self.new_amino_acid}"
