"""Gene data package."""

from autooligo.genome.reference import GeneSequenceSource, GeneNotFoundError
from autooligo.genome.orthologs import (
    MappedResidue,
    map_residue_to_ortholog,
    is_residue_similar,
)

__all__ = [
    "GeneSequenceSource",
    "GeneNotFoundError",
    "MappedResidue",
    "map_residue_to_ortholog",
    "is_residue_similar",
]
