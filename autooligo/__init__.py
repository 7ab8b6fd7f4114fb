"""
AutoOligo - CRISPR Point Mutation Designer for Yeast

Finds Cas9 sites near a residue, designs repair templates with silent
PAM/seed edits, and emits cloning oligos for the guide vector.
"""

__version__ = "0.1.0"
__author__ = "AutoOligo Team"

from autooligo.models.enums import Strand, RepairStrategy
from autooligo.models.data_classes import (
    GeneInfo,
    Cas9Site,
    AlignmentData,
    RepairResult,
    DesignResults,
)
from autooligo.design import (
    find_cas9_sites,
    generate_repair_templates,
    design_point_mutation,
    NoSiteFoundError,
    NoViableTemplateError,
    InvalidAminoAcidError,
)

__all__ = [
    # Enums
    "Strand",
    "RepairStrategy",
    # Data classes
    "GeneInfo",
    "Cas9Site",
    "AlignmentData",
    "RepairResult",
    "DesignResults",
    # Design
    "find_cas9_sites",
    "generate_repair_templates",
    "design_point_mutation",
    "NoSiteFoundError",
    "NoViableTemplateError",
    "InvalidAminoAcidError",
]
