"""Design engine package."""

from autooligo.design.codons import (
    CODON_TABLE,
    InvalidAminoAcidError,
    codon_to_amino_acid,
    synonymous_codons,
    reverse_complement,
    translate,
    alignment_match_string,
    codon_spaced_format,
)
from autooligo.design.site_finder import (
    Cas9SiteFinder,
    NoSiteFoundError,
    find_cas9_sites,
)
from autooligo.design.disruption import (
    DisruptionAttempt,
    disrupt_site,
    find_pam_silent,
    find_seed_silent,
)
from autooligo.design.synthesizer import (
    RepairTemplateSynthesizer,
    NoViableTemplateError,
    generate_repair_templates,
    design_point_mutation,
    rank_results,
)

__all__ = [
    "CODON_TABLE",
    "InvalidAminoAcidError",
    "codon_to_amino_acid",
    "synonymous_codons",
    "reverse_complement",
    "translate",
    "alignment_match_string",
    "codon_spaced_format",
    "Cas9SiteFinder",
    "NoSiteFoundError",
    "find_cas9_sites",
    "DisruptionAttempt",
    "disrupt_site",
    "find_pam_silent",
    "find_seed_silent",
    "RepairTemplateSynthesizer",
    "NoViableTemplateError",
    "generate_repair_templates",
    "design_point_mutation",
    "rank_results",
]
