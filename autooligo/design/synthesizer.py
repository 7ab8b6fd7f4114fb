"""
Repair template synthesizer.

Turns Cas9 sites into complete point-mutation designs: homology arm with the
desired codon change, a silent PAM/seed edit against re-cutting, translation
check over a wide window, cloning oligos and an efficiency score.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from autooligo.config import CloningConfig, DesignConfig
from autooligo.models.enums import AAChangeStatus, RepairStrategy
from autooligo.models.data_classes import (
    SITE_LENGTH,
    AlignmentData,
    Cas9Site,
    DesignResults,
    GeneInfo,
    RepairResult,
)
from autooligo.cloning.oligo_generator import OligoGenerator
from autooligo.design.codons import (
    STANDARD_AMINO_ACIDS,
    InvalidAminoAcidError,
    alignment_match_string,
    codon_to_amino_acid,
    reverse_complement,
    synonymous_codons,
    translate,
)
from autooligo.design.disruption import disrupt_site
from autooligo.design.efficiency.rule_based import calculate_efficiency_score
from autooligo.design.site_finder import (
    Cas9SiteFinder,
    NoSiteFoundError,
    target_nucleotide,
)


logger = logging.getLogger(__name__)


class NoViableTemplateError(Exception):
    """Raised when sites exist but none yields a verified repair template."""


# =============================================================================
# Building blocks
# =============================================================================

def homology_bounds(
    sequence_length: int,
    cut_position: int,
    target_position: int,
    flank: int,
    site_position: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Half-open arm covering cut site and target codon plus ``flank`` each side.

    With ``site_position`` the arm is widened, if needed, to every in-frame
    codon touched by the 23-nt match, so PAM and seed edits stay reachable
    when a short oligo length shrinks the flank.
    """
    start = min(cut_position, target_position) - flank
    end = max(cut_position, target_position) + flank
    if site_position is not None:
        site_end = site_position + SITE_LENGTH
        start = min(start, site_position - site_position % 3)
        end = max(end, site_end + -site_end % 3)
    return max(0, start), min(sequence_length, end)


def flank_for_oligo_length(
    oligo_length: int,
    cut_position: int,
    target_position: int,
    min_flank: int,
) -> int:
    """Flank that makes the arm roughly ``oligo_length`` long."""
    span = abs(cut_position - target_position)
    return max(min_flank, math.ceil((oligo_length - span) / 2))


def apply_substitution(arm: str, codon_start: int, amino_acid: str) -> str:
    """
    Replace the codon at ``codon_start`` with one encoding ``amino_acid``.

    The first codon in table order that differs from the current one is used;
    if every option equals the current codon, the first is kept.

    Raises:
        InvalidAminoAcidError: ``amino_acid`` has no codons
    """
    options = synonymous_codons(amino_acid)
    current = arm[codon_start:codon_start + 3].upper()
    new_codon = next((codon for codon in options if codon != current), options[0])
    return arm[:codon_start] + new_codon + arm[codon_start + 3:]


def recolor(original: str, edited: str) -> str:
    """Lowercase bases that differ from ``original``, uppercase the rest."""
    return "".join(
        new.lower() if new.upper() != old.upper() else new.upper()
        for old, new in zip(original, edited)
    )


def verify_protein_change(
    sequence: str,
    arm_start: int,
    edited_arm: str,
    target_position: int,
    flank: int,
) -> Tuple[str, str, int]:
    """
    Translate a window around the target with and without the edited arm.

    Returns:
        Tuple of (original protein, edited protein, number of differing residues)
    """
    start = max(0, target_position - flank)
    end = min(len(sequence), target_position + 3 + flank)
    original_dna = sequence[start:end]

    offset = arm_start - start
    lo = max(0, offset)
    hi = min(len(original_dna), offset + len(edited_arm))
    edited_dna = (
        original_dna[:lo] + edited_arm[lo - offset:hi - offset] + original_dna[hi:]
    )

    frame = -start % 3
    original_protein = translate(original_dna[frame:])
    edited_protein = translate(edited_dna[frame:])
    differences = sum(
        1 for a, b in zip(original_protein, edited_protein) if a != b
    )
    return original_protein, edited_protein, differences


# =============================================================================
# Synthesizer
# =============================================================================

class RepairTemplateSynthesizer:
    """
    Design repair templates for a point mutation, one Cas9 site at a time.

    Per site:
    1. Cut the homology arm around cut site and target codon
    2. Write the desired codon into the arm
    3. Protect the edited locus (target edit, silent PAM, silent seed)
    4. Verify exactly one residue changes over the verification window
    5. Score the guide and build cloning oligos

    A site failing any step is skipped. Results keep site order and are
    capped at ``design.max_results``.
    """

    def __init__(
        self,
        design: Optional[DesignConfig] = None,
        cloning: Optional[CloningConfig] = None,
    ):
        if design is None or cloning is None:
            from autooligo.config import get_config
            config = get_config()
            design = design or config.design
            cloning = cloning or config.cloning
        self.design = design
        self.oligo_generator = OligoGenerator(cloning)

    def generate(
        self,
        sequence: str,
        sites: Sequence[Cas9Site],
        residue: int,
        amino_acid: str,
        oligo_length: Optional[int] = None,
    ) -> List[RepairResult]:
        """
        Build verified designs for the given sites.

        Args:
            sequence: Gene coding sequence
            sites: Candidate sites, nearest first
            residue: 1-based residue to mutate
            amino_acid: Desired amino acid
            oligo_length: Optional repair oligo length (resizes the arm)

        Returns:
            Up to ``max_results`` designs in site order (possibly empty)
        """
        self._check_oligo_length(oligo_length)
        limit = self.design.max_results

        def evaluate(site: Cas9Site) -> Optional[RepairResult]:
            return self.design_for_site(sequence, site, residue, amino_acid, oligo_length)

        results: List[RepairResult] = []
        if self.design.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.design.max_workers) as executor:
                # map() yields in submission order
                results = [r for r in executor.map(evaluate, sites) if r is not None]
        else:
            for site in sites:
                result = evaluate(site)
                if result is not None:
                    results.append(result)
                    if len(results) >= limit:
                        break

        logger.info(
            "Accepted %d of %d sites for residue %d -> %s",
            min(len(results), limit), len(sites), residue, amino_acid,
        )
        return results[:limit]

    def design_for_site(
        self,
        sequence: str,
        site: Cas9Site,
        residue: int,
        amino_acid: str,
        oligo_length: Optional[int] = None,
    ) -> Optional[RepairResult]:
        """
        Full design for one site, or None if the site must be skipped.

        Raises:
            ValueError: ``oligo_length`` outside the configured range
        """
        self._check_oligo_length(oligo_length)
        target = target_nucleotide(residue)
        if oligo_length is None:
            flank = self.design.homology_flank
        else:
            flank = flank_for_oligo_length(
                oligo_length, site.cut_position, target, self.design.min_homology_flank
            )

        arm_start, arm_end = homology_bounds(
            len(sequence), site.cut_position, target, flank, site_position=site.position
        )
        original_arm = sequence[arm_start:arm_end]

        codon_start = target - arm_start
        if codon_start < 0 or codon_start + 3 > len(original_arm):
            logger.debug("Target codon at %d falls outside the arm; skipping site %d",
                         target, site.position)
            return None

        try:
            mutated_arm = apply_substitution(original_arm, codon_start, amino_acid)
        except InvalidAminoAcidError as e:
            logger.debug("Skipping site %d: %s", site.position, e)
            return None

        attempt = disrupt_site(
            original_arm,
            mutated_arm,
            site,
            arm_start,
            seed_threshold=self.design.seed_edit_threshold,
        )
        if attempt is None:
            return None

        repair_template = recolor(original_arm, attempt.sequence)

        original_protein, edited_protein, aa_changes = verify_protein_change(
            sequence,
            arm_start,
            repair_template,
            target,
            self.design.verification_flank,
        )
        if aa_changes != 1:
            logger.debug(
                "Site %d rejected: %d residue changes in verification window",
                site.position, aa_changes,
            )
            return None

        oligos = self.oligo_generator.generate_oligos(site.spacer)
        original_upper = original_arm.upper()
        template_upper = repair_template.upper()

        return RepairResult(
            site=site,
            cloning_oligo_a=oligos.oligo_a,
            cloning_oligo_b=oligos.oligo_b,
            repair_template=repair_template,
            repair_template_rev_comp=reverse_complement(repair_template),
            original_region=original_arm,
            homology_start=arm_start,
            mutation_position=target,
            aa_change_status=AAChangeStatus.SUCCESS,
            aa_changes_count=aa_changes,
            dna_alignment=AlignmentData(
                original=original_upper,
                modified=template_upper,
                match_string=alignment_match_string(original_upper, template_upper),
            ),
            aa_alignment=AlignmentData(
                original=original_protein,
                modified=edited_protein,
                match_string=alignment_match_string(original_protein, edited_protein),
            ),
            strategy=attempt.strategy,
            silent_mutation_count=attempt.mutation_count,
            score=calculate_efficiency_score(site.guide_with_pam),
        )

    def _check_oligo_length(self, oligo_length: Optional[int]) -> None:
        if oligo_length is None:
            return
        lo, hi = self.design.min_oligo_length, self.design.max_oligo_length
        if not lo <= oligo_length <= hi:
            raise ValueError(f"Oligo length must be {lo}-{hi} nt, got {oligo_length}")


# =============================================================================
# Convenience functions
# =============================================================================

def generate_repair_templates(
    sequence: str,
    sites: Sequence[Cas9Site],
    residue: int,
    amino_acid: str,
    oligo_length: Optional[int] = None,
) -> List[RepairResult]:
    """Convenience function to build designs for a list of sites."""
    return RepairTemplateSynthesizer().generate(
        sequence, sites, residue, amino_acid, oligo_length
    )


def rank_results(results: Sequence[RepairResult]) -> List[RepairResult]:
    """
    Order designs for presentation.

    Score category first (high > medium > low), then strategy (PAM-based
    before seed), then raw score. Equal designs keep their site order.
    """
    return sorted(
        results,
        key=lambda r: (r.score_category.rank, r.strategy.priority, r.score),
        reverse=True,
    )


def design_point_mutation(
    gene: GeneInfo,
    residue: int,
    amino_acid: str,
    oligo_length: Optional[int] = None,
    design: Optional[DesignConfig] = None,
    cloning: Optional[CloningConfig] = None,
) -> DesignResults:
    """
    Design a point mutation end to end.

    Args:
        gene: Resolved gene with its coding sequence
        residue: 1-based residue to mutate
        amino_acid: One of the 20 standard amino acid letters
        oligo_length: Optional repair oligo length, 60-100 nt
        design: Design settings (defaults to global config)
        cloning: Vector adapter settings (defaults to global config)

    Returns:
        DesignResults with designs in proximity order

    Raises:
        ValueError: Residue outside the coding sequence or bad oligo length
        InvalidAminoAcidError: Not a standard amino acid letter
        NoSiteFoundError: No Cas9 site near the residue
        NoViableTemplateError: Sites exist but none could be used
    """
    sequence = gene.sequence.upper()
    if residue < 1 or residue * 3 > len(sequence):
        raise ValueError(
            f"Residue {residue} is outside {gene.symbol} ({len(sequence) // 3} codons)"
        )

    amino_acid = amino_acid.strip().upper()
    if amino_acid not in STANDARD_AMINO_ACIDS:
        raise InvalidAminoAcidError(f"Unknown amino acid {amino_acid!r}")

    synthesizer = RepairTemplateSynthesizer(design, cloning)
    target = target_nucleotide(residue)

    sites = Cas9SiteFinder(synthesizer.design.window_size).find_sites(sequence, residue)
    if not sites:
        raise NoSiteFoundError(
            f"No Cas9 sites found within {synthesizer.design.window_size} nt of "
            f"{gene.symbol} residue {residue}"
        )

    results = synthesizer.generate(sequence, sites, residue, amino_acid, oligo_length)
    if not results:
        raise NoViableTemplateError(
            f"None of {len(sites)} Cas9 sites near {gene.symbol} residue {residue} "
            f"allowed a verified PAM or seed disruption"
        )

    return DesignResults(
        gene=gene,
        residue=residue,
        original_amino_acid=codon_to_amino_acid(sequence[target:target + 3]),
        new_amino_acid=amino_acid,
        oligo_length=oligo_length,
        n_sites_found=len(sites),
        results=results,
        parameters={
            "window_size": synthesizer.design.window_size,
            "homology_flank": synthesizer.design.homology_flank,
            "max_results": synthesizer.design.max_results,
        },
    )
