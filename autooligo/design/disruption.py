"""
PAM and seed disruption search.

Finds synonymous codon changes that stop Cas9 from re-cutting a repaired
locus, either by breaking the PAM's critical G/G (C/C on reverse sites) or by
accumulating mismatches in the PAM-proximal seed.

All offsets here are local to the homology arm. Codons are taken from the
gene's reading frame, so ``arm_start`` (the arm's offset in the gene) is
needed to align them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Optional

from autooligo.models.enums import RepairStrategy, Strand
from autooligo.models.data_classes import Cas9Site
from autooligo.design.codons import CODON_TABLE, STOP, codon_to_amino_acid


logger = logging.getLogger(__name__)

SEED_EDIT_THRESHOLD = 2


@dataclass(frozen=True)
class SiteOffsets:
    """Offsets within a 23-nt match, relative to the match start."""
    critical: FrozenSet[int]
    seed: FrozenSet[int]


SITE_OFFSETS = {
    # N20-N-G-G: the two Gs of the PAM, seed is the 10 nt before it
    Strand.FORWARD: SiteOffsets(
        critical=frozenset({21, 22}),
        seed=frozenset(range(10, 20)),
    ),
    # C-C-N-N20: the two Cs, seed is the 10 nt after the PAM
    Strand.REVERSE: SiteOffsets(
        critical=frozenset({0, 1}),
        seed=frozenset(range(3, 13)),
    ),
}


@dataclass(frozen=True)
class DisruptionAttempt:
    """An accepted disruption: the edited arm and how it was obtained."""
    sequence: str
    strategy: RepairStrategy
    mutation_count: int


def critical_indices(site: Cas9Site, arm_start: int, arm_length: int) -> FrozenSet[int]:
    """Arm-local offsets of the PAM bases that must change."""
    return _localize(SITE_OFFSETS[site.strand].critical, site, arm_start, arm_length)


def seed_indices(site: Cas9Site, arm_start: int, arm_length: int) -> FrozenSet[int]:
    """Arm-local offsets of the seed region."""
    return _localize(SITE_OFFSETS[site.strand].seed, site, arm_start, arm_length)


def _localize(
    offsets: FrozenSet[int],
    site: Cas9Site,
    arm_start: int,
    arm_length: int,
) -> FrozenSet[int]:
    base = site.position - arm_start
    return frozenset(
        base + offset for offset in offsets if 0 <= base + offset < arm_length
    )


def overlapping_codons(indices: FrozenSet[int], arm_start: int, arm_length: int) -> List[int]:
    """Arm-local starts of in-frame codons covering any index, ascending."""
    starts = set()
    for idx in indices:
        gene_position = arm_start + idx
        starts.add(gene_position - gene_position % 3 - arm_start)
    return sorted(s for s in starts if s >= 0 and s + 3 <= arm_length)


def silent_alternatives(codon: str) -> Iterator[str]:
    """Synonyms of a sense codon other than itself, in table order."""
    codon = codon.upper()
    amino_acid = codon_to_amino_acid(codon)
    if amino_acid is None or amino_acid == STOP:
        return
    for synonym in CODON_TABLE[amino_acid]:
        if synonym == codon or codon_to_amino_acid(synonym) != amino_acid:
            continue
        yield synonym


def _changed(codon: str, synonym: str) -> List[int]:
    return [i for i in range(3) if codon[i] != synonym[i]]


def _replace_codon(sequence: str, start: int, codon: str) -> str:
    return sequence[:start] + codon + sequence[start + 3:]


def target_disrupts_pam(
    original_arm: str,
    mutated_arm: str,
    site: Cas9Site,
    arm_start: int,
) -> bool:
    """True when the desired edit already changed a critical PAM base."""
    return any(
        original_arm[idx].upper() != mutated_arm[idx].upper()
        for idx in critical_indices(site, arm_start, len(original_arm))
    )


def find_pam_silent(arm: str, site: Cas9Site, arm_start: int) -> Optional[DisruptionAttempt]:
    """
    Smallest single-codon synonymous change that alters a critical PAM base.

    Every codon overlapping a critical base is considered; on equal edit
    counts the first candidate found wins.
    """
    critical = critical_indices(site, arm_start, len(arm))
    best: Optional[DisruptionAttempt] = None

    for codon_start in overlapping_codons(critical, arm_start, len(arm)):
        codon = arm[codon_start:codon_start + 3].upper()
        for synonym in silent_alternatives(codon):
            changed = _changed(codon, synonym)
            if not any(codon_start + i in critical for i in changed):
                continue
            if best is None or len(changed) < best.mutation_count:
                best = DisruptionAttempt(
                    sequence=_replace_codon(arm, codon_start, synonym),
                    strategy=RepairStrategy.PAM_SILENT,
                    mutation_count=len(changed),
                )
    return best


def find_seed_silent(
    arm: str,
    site: Cas9Site,
    arm_start: int,
    threshold: int = SEED_EDIT_THRESHOLD,
) -> Optional[DisruptionAttempt]:
    """
    Accumulate synonymous seed mismatches, codon by codon, until ``threshold``
    bases have been changed.
    """
    seed = seed_indices(site, arm_start, len(arm))
    edited = arm
    total = 0

    for codon_start in overlapping_codons(seed, arm_start, len(arm)):
        codon = edited[codon_start:codon_start + 3].upper()
        best_synonym = None
        best_seed_changes = 0
        best_changes = 0

        for synonym in silent_alternatives(codon):
            changed = _changed(codon, synonym)
            seed_changes = sum(1 for i in changed if codon_start + i in seed)
            if seed_changes > best_seed_changes:
                best_synonym = synonym
                best_seed_changes = seed_changes
                best_changes = len(changed)

        if best_synonym is not None:
            edited = _replace_codon(edited, codon_start, best_synonym)
            total += best_changes

        if total >= threshold:
            return DisruptionAttempt(
                sequence=edited,
                strategy=RepairStrategy.SEED_SILENT,
                mutation_count=total,
            )
    return None


def disrupt_site(
    original_arm: str,
    mutated_arm: str,
    site: Cas9Site,
    arm_start: int,
    seed_threshold: int = SEED_EDIT_THRESHOLD,
) -> Optional[DisruptionAttempt]:
    """
    Apply the fixed precedence: target edit, silent PAM, silent seed.

    Args:
        original_arm: Homology arm before any edit
        mutated_arm: Same arm carrying the desired codon change
        site: Cas9 site the guide targets
        arm_start: Offset of the arm in the gene
        seed_threshold: Minimum seed edits for SEED_SILENT

    Returns:
        The accepted attempt, or None when the site cannot be protected
    """
    if target_disrupts_pam(original_arm, mutated_arm, site, arm_start):
        return DisruptionAttempt(
            sequence=mutated_arm,
            strategy=RepairStrategy.PAM_DISRUPTED_BY_TARGET,
            mutation_count=0,
        )

    attempt = find_pam_silent(mutated_arm, site, arm_start)
    if attempt is None:
        attempt = find_seed_silent(mutated_arm, site, arm_start, seed_threshold)
    if attempt is None:
        logger.debug("No silent disruption for site at %d (%s)", site.position, site.strand.value)
    return attempt
