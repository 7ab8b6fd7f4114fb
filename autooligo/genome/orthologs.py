"""
Ortholog residue mapping.

Maps a residue through a pairwise protein alignment (yeast vs. human, as
supplied by an ortholog service) so variant-effect scores for the human
position can be shown next to a yeast design.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from autooligo.design.codons import GAP


SIMILARITY_GROUPS = (
    frozenset("GAVLI"),  # Aliphatic
    frozenset("FYW"),    # Aromatic
    frozenset("KRH"),    # Positively charged
    frozenset("DE"),     # Negatively charged
    frozenset("ST"),     # Polar uncharged
    frozenset("CM"),     # Sulfur
    frozenset("NQ"),     # Amide
)


class MappedResidue(NamedTuple):
    residue: int  # 1-based in the target protein
    amino_acid: str


def map_residue_to_ortholog(
    residue: int,
    source_aligned: str,
    target_aligned: str,
) -> Optional[MappedResidue]:
    """
    Find the target residue aligned to a source residue.

    Args:
        residue: 1-based residue in the ungapped source protein
        source_aligned: Gapped source row of the alignment
        target_aligned: Gapped target row, same length

    Returns:
        MappedResidue, or None if the residue is past the alignment or
        aligned to a gap
    """
    if residue < 1:
        return None

    column = None
    seen = 0
    for i, aa in enumerate(source_aligned):
        if aa != GAP:
            seen += 1
            if seen == residue:
                column = i
                break

    if column is None or column >= len(target_aligned):
        return None

    target_aa = target_aligned[column]
    if target_aa == GAP:
        return None

    target_residue = sum(1 for aa in target_aligned[:column + 1] if aa != GAP)
    return MappedResidue(residue=target_residue, amino_acid=target_aa)


def is_residue_similar(aa1: str, aa2: str) -> bool:
    """True for identical residues or residues in the same physicochemical group."""
    aa1, aa2 = aa1.upper(), aa2.upper()
    if aa1 == aa2:
        return True
    return any(aa1 in group and aa2 in group for group in SIMILARITY_GROUPS)
