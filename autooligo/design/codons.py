"""
Codon table and sequence utilities.

Standard genetic code (yeast nuclear genes use it unchanged), translation,
reverse complement and the string helpers used to render alignments.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple


STOP = "*"
UNKNOWN_AA = "X"
GAP = "-"

# Synonym order matters: the first differing codon wins when a residue is
# substituted, and earlier synonyms win ties during silent-mutation search.
CODON_TABLE: Dict[str, Tuple[str, ...]] = {
    "F": ("TTT", "TTC"),
    "L": ("TTA", "TTG", "CTT", "CTC", "CTA", "CTG"),
    "I": ("ATT", "ATC", "ATA"),
    "M": ("ATG",),
    "V": ("GTT", "GTC", "GTA", "GTG"),
    "S": ("TCT", "TCC", "TCA", "TCG", "AGT", "AGC"),
    "P": ("CCT", "CCC", "CCA", "CCG"),
    "T": ("ACT", "ACC", "ACA", "ACG"),
    "A": ("GCT", "GCC", "GCA", "GCG"),
    "Y": ("TAT", "TAC"),
    "H": ("CAT", "CAC"),
    "Q": ("CAA", "CAG"),
    "N": ("AAT", "AAC"),
    "K": ("AAA", "AAG"),
    "D": ("GAT", "GAC"),
    "E": ("GAA", "GAG"),
    "C": ("TGT", "TGC"),
    "W": ("TGG",),
    "R": ("CGT", "CGC", "CGA", "CGG", "AGA", "AGG"),
    "G": ("GGT", "GGC", "GGA", "GGG"),
    STOP: ("TAA", "TAG", "TGA"),
}

AA_LOOKUP: Dict[str, str] = {
    codon: aa for aa, codons in CODON_TABLE.items() for codon in codons
}

STANDARD_AMINO_ACIDS = frozenset(aa for aa in CODON_TABLE if aa != STOP)

_COMPLEMENT = str.maketrans("ACGTacgt", "TGCAtgca")


class InvalidAminoAcidError(ValueError):
    """Raised when an amino acid symbol has no codon mapping."""


def codon_to_amino_acid(codon: str) -> Optional[str]:
    """Amino acid (or '*') for a codon, None if it is not a valid trinucleotide."""
    return AA_LOOKUP.get(codon.upper())


def synonymous_codons(amino_acid: str) -> Tuple[str, ...]:
    """All codons for an amino acid, in table order."""
    try:
        return CODON_TABLE[amino_acid.upper()]
    except KeyError:
        raise InvalidAminoAcidError(
            f"No codons encode amino acid {amino_acid!r}"
        ) from None


def reverse_complement(seq: str) -> str:
    """Reverse complement preserving case; other symbols pass through."""
    return seq.translate(_COMPLEMENT)[::-1]


def translate(seq: str) -> str:
    """Translate whole codons; a trailing partial codon is dropped."""
    seq = seq.upper()
    return "".join(
        AA_LOOKUP.get(seq[i:i + 3], UNKNOWN_AA)
        for i in range(0, len(seq) - len(seq) % 3, 3)
    )


def alignment_match_string(seq1: str, seq2: str) -> str:
    """'|' where both sequences carry the same non-gap character, else ' '."""
    length = max(len(seq1), len(seq2))
    seq1 = seq1.ljust(length, GAP)
    seq2 = seq2.ljust(length, GAP)
    return "".join(
        "|" if a == b and a != GAP else " "
        for a, b in zip(seq1, seq2)
    )


def codon_spaced_format(seq: str, frame: int = 0, separator: str = " ") -> str:
    """
    Insert a separator after each codon.

    Args:
        seq: Nucleotide string, may contain gaps
        frame: Offset of the first base within its codon (0, 1 or 2)
        separator: String placed between codons

    Returns:
        Spaced sequence without a trailing separator
    """
    if frame not in (0, 1, 2):
        raise ValueError(f"frame must be 0, 1 or 2, got {frame}")

    parts = []
    n_bases = 0
    for char in seq:
        parts.append(char)
        if char != GAP:
            n_bases += 1
            if (n_bases + frame) % 3 == 0:
                parts.append(separator)
    return "".join(parts).rstrip(separator)
