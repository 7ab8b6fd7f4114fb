"""
Test configuration and fixtures for AutoOligo.

Scenario genes are built from an AAT (Asn) background, which contains no
G or C, so the only Cas9 sites are the ones a fixture places on purpose.
"""

import pytest
from pathlib import Path
from typing import Dict

from autooligo.config import CloningConfig, DesignConfig
from autooligo.models.data_classes import GeneInfo


def build_gene(overrides: Dict[int, str], n_codons: int = 40) -> str:
    """ATG + AAT background with codons replaced at 1-based residues."""
    codons = ["ATG"] + ["AAT"] * (n_codons - 1)
    for residue, codon in overrides.items():
        codons[residue - 1] = codon
    return "".join(codons)


@pytest.fixture
def design_config() -> DesignConfig:
    return DesignConfig()


@pytest.fixture
def cloning_config() -> CloningConfig:
    return CloningConfig()


@pytest.fixture
def target_pam_gene() -> str:
    """
    Residue 10 is CTG (Leu) and residue 11 starts with G, so T-G-G at nt
    28-30 is the PAM of the only site (forward, position 8). L10P writes CCT,
    which changes the PAM G at nt 29.
    """
    return build_gene({10: "CTG", 11: "GAT"})


@pytest.fixture
def pam_silent_gene() -> str:
    """Residue 10 CTT; residue 18 AGG gives a forward site at 31 whose GG can go AGA."""
    return build_gene({10: "CTT", 18: "AGG"})


@pytest.fixture
def seed_silent_gene() -> str:
    """Residue 18 TGG (Trp) is the PAM: no synonym exists, seed codons are AAT."""
    return build_gene({10: "CTT", 18: "TGG"})


@pytest.fixture
def reverse_site_gene() -> str:
    """AAC-CAA at residues 11-12 puts CC at nt 32-33: one reverse site."""
    return build_gene({10: "CTT", 11: "AAC", 12: "CAA"})


@pytest.fixture
def upstream_reverse_gene() -> str:
    """
    CC at nt 5-6 (AAC-CAA at residues 2-3): one reverse site at 5, well
    upstream of residue 20 (CTT). AAC -> AAT breaks the first C.
    """
    return build_gene({2: "AAC", 3: "CAA", 20: "CTT"})


@pytest.fixture
def locked_gene() -> str:
    """Trp PAM with Met-only seed codons: no silent disruption possible."""
    return build_gene({10: "CTT", 14: "ATG", 15: "ATG", 16: "ATG", 17: "ATG", 18: "TGG"})


@pytest.fixture
def no_site_gene() -> str:
    return build_gene({10: "CTT"})


@pytest.fixture
def eight_site_gene() -> str:
    """
    Residue 30 CTT with eight AGG codons around it. Site positions (codon
    start - 20) and distances from nt 87: 88/1, 82/5, 94/7, 76/11, 58/29,
    52/35, 46/41, 40/47.
    """
    overrides = {30: "CTT"}
    for codon_start in (60, 66, 72, 78, 96, 102, 108, 114):
        overrides[codon_start // 3 + 1] = "AGG"
    return build_gene(overrides, n_codons=60)


@pytest.fixture
def gene_info(target_pam_gene: str) -> GeneInfo:
    return GeneInfo(
        id="S000002395",
        symbol="PHO13",
        sequence=target_pam_gene,
        description="Alkaline phosphatase",
    )


@pytest.fixture
def genes_fasta(tmp_path: Path, pam_silent_gene: str) -> Path:
    """Two-record SGD-style coding-sequence FASTA."""
    path = tmp_path / "orf_coding.fasta"
    path.write_text(
        '>YDL236W PHO13 SGDID:S000002395, Chr IV from 32084-32986, Genome Release 64-3-1, '
        'Verified ORF, "Alkaline phosphatase specific for p-nitrophenyl phosphate"\n'
        f"{pam_silent_gene}\n"
        ">YAL001C_TEST SGDID:S000000001, Uncharacterized ORF\n"
        f"{build_gene({10: 'CTT'})}\n"
    )
    return path
