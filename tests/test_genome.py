"""Tests for gene lookup and ortholog residue mapping."""

from pathlib import Path

import pytest

from autooligo.genome import (
    GeneNotFoundError,
    GeneSequenceSource,
    MappedResidue,
    is_residue_similar,
    map_residue_to_ortholog,
)


class TestGeneSequenceSource:
    def test_resolve_by_standard_name(self, genes_fasta: Path, pam_silent_gene: str) -> None:
        gene = GeneSequenceSource(genes_fasta).resolve("pho13")

        assert gene.symbol == "PHO13"
        assert gene.id == "S000002395"
        assert gene.transcript_id == "YDL236W"
        assert gene.sequence == pam_silent_gene
        assert gene.description == "Alkaline phosphatase specific for p-nitrophenyl phosphate"
        assert gene.protein_length == 40

    def test_resolve_by_systematic_name(self, genes_fasta: Path) -> None:
        source = GeneSequenceSource(genes_fasta)
        assert source.resolve("YDL236W").symbol == "PHO13"

    def test_record_without_standard_name(self, genes_fasta: Path) -> None:
        gene = GeneSequenceSource(genes_fasta).resolve("yal001c_test")

        assert gene.symbol == "YAL001C_TEST"
        assert gene.id == "S000000001"

    def test_gene_ids(self, genes_fasta: Path) -> None:
        assert GeneSequenceSource(genes_fasta).gene_ids == ["YDL236W", "YAL001C_TEST"]

    def test_unknown_gene(self, genes_fasta: Path) -> None:
        with pytest.raises(GeneNotFoundError):
            GeneSequenceSource(genes_fasta).resolve("NOPE1")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            GeneSequenceSource(tmp_path / "missing.fasta").resolve("PHO13")

    def test_close_and_reopen(self, genes_fasta: Path) -> None:
        source = GeneSequenceSource(genes_fasta)
        source.resolve("PHO13")
        source.close()
        assert source.resolve("PHO13").symbol == "PHO13"


class TestOrthologs:
    def test_maps_through_gaps(self) -> None:
        assert map_residue_to_ortholog(2, "M-KL", "MAK-") == MappedResidue(3, "K")

    def test_aligned_to_gap(self) -> None:
        assert map_residue_to_ortholog(3, "M-KL", "MAK-") is None

    def test_out_of_range(self) -> None:
        assert map_residue_to_ortholog(5, "M-KL", "MAK-") is None
        assert map_residue_to_ortholog(0, "M-KL", "MAK-") is None

    @pytest.mark.parametrize("aa1,aa2,expected", [
        ("I", "V", True),
        ("a", "A", True),
        ("K", "R", True),
        ("K", "D", False),
        ("W", "G", False),
    ])
    def test_similarity(self, aa1: str, aa2: str, expected: bool) -> None:
        assert is_residue_similar(aa1, aa2) is expected
