"""Tests for cloning oligos and ordering exports."""

import csv
import io

import pytest

from autooligo.cloning import OligoGenerator, generate_cloning_oligos
from autooligo.config import CloningConfig, DesignConfig
from autooligo.design import design_point_mutation
from autooligo.models.data_classes import GeneInfo


@pytest.fixture
def generator(cloning_config: CloningConfig) -> OligoGenerator:
    return OligoGenerator(cloning_config)


@pytest.fixture
def results(eight_site_gene: str):
    gene = GeneInfo(id="test", symbol="TEST", sequence=eight_site_gene)
    return design_point_mutation(
        gene, 30, "P", design=DesignConfig(max_results=2), cloning=CloningConfig()
    ).results


class TestOligoPair:
    def test_pml104_adapters(self, generator: OligoGenerator) -> None:
        pair = generator.generate_oligos("ATCGATCGATCGATCGATCG")

        assert pair.oligo_a == "gatcATCGATCGATCGATCGATCGgttttagagctag"
        assert pair.oligo_b == "ctagctctaaaacCGATCGATCGATCGATCGAT"
        assert pair.spacer_sequence == "ATCGATCGATCGATCGATCG"
        assert pair.vector_name == "pML104"

    def test_lowercase_spacer_normalised(self, generator: OligoGenerator) -> None:
        pair = generator.generate_oligos("atcgatcgatcgatcgatcg")
        assert pair.oligo_a[4:24] == "ATCGATCGATCGATCGATCG"

    @pytest.mark.parametrize("spacer", ["ATCG", "A" * 21, ""])
    def test_spacer_length(self, generator: OligoGenerator, spacer: str) -> None:
        with pytest.raises(ValueError):
            generator.generate_oligos(spacer)

    def test_custom_vector(self) -> None:
        cloning = CloningConfig(
            vector_name="custom",
            oligo_a_prefix="cacc",
            oligo_a_suffix="",
            oligo_b_prefix="aaac",
            oligo_b_suffix="c",
        )
        pair = OligoGenerator(cloning).generate_oligos("A" * 20)
        assert pair.oligo_a == "cacc" + "A" * 20
        assert pair.oligo_b == "aaac" + "T" * 20 + "c"
        assert pair.vector_name == "custom"

    def test_convenience_function(self) -> None:
        pair = generate_cloning_oligos("ATCGATCGATCGATCGATCG")
        assert pair.oligo_a.endswith("gttttagagctag")


class TestExports:
    def test_idt_csv(self, generator: OligoGenerator, results) -> None:
        content = generator.export_idt_format(results, name="PHO13")
        rows = list(csv.reader(io.StringIO(content)))

        assert rows[0] == ["Name", "Sequence", "Scale", "Purification"]
        assert [row[0] for row in rows[1:]] == [
            "PHO13_g1_A", "PHO13_g1_B", "PHO13_g1_repair",
            "PHO13_g2_A", "PHO13_g2_B", "PHO13_g2_repair",
        ]
        assert rows[1][1] == results[0].cloning_oligo_a
        assert rows[3][1] == results[0].repair_template.upper()
        assert rows[3][2] == "100nm"

    def test_idt_writes_file(self, generator: OligoGenerator, results, tmp_path) -> None:
        path = tmp_path / "order.csv"
        content = generator.export_idt_format(results, output_path=path)
        assert path.read_bytes().decode() == content

    def test_fasta(self, generator: OligoGenerator, results) -> None:
        lines = generator.export_fasta(results, name="PHO13").splitlines()

        assert len(lines) == 12
        assert lines[0] == ">PHO13_g1_A"
        assert lines[4] == ">PHO13_g1_repair strategy=PAM_SILENT"
        assert lines[5] == results[0].repair_template
