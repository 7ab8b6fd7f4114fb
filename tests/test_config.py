"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest

from autooligo.config import AutoOligoConfig, get_config


class TestAutoOligoConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("AUTOOLIGO_GENES_FASTA", raising=False)
        config = AutoOligoConfig()

        assert config.design.window_size == 105
        assert config.design.homology_flank == 30
        assert config.design.max_results == 5
        assert config.cloning.vector_name == "pML104"
        assert config.log_level == "WARNING"

    def test_nested_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTOOLIGO_DESIGN__MAX_RESULTS", "3")
        monkeypatch.setenv("AUTOOLIGO_LOG_LEVEL", "DEBUG")
        config = AutoOligoConfig()

        assert config.design.max_results == 3
        assert config.log_level == "DEBUG"

    def test_genes_fasta_from_data_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("AUTOOLIGO_GENES_FASTA", raising=False)
        config = AutoOligoConfig(data_dir=tmp_path)
        assert config.get_genes_fasta() is None

        (tmp_path / "orf_coding.fasta").write_text(">A\nATG\n")
        assert config.get_genes_fasta() == tmp_path / "orf_coding.fasta"

    def test_explicit_genes_fasta_wins(self, tmp_path: Path) -> None:
        config = AutoOligoConfig(data_dir=tmp_path, genes_fasta=tmp_path / "genes.fa")
        assert config.get_genes_fasta() == tmp_path / "genes.fa"

    def test_get_config_is_cached(self) -> None:
        assert get_config() is get_config()
