"""
Configuration system for AutoOligo.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class DesignConfig(BaseSettings):
    """Design algorithm configuration."""
    # Site search
    window_size: int = 105

    # Homology arm
    homology_flank: int = 30
    min_homology_flank: int = 15
    min_oligo_length: int = 60
    max_oligo_length: int = 100

    # Verification
    verification_flank: int = 150

    # Seed disruption needs at least this many edited bases
    seed_edit_threshold: int = 2

    # Output
    max_results: int = 5

    # Per-site evaluation; 1 keeps everything on the calling thread
    max_workers: int = 1


class CloningConfig(BaseSettings):
    """Guide vector adapters (pML104, BclI/SwaI)."""
    vector_name: str = "pML104"
    oligo_a_prefix: str = "gatc"
    oligo_a_suffix: str = "gttttagagctag"
    oligo_b_prefix: str = "ctagctctaaaac"
    oligo_b_suffix: str = ""


class AutoOligoConfig(BaseSettings):
    """Main configuration for AutoOligo."""

    model_config = SettingsConfigDict(
        env_prefix="AUTOOLIGO_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Paths
    data_dir: Path = Path("~/.autooligo").expanduser()
    genes_fasta: Optional[Path] = None  # Coding sequences, one record per gene

    # Sub-configs
    design: DesignConfig = Field(default_factory=DesignConfig)
    cloning: CloningConfig = Field(default_factory=CloningConfig)

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    def get_genes_fasta(self) -> Optional[Path]:
        """Locate the coding-sequence FASTA.

        Searches:
        1. AUTOOLIGO_GENES_FASTA
        2. ~/.autooligo/orf_coding.fasta
        """
        if self.genes_fasta is not None:
            return self.genes_fasta

        for name in ("orf_coding.fasta", "orf_coding.fa"):
            candidate = self.data_dir / name
            if candidate.exists():
                return candidate
        return None


@lru_cache()
def get_config() -> AutoOligoConfig:
    """Get cached configuration singleton."""
    return AutoOligoConfig()
