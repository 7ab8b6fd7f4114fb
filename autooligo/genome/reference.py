"""
Local gene sequence source.

Uses pyfaidx for indexed access to a FASTA of coding sequences (for yeast,
SGD's ``orf_coding.fasta``). Resolves a systematic or standard gene name to a
GeneInfo, standing in for a remote gene-resolution service.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

from pyfaidx import Fasta

from autooligo.models.data_classes import GeneInfo


logger = logging.getLogger(__name__)

# SGD headers end with the description in double quotes.
_QUOTED_DESCRIPTION = re.compile(r'"(.*)"\s*$')
_SGDID = re.compile(r"SGDID:(S\d+)")


class GeneNotFoundError(Exception):
    """Raised when a gene name cannot be resolved."""
    pass


class GeneSequenceSource:
    """
    Coding-sequence lookup backed by an indexed FASTA.

    Features:
    - Lazy loading; the .fai index is built on first use
    - Case-insensitive lookup by record ID or standard name (second header word)
    - Description parsed from the header
    """

    def __init__(self, fasta_path: Optional[Path] = None):
        if fasta_path is None:
            from autooligo.config import get_config
            fasta_path = get_config().get_genes_fasta()
        self.fasta_path = fasta_path
        self._fasta: Optional[Fasta] = None
        self._aliases: Dict[str, str] = {}

    def _ensure_loaded(self) -> None:
        """Open the FASTA and build the name index if not already done."""
        if self._fasta is not None:
            return

        if self.fasta_path is None:
            raise ValueError(
                "No gene FASTA configured. Set AUTOOLIGO_GENES_FASTA or place "
                "orf_coding.fasta in ~/.autooligo/"
            )
        if not Path(self.fasta_path).exists():
            raise FileNotFoundError(f"Gene FASTA not found: {self.fasta_path}")

        # pyfaidx will create .fai index if needed
        self._fasta = Fasta(str(self.fasta_path), build_index=True)

        for key in self._fasta.keys():
            self._aliases.setdefault(key.upper(), key)
            words = self._fasta[key].long_name.split()
            if len(words) > 1 and not words[1].startswith("SGDID:"):
                self._aliases.setdefault(words[1].rstrip(",").upper(), key)
        logger.debug("Indexed %d genes from %s", len(self._fasta.keys()), self.fasta_path)

    @property
    def gene_ids(self) -> List[str]:
        """Record IDs in file order."""
        self._ensure_loaded()
        return list(self._fasta.keys())

    def resolve(self, name: str) -> GeneInfo:
        """
        Resolve a gene name to its coding sequence.

        Args:
            name: Systematic (YDL236W) or standard (PHO13) name

        Returns:
            GeneInfo with the uppercase coding sequence

        Raises:
            GeneNotFoundError: Name not present in the FASTA
        """
        self._ensure_loaded()
        key = self._aliases.get(name.strip().upper())
        if key is None:
            raise GeneNotFoundError(f"Gene not found: {name}")

        record = self._fasta[key]
        header = record.long_name
        words = header.split()
        symbol = words[1].rstrip(",") if len(words) > 1 and not words[1].startswith("SGDID:") else key

        description = None
        match = _QUOTED_DESCRIPTION.search(header)
        if match:
            description = match.group(1)
        elif len(words) > 2:
            description = " ".join(words[2:])

        sgdid = _SGDID.search(header)
        return GeneInfo(
            id=sgdid.group(1) if sgdid else key,
            symbol=symbol,
            sequence=str(record[:]).upper(),
            description=description,
            transcript_id=key,
        )

    def close(self) -> None:
        """Close the FASTA file handle."""
        if self._fasta is not None:
            self._fasta.close()
            self._fasta = None
            self._aliases = {}
