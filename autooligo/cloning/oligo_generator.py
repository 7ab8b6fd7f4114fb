"""
Oligo generation for guide cloning.

Builds the annealed oligo pair that drops a 20-nt spacer into a yeast guide
vector (pML104: BclI/SwaI-cut, overhangs GATC / blunt). Also writes ordering
sheets for the oligos and repair templates of a design run.

Output formats:
- IDT ordering format (CSV)
- Plain FASTA
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import List, Optional, Sequence

from autooligo.config import CloningConfig
from autooligo.design.codons import reverse_complement
from autooligo.models.data_classes import CloningOligoPair, RepairResult


class OligoGenerator:
    """
    Generate cloning-ready oligonucleotides for guides.

    Example:
        >>> generator = OligoGenerator()
        >>> pair = generator.generate_oligos("ATCGATCGATCGATCGATCG")
        >>> pair.oligo_a
        'gatcATCGATCGATCGATCGATCGgttttagagctag'
        >>> pair.oligo_b
        'ctagctctaaaacCGATCGATCGATCGATCGAT'
    """

    def __init__(self, cloning: Optional[CloningConfig] = None):
        if cloning is None:
            from autooligo.config import get_config
            cloning = get_config().cloning
        self.cloning = cloning

    def generate_oligos(self, spacer: str) -> CloningOligoPair:
        """
        Generate the oligo pair for a spacer.

        Args:
            spacer: 20 nt spacer (without PAM)

        Returns:
            CloningOligoPair; adapters lowercase, spacer uppercase
        """
        spacer = spacer.upper().replace(" ", "")
        if len(spacer) != 20:
            raise ValueError(f"Spacer must be 20 nt, got {len(spacer)}")

        c = self.cloning
        return CloningOligoPair(
            spacer_sequence=spacer,
            oligo_a=f"{c.oligo_a_prefix}{spacer}{c.oligo_a_suffix}",
            oligo_b=f"{c.oligo_b_prefix}{reverse_complement(spacer)}{c.oligo_b_suffix}",
            vector_name=c.vector_name,
        )

    def export_idt_format(
        self,
        results: Sequence[RepairResult],
        name: str = "guide",
        output_path: Optional[Path] = None,
    ) -> str:
        """
        Export oligos and repair templates in IDT ordering format (CSV).

        Format: Name, Sequence, Scale, Purification

        Args:
            results: Designs to export, in order
            name: Name prefix (usually the gene symbol)
            output_path: Optional path to write CSV file

        Returns:
            CSV content as string
        """
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["Name", "Sequence", "Scale", "Purification"])

        for i, result in enumerate(results, 1):
            prefix = f"{name}_g{i}"
            writer.writerow([f"{prefix}_A", result.cloning_oligo_a, "25nm", "STD"])
            writer.writerow([f"{prefix}_B", result.cloning_oligo_b, "25nm", "STD"])
            # Long donor oligos are ordered at a larger scale
            writer.writerow([f"{prefix}_repair", result.repair_template.upper(), "100nm", "STD"])

        content = output.getvalue()
        if output_path:
            output_path.write_text(content)
        return content

    def export_fasta(
        self,
        results: Sequence[RepairResult],
        name: str = "guide",
        output_path: Optional[Path] = None,
    ) -> str:
        """Export oligos and repair templates in FASTA format."""
        lines: List[str] = []
        for i, result in enumerate(results, 1):
            prefix = f"{name}_g{i}"
            lines.append(f">{prefix}_A")
            lines.append(result.cloning_oligo_a)
            lines.append(f">{prefix}_B")
            lines.append(result.cloning_oligo_b)
            lines.append(f">{prefix}_repair strategy={result.strategy.value}")
            lines.append(result.repair_template)

        content = "\n".join(lines)
        if output_path:
            output_path.write_text(content)
        return content


def generate_cloning_oligos(spacer: str) -> CloningOligoPair:
    """Convenience function to generate oligos for a single spacer."""
    return OligoGenerator().generate_oligos(spacer)
