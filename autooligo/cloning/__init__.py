"""
AutoOligo Cloning Helpers

Oligo generation for guide vector cloning.
"""

from autooligo.cloning.oligo_generator import (
    OligoGenerator,
    generate_cloning_oligos,
)

__all__ = [
    "OligoGenerator",
    "generate_cloning_oligos",
]
