"""
Cas9 site finder.

Scans a window around the target codon for SpCas9 sites on both strands and
orders them by distance from the codon.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional, Tuple

from autooligo.models.enums import Strand
from autooligo.models.data_classes import Cas9Site


logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 105

# Lookaheads so that overlapping matches are all reported.
FORWARD_SITE_REGEX = re.compile(r"(?=([ACGT]{20}[ACGT]GG))", re.IGNORECASE)
REVERSE_SITE_REGEX = re.compile(r"(?=(CC[ACGT]{21}))", re.IGNORECASE)


class NoSiteFoundError(Exception):
    """Raised when no Cas9 site lies within the search window."""


def target_nucleotide(residue: int) -> int:
    """Offset of the first base of a 1-based residue's codon."""
    return (residue - 1) * 3


def search_window(
    sequence_length: int,
    target_position: int,
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> Tuple[int, int]:
    """Half-open window of ``window_size`` centred on the target, clamped to the sequence."""
    half = window_size // 2
    start = max(0, target_position - half)
    end = min(sequence_length, target_position - half + window_size)
    return start, max(start, end)


class Cas9SiteFinder:
    """
    Finds candidate Cas9 sites around a residue.

    Forward sites match N20-NGG. Reverse sites match CC-N21, i.e. an NGG PAM
    on the opposite strand; their raw text is kept as read on the forward
    strand.
    """

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE):
        self.window_size = window_size

    def find_sites(self, sequence: str, residue: int) -> List[Cas9Site]:
        """
        Find all sites in the window, nearest first.

        Args:
            sequence: Gene coding sequence
            residue: 1-based residue number

        Returns:
            Sites sorted by distance from the codon start (may be empty)
        """
        target = target_nucleotide(residue)
        start, end = search_window(len(sequence), target, self.window_size)
        region = sequence[start:end]

        sites = list(self._scan(region, start, FORWARD_SITE_REGEX, Strand.FORWARD))
        sites.extend(self._scan(region, start, REVERSE_SITE_REGEX, Strand.REVERSE))

        # sorted() is stable: forward before reverse on equal distance
        sites = sorted(sites, key=lambda site: abs(site.position - target))
        logger.debug(
            "Found %d Cas9 sites in window [%d, %d) around nt %d",
            len(sites), start, end, target,
        )
        return sites

    @staticmethod
    def _scan(
        region: str,
        offset: int,
        pattern: "re.Pattern[str]",
        strand: Strand,
    ) -> Iterator[Cas9Site]:
        for match in pattern.finditer(region):
            yield Cas9Site(
                position=offset + match.start(),
                sequence=match.group(1),
                strand=strand,
            )


def find_cas9_sites(
    sequence: str,
    residue: int,
    window_size: Optional[int] = None,
) -> List[Cas9Site]:
    """Convenience function to find sites around a residue."""
    if window_size is None:
        from autooligo.config import get_config
        window_size = get_config().design.window_size
    return Cas9SiteFinder(window_size).find_sites(sequence, residue)

