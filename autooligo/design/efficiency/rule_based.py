"""
Rule-based efficiency scoring.

Heuristic on-target score (0-100) for a 23-nt spacer+PAM, built from rules in
Doench et al. 2014, Wang et al. 2014 and Graf et al. 2019. Light enough to run
per candidate without a trained model.
"""

from __future__ import annotations

from typing import Dict, Tuple
from dataclasses import dataclass


BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

POSITION_20_ADJUSTMENTS = {"G": 15, "C": 5, "T": -10, "A": 0}


@dataclass
class RuleScore:
    """Adjustment from a single rule with explanation."""
    rule_name: str
    delta: int
    reason: str


class RuleBasedScorer:
    """
    Additive heuristic scorer.

    Each rule contributes an independent adjustment to a base of 50; the sum
    is clamped to [0, 100]:
    - Spacer GC content (40-60% best)
    - Position 20, immediately 5' of the PAM (G favoured, T disfavoured)
    - TTTT Pol III terminator (U6 promoter in pML104)
    - PAM identity (CGG/TGG slightly better than AGG/GGG)
    - T-rich PAM-proximal half of the spacer
    """

    def score(self, guide_with_pam: str) -> Tuple[int, Dict[str, RuleScore]]:
        """
        Score a guide.

        Args:
            guide_with_pam: 20 nt spacer followed by the 3 nt PAM

        Returns:
            Tuple of (clamped score, per-rule adjustments)
        """
        guide_with_pam = guide_with_pam.upper()
        spacer = guide_with_pam[:20]
        pam = guide_with_pam[20:23]

        scores = {
            "gc_content": self._score_gc_content(spacer),
            "position_20": self._score_position_20(spacer),
            "tttt_terminator": self._score_tttt(spacer),
            "pam_identity": self._score_pam(pam),
            "seed_t_content": self._score_seed_t(spacer),
        }

        total = BASE_SCORE + sum(rule.delta for rule in scores.values())
        return max(MIN_SCORE, min(MAX_SCORE, total)), scores

    def _score_gc_content(self, spacer: str) -> RuleScore:
        """GC content scoring - optimal is 40-60%."""
        gc = (spacer.count("G") + spacer.count("C")) / 20

        if 0.4 <= gc <= 0.6:
            return RuleScore("gc_content", 20, f"GC content {gc:.0%} is optimal (40-60%)")
        if 0.3 <= gc <= 0.8:
            return RuleScore("gc_content", 10, f"GC content {gc:.0%} acceptable")
        return RuleScore("gc_content", -20, f"GC content {gc:.0%} suboptimal")

    def _score_position_20(self, spacer: str) -> RuleScore:
        base = spacer[19:20]
        delta = POSITION_20_ADJUSTMENTS.get(base, 0)
        return RuleScore("position_20", delta, f"{base or 'N'} at position 20")

    def _score_tttt(self, spacer: str) -> RuleScore:
        if "TTTT" in spacer:
            return RuleScore("tttt_terminator", -50, "Contains TTTT (Pol III terminator)")
        return RuleScore("tttt_terminator", 0, "No Pol III terminator sequence")

    def _score_pam(self, pam: str) -> RuleScore:
        if pam in ("CGG", "TGG"):
            return RuleScore("pam_identity", 5, f"Favourable PAM ({pam})")
        if pam == "GGG":
            return RuleScore("pam_identity", -5, f"Weak PAM ({pam})")
        return RuleScore("pam_identity", 0, f"Neutral PAM ({pam})")

    def _score_seed_t(self, spacer: str) -> RuleScore:
        t_count = spacer[10:].count("T")
        if t_count >= 4:
            return RuleScore("seed_t_content", -10, f"{t_count} T in PAM-proximal 10 nt")
        return RuleScore("seed_t_content", 0, f"{t_count} T in PAM-proximal 10 nt")


def calculate_efficiency_score(guide_with_pam: str) -> int:
    """Convenience function returning only the clamped score."""
    return RuleBasedScorer().score(guide_with_pam)[0]
