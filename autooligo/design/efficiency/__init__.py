"""Efficiency prediction package."""

from autooligo.design.efficiency.rule_based import (
    RuleBasedScorer,
    RuleScore,
    calculate_efficiency_score,
)

__all__ = [
    "RuleBasedScorer",
    "RuleScore",
    "calculate_efficiency_score",
]
