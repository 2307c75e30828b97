"""File filtering rules and inclusion decisions."""

from digestai.filters.engine import FilterEngine, InclusionDecision, Reason
from digestai.filters.patterns import matches, matches_any
from digestai.filters.rules import DEFAULT_RULES, RuleSet

__all__ = [
    "DEFAULT_RULES",
    "FilterEngine",
    "InclusionDecision",
    "Reason",
    "RuleSet",
    "matches",
    "matches_any",
]
