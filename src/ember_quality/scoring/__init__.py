"""Ember Score engine."""

from ember_quality.scoring.display import format_score_breakdown, get_tier_info
from ember_quality.scoring.ember_score import calculate_score, get_score_tier, score_many

__all__ = [
    "calculate_score",
    "format_score_breakdown",
    "get_score_tier",
    "get_tier_info",
    "score_many",
]
