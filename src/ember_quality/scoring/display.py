"""Presentation metadata for tiers and score breakdowns."""

from __future__ import annotations

from ember_quality.models.scoring import BreakdownRow, ScoreBreakdown, ScoreTier, TierInfo
from ember_quality.scoring.ember_score import COMMUNITY_MAX, CURRICULUM_MAX, EXPERT_MAX

TIER_INFO: dict[ScoreTier, TierInfo] = {
    ScoreTier.VERIFIED: TierInfo(
        label="Verified",
        description="Expert reviewed with strong community validation",
        color="blue",
        flames=3,
    ),
    ScoreTier.CONFIDENT: TierInfo(
        label="Confident",
        description="Reviewed or well-validated by the community",
        color="green",
        flames=2,
    ),
    ScoreTier.DRAFT: TierInfo(
        label="Draft",
        description="AI-generated, meets quality threshold",
        color="gray",
        flames=1,
    ),
}


def get_tier_info(tier: ScoreTier | str) -> TierInfo:
    """Display information for a tier. Unknown tiers render as Draft."""
    try:
        return TIER_INFO[ScoreTier(tier)]
    except ValueError:
        return TIER_INFO[ScoreTier.DRAFT]


def format_score_breakdown(breakdown: ScoreBreakdown) -> list[BreakdownRow]:
    """One row per score component with its share of the component maximum."""
    components = [
        ("Curriculum Alignment", breakdown.curriculum_alignment, CURRICULUM_MAX),
        ("Expert Verification", breakdown.expert_verification, EXPERT_MAX),
        ("Community Feedback", breakdown.community_feedback, COMMUNITY_MAX),
    ]
    return [
        BreakdownRow(
            component=name,
            score=score,
            max_score=max_score,
            percentage=score / max_score * 100,
        )
        for name, score, max_score in components
    ]
