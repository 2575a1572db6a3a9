"""Ember Score calculator.

The Ember Score (0-100) indicates content quality and trustworthiness:
- 90-100: verified (expert reviewed, high community validation)
- 75-89: confident (reviewed or strong community validation)
- below 75: draft (AI-generated, minimal validation)

Score components:
1. Curriculum alignment (0-40)
   - Recognised key stage / year group reference: 40
   - Any other reference: 20
   - No reference: 0
2. Expert verification (0-40)
   - reviewed: 40, spot_checked: 25, ai_only or unknown: 10
3. Community feedback (0-20)
   - Base 16, -2 per pending error report
   - +0.5 per helpful vote (max +4)
   - +0.1 per 100 practice attempts (max +4), only with no pending reports
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from ember_quality.models.scoring import (
    CommunityStats,
    ErrorReport,
    ErrorReportStatus,
    ReviewStatus,
    ScoreBreakdown,
    ScoreInput,
    ScoreResult,
    ScoreTier,
)

logger = logging.getLogger(__name__)

CURRICULUM_MAX = 40
EXPERT_MAX = 40
COMMUNITY_MAX = 20

VERIFIED_THRESHOLD = 90
CONFIDENT_THRESHOLD = 75

COMMUNITY_BASE = 16
PENDING_REPORT_PENALTY = 2
HELPFUL_VOTE_BONUS = 0.5
HELPFUL_BONUS_CAP = 4
USAGE_BONUS_PER_100 = 0.1
USAGE_BONUS_CAP = 4

# "KS2 English Y5", "Y6 Maths Number", "Year 4 Fractions"
CURRICULUM_PATTERN = re.compile(r"^(KS[1-4]|Y[3-6]|Year [3-6])", re.IGNORECASE)

EXPERT_SCORES: dict[str, int] = {
    ReviewStatus.REVIEWED.value: 40,
    ReviewStatus.SPOT_CHECKED.value: 25,
    ReviewStatus.AI_ONLY.value: 10,
}
EXPERT_BASELINE = 10


def calculate_score(
    item: ScoreInput | Mapping[str, Any],
    verified_threshold: int = VERIFIED_THRESHOLD,
    confident_threshold: int = CONFIDENT_THRESHOLD,
) -> ScoreResult:
    """Calculate the Ember Score for a content item.

    Args:
        item: Scoring input, either a ScoreInput or its JSON dict.
        verified_threshold: Lowest score in the verified tier.
        confident_threshold: Lowest score in the confident tier.

    Returns:
        Score result with breakdown and tier. Never raises for a
        well-typed input; unknown enum values score their baseline.
    """
    if not isinstance(item, ScoreInput):
        item = ScoreInput.model_validate(item)

    breakdown = ScoreBreakdown(
        curriculum_alignment=curriculum_score(item.curriculum_reference),
        expert_verification=expert_score(item.review_status),
        community_feedback=community_score(
            item.community_stats or CommunityStats(),
            item.error_reports or [],
        ),
    )
    total = _clamp(breakdown.total, 0, 100)
    score = _round_half_up(total)
    logger.debug("Ember score for %s: %d (%s)", item.id or "<unnamed>", score, breakdown)

    return ScoreResult(
        score=score,
        breakdown=breakdown,
        tier=get_score_tier(score, verified_threshold, confident_threshold),
    )


def score_many(
    items: Iterable[ScoreInput | Mapping[str, Any]],
    verified_threshold: int = VERIFIED_THRESHOLD,
    confident_threshold: int = CONFIDENT_THRESHOLD,
) -> list[ScoreResult]:
    """Score each item in order."""
    return [calculate_score(i, verified_threshold, confident_threshold) for i in items]


def curriculum_score(curriculum_reference: str | None) -> int:
    """Score the curriculum reference (0-40)."""
    if not curriculum_reference or not curriculum_reference.strip():
        return 0
    if CURRICULUM_PATTERN.match(curriculum_reference):
        return CURRICULUM_MAX
    return CURRICULUM_MAX // 2


def expert_score(review_status: str | ReviewStatus | None) -> int:
    """Score the review status (0-40)."""
    if review_status is None:
        return EXPERT_BASELINE
    key = review_status.value if isinstance(review_status, ReviewStatus) else review_status
    if key not in EXPERT_SCORES:
        logger.warning("Unknown review status %r, scoring as AI-only", key)
        return EXPERT_BASELINE
    return EXPERT_SCORES[key]


def community_score(stats: CommunityStats, error_reports: list[ErrorReport]) -> float:
    """Score community feedback (0-20).

    The running value may dip below zero before the final clamp.
    """
    pending = sum(1 for r in error_reports if r.status == ErrorReportStatus.PENDING.value)

    score: float = COMMUNITY_BASE
    score -= pending * PENDING_REPORT_PENALTY
    score += min(HELPFUL_BONUS_CAP, stats.helpful_count * HELPFUL_VOTE_BONUS)

    # Usage only counts while nothing is under dispute
    if pending == 0 and stats.practice_count > 0:
        score += min(USAGE_BONUS_CAP, USAGE_BONUS_PER_100 * stats.practice_count / 100)

    return _clamp(score, 0, COMMUNITY_MAX)


def get_score_tier(
    score: float,
    verified_threshold: int = VERIFIED_THRESHOLD,
    confident_threshold: int = CONFIDENT_THRESHOLD,
) -> ScoreTier:
    """Map a total score to its tier."""
    if score >= verified_threshold:
        return ScoreTier.VERIFIED
    if score >= confident_threshold:
        return ScoreTier.CONFIDENT
    return ScoreTier.DRAFT


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
