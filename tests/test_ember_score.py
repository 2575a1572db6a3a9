"""Tests for the Ember Score calculator."""

from __future__ import annotations

import itertools
import math

import pytest

from ember_quality.models.scoring import (
    CommunityStats,
    ErrorReport,
    ReviewStatus,
    ScoreInput,
    ScoreTier,
)
from ember_quality.scoring.ember_score import (
    calculate_score,
    community_score,
    curriculum_score,
    expert_score,
    get_score_tier,
    score_many,
)


def _item(curriculum="KS2 Maths", review="reviewed", helpful=0, practice=0, statuses=()):
    return ScoreInput(
        curriculum_reference=curriculum,
        review_status=review,
        community_stats=CommunityStats(helpful_count=helpful, practice_count=practice),
        error_reports=[ErrorReport(status=s) for s in statuses],
    )


class TestCalculateScore:
    def test_fully_reviewed_with_reference(self, reviewed_item):
        result = calculate_score(reviewed_item)
        assert result.breakdown.curriculum_alignment == 40
        assert result.breakdown.expert_verification == 40
        assert result.breakdown.community_feedback == 20  # 16 + 4 + 1 = 21, clamped
        assert result.score == 100
        assert result.tier == ScoreTier.VERIFIED

    def test_minimum_for_ai_only(self):
        result = calculate_score(_item(curriculum=None, review="ai_only"))
        assert result.breakdown.curriculum_alignment == 0
        assert result.breakdown.expert_verification == 10
        assert result.breakdown.community_feedback == 16
        assert result.score == 26
        assert result.tier == ScoreTier.DRAFT

    def test_community_example_without_pending_reports(self, ai_only_item):
        # 16 + min(4, 5) + min(4, 0.5) = 20.5, clamped to 20
        result = calculate_score(ai_only_item)
        assert result.breakdown.community_feedback == 20
        assert result.score == 30
        assert result.tier == ScoreTier.DRAFT

    def test_pending_report_suppresses_usage_bonus(self, ai_only_item):
        item = ai_only_item.model_copy(update={"error_reports": [ErrorReport(status="pending")]})
        result = calculate_score(item)
        # 16 + 4 - 2; the 0.5 usage bonus is dropped entirely
        assert result.breakdown.community_feedback == 18
        assert result.score == 28

    def test_only_pending_reports_penalised(self):
        result = calculate_score(
            _item(statuses=("pending", "resolved", "dismissed", "pending"))
        )
        assert result.breakdown.community_feedback == 12

    def test_error_reports_penalty(self):
        result = calculate_score(_item(statuses=("pending",) * 3, practice=100))
        assert result.breakdown.community_feedback == 10
        assert result.score == 90

    def test_community_floor(self):
        result = calculate_score(_item(helpful=10, statuses=("pending",) * 20))
        assert result.breakdown.community_feedback == 0
        assert result.score == 80

    def test_spot_checked_from_camel_case_json(self):
        result = calculate_score({
            "curriculumReference": "Y6 Maths Number",
            "reviewStatus": "spot_checked",
            "communityStats": {"helpfulCount": 5, "practiceCount": 500},
            "errorReports": [],
        })
        # 40 + 25 + (16 + 2.5 + 0.5)
        assert result.breakdown.community_feedback == 19
        assert result.score == 84
        assert result.tier == ScoreTier.CONFIDENT

    def test_fractional_total_rounds_half_up(self):
        result = calculate_score(_item(review="spot_checked", helpful=1))
        assert result.breakdown.community_feedback == 16.5
        assert result.score == 82

    def test_missing_stats_and_reports_use_defaults(self):
        result = calculate_score(ScoreInput())
        assert result.breakdown.community_feedback == 16
        assert result.score == 26

    def test_unknown_review_status_scores_baseline(self):
        result = calculate_score(_item(review="peer_reviewed"))
        assert result.breakdown.expert_verification == 10

    def test_deterministic(self, reviewed_item):
        a = calculate_score(reviewed_item)
        b = calculate_score(reviewed_item)
        assert a.model_dump(exclude={"calculated_at"}) == b.model_dump(exclude={"calculated_at"})

    def test_serializes_camel_case(self, reviewed_item):
        data = calculate_score(reviewed_item).model_dump(by_alias=True, mode="json")
        assert set(data) == {"score", "breakdown", "tier", "calculatedAt"}
        assert data["breakdown"]["curriculumAlignment"] == 40
        assert data["tier"] == "verified"

    def test_custom_thresholds(self, ai_only_item):
        result = calculate_score(ai_only_item, verified_threshold=50, confident_threshold=25)
        assert result.tier == ScoreTier.CONFIDENT

    def test_score_many(self, reviewed_item, ai_only_item):
        results = score_many([reviewed_item, ai_only_item])
        assert [r.score for r in results] == [100, 30]

    def test_bounds_and_sum_invariant(self):
        combos = itertools.product(
            [None, "", "KS3 Science", "free text"],
            ["reviewed", "spot_checked", "ai_only", None, "bogus"],
            [0, 1, 3, 20],
            [0, 150, 10_000],
            [(), ("pending",), ("pending",) * 15, ("resolved", "dismissed")],
        )
        for curriculum, review, helpful, practice, statuses in combos:
            result = calculate_score(_item(curriculum, review, helpful, practice, statuses))
            b = result.breakdown
            assert 0 <= b.curriculum_alignment <= 40
            assert 0 <= b.expert_verification <= 40
            assert 0 <= b.community_feedback <= 20
            total = min(100, max(0, b.total))
            assert result.score == math.floor(total + 0.5)
            assert 0 <= result.score <= 100


class TestTierBoundaries:
    @pytest.mark.parametrize(
        "score,tier",
        [
            (100, ScoreTier.VERIFIED),
            (90, ScoreTier.VERIFIED),
            (89, ScoreTier.CONFIDENT),
            (75, ScoreTier.CONFIDENT),
            (74, ScoreTier.DRAFT),
            (0, ScoreTier.DRAFT),
        ],
    )
    def test_get_score_tier(self, score, tier):
        assert get_score_tier(score) == tier

    def test_exactly_90(self):
        result = calculate_score(_item(statuses=("pending",) * 3))
        assert result.score == 90
        assert result.tier == ScoreTier.VERIFIED

    def test_exactly_89(self):
        # 40 + 40 + (16 - 8 + 1)
        result = calculate_score(_item(helpful=2, statuses=("pending",) * 4))
        assert result.score == 89
        assert result.tier == ScoreTier.CONFIDENT

    def test_exactly_75(self):
        result = calculate_score(_item(review="spot_checked", statuses=("pending",) * 3))
        assert result.score == 75
        assert result.tier == ScoreTier.CONFIDENT

    def test_exactly_74(self):
        result = calculate_score(_item(review="spot_checked", helpful=2, statuses=("pending",) * 4))
        assert result.score == 74
        assert result.tier == ScoreTier.DRAFT


class TestCurriculumScore:
    @pytest.mark.parametrize(
        "reference",
        ["KS2 English Y5 Vocabulary", "ks1 phonics", "Y6 Maths Number", "Year 4 Fractions", "year 3"],
    )
    def test_recognised_reference(self, reference):
        assert curriculum_score(reference) == 40

    @pytest.mark.parametrize(
        "reference",
        ["Some vague reference", "Year 2 Counting", "Y7 Algebra", "KS5 Physics", "Maths KS2"],
    )
    def test_partial_reference(self, reference):
        assert curriculum_score(reference) == 20

    @pytest.mark.parametrize("reference", [None, "", "   "])
    def test_no_reference(self, reference):
        assert curriculum_score(reference) == 0


class TestExpertScore:
    def test_statuses(self):
        assert expert_score("reviewed") == 40
        assert expert_score("spot_checked") == 25
        assert expert_score("ai_only") == 10
        assert expert_score(None) == 10

    def test_accepts_enum(self):
        assert expert_score(ReviewStatus.SPOT_CHECKED) == 25

    def test_unknown_status_logs_warning(self, caplog):
        with caplog.at_level("WARNING"):
            assert expert_score("external_panel") == 10
        assert "external_panel" in caplog.text


class TestCommunityScore:
    def test_helpful_bonus_capped(self):
        assert community_score(CommunityStats(helpful_count=100), []) == 20

    def test_usage_bonus_capped(self):
        # 0.1 per 100 attempts caps at +4 after 4000 attempts
        assert community_score(CommunityStats(practice_count=4000), []) == 20
        assert community_score(CommunityStats(practice_count=1000), []) == 17

    def test_no_usage_bonus_without_practice(self):
        assert community_score(CommunityStats(), []) == 16
