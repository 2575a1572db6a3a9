"""Tests for tier and breakdown display helpers."""

import pytest

from ember_quality.models.scoring import ScoreBreakdown, ScoreTier
from ember_quality.scoring.display import format_score_breakdown, get_tier_info


class TestGetTierInfo:
    @pytest.mark.parametrize(
        "tier,label,color,flames",
        [
            (ScoreTier.VERIFIED, "Verified", "blue", 3),
            (ScoreTier.CONFIDENT, "Confident", "green", 2),
            (ScoreTier.DRAFT, "Draft", "gray", 1),
        ],
    )
    def test_every_tier_maps(self, tier, label, color, flames):
        info = get_tier_info(tier)
        assert info.label == label
        assert info.color == color
        assert info.flames == flames
        assert info.description

    def test_accepts_plain_string(self):
        assert get_tier_info("confident").label == "Confident"

    def test_unknown_tier_renders_as_draft(self):
        assert get_tier_info("legendary").label == "Draft"


class TestFormatScoreBreakdown:
    def test_rows(self):
        rows = format_score_breakdown(
            ScoreBreakdown(curriculum_alignment=20, expert_verification=40, community_feedback=15)
        )
        assert [r.component for r in rows] == [
            "Curriculum Alignment",
            "Expert Verification",
            "Community Feedback",
        ]
        assert [r.max_score for r in rows] == [40, 40, 20]
        assert [r.percentage for r in rows] == pytest.approx([50.0, 100.0, 75.0])

    def test_zero_scores(self):
        rows = format_score_breakdown(
            ScoreBreakdown(curriculum_alignment=0, expert_verification=10, community_feedback=0)
        )
        assert rows[0].percentage == 0
        assert rows[1].percentage == pytest.approx(25.0)
        assert rows[2].percentage == 0
