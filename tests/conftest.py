"""Shared test fixtures."""

from __future__ import annotations

import pytest

from ember_quality.models.question import (
    ComputationalVerification,
    MathQuestion,
    SelfVerification,
    WorkingSteps,
)
from ember_quality.models.scoring import CommunityStats, ErrorReport, ScoreInput


def make_question(**overrides) -> MathQuestion:
    """A fully consistent mixed-number question, with field overrides."""
    data = dict(
        question_id="maths-y6-frac-001",
        subject="Mathematics",
        topic="Fractions",
        subtopic="Adding fractions",
        difficulty="Standard",
        year_group="Year 6",
        question_text="What is 3/5 + 4/7? Give your answer as a mixed number.",
        working=WorkingSteps(
            step_1="Common denominator 35",
            step_2="21/35 + 20/35",
            final_calculation="21/35 + 20/35 = 41/35",
            computed_result="41/35",
        ),
        answer_format="mixed_number",
        computed_answer="1 6/35",
        options={"a": "1 6/35", "b": "7/12", "c": "1 1/5", "d": "41/70", "e": "1 5/35"},
        correct_option="a",
        verification=SelfVerification(
            computed_answer_matches_option=True,
            matched_option_value="1 6/35",
            verification_status="VERIFIED",
        ),
        computational_verification=ComputationalVerification(
            expression="3/5 + 4/7",
            expected_result="Fraction(41, 35)",
            result_format="fraction",
        ),
    )
    data.update(overrides)
    return MathQuestion(**data)


@pytest.fixture
def mixed_number_question() -> MathQuestion:
    return make_question()


@pytest.fixture
def decimal_question() -> MathQuestion:
    return make_question(
        question_id="maths-y5-dec-002",
        topic="Decimals",
        question_text="What is 2.5 x 1.2?",
        working=WorkingSteps(final_calculation="2.5 x 1.2 = 3", computed_result="3"),
        answer_format="decimal",
        computed_answer="3",
        options={"a": "3", "b": "3.5", "c": "2.7", "d": "30", "e": "0.3"},
        correct_option="a",
        computational_verification=ComputationalVerification(
            expression="2.5 * 1.2",
            expected_result="3.0",
            result_format="decimal",
        ),
    )


@pytest.fixture
def question_json() -> dict:
    """A question as it arrives from the authoring pipeline (snake_case JSON)."""
    return {
        "question_id": "maths-y4-pct-003",
        "subject": "Mathematics",
        "topic": "Percentages",
        "subtopic": "Percentage of an amount",
        "difficulty": "Foundation",
        "year_group": "Year 4",
        "question_text": "What is 0.45 as a percentage?",
        "working": {"step_1": "0.45 x 100", "final_calculation": "45", "computed_result": "45"},
        "answer_format": "percentage",
        "computed_answer": "45%",
        "options": {"a": "4.5%", "b": "45%", "c": "450%", "d": "0.45%", "e": "54%"},
        "correct_option": "b",
        "verification": {
            "computed_answer_matches_option": True,
            "matched_option_value": "45%",
            "verification_status": "VERIFIED",
        },
        "computational_verification": {
            "expression": "0.45 * 100",
            "expected_result": "45",
            "result_format": "decimal",
        },
    }


@pytest.fixture
def reviewed_item() -> ScoreInput:
    return ScoreInput(
        id="q-reviewed",
        curriculum_reference="KS2 English Y5 Vocabulary",
        review_status="reviewed",
        community_stats=CommunityStats(helpful_count=10, practice_count=1000),
        error_reports=[],
    )


@pytest.fixture
def ai_only_item() -> ScoreInput:
    return ScoreInput(
        id="q-ai",
        curriculum_reference=None,
        review_status="ai_only",
        community_stats=CommunityStats(helpful_count=10, practice_count=500),
        error_reports=[ErrorReport(status="resolved")],
    )


@pytest.fixture
def question_factory():
    return make_question
