"""Pydantic models for authored math questions."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class AnswerFormat(str, Enum):
    INTEGER = "integer"
    DECIMAL = "decimal"
    PERCENTAGE = "percentage"
    FRACTION = "fraction"
    MIXED_NUMBER = "mixed_number"
    MIXED_NUMBER_UNSIMPLIFIED = "mixed_number_unsimplified"
    RATIO = "ratio"


FRACTION_FORMATS = frozenset(
    {
        AnswerFormat.FRACTION.value,
        AnswerFormat.MIXED_NUMBER.value,
        AnswerFormat.MIXED_NUMBER_UNSIMPLIFIED.value,
    }
)
MIXED_NUMBER_FORMATS = frozenset(
    {
        AnswerFormat.MIXED_NUMBER.value,
        AnswerFormat.MIXED_NUMBER_UNSIMPLIFIED.value,
    }
)


class ComputationalVerification(BaseModel):
    """Authoring-time self-check attached to a question."""

    expression: str | None = None
    expected_result: str = ""
    result_format: str = "decimal"  # fraction | decimal | integer

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class WorkingSteps(BaseModel):
    computed_result: str = ""
    final_calculation: str = ""

    # step_1, step_2, ... are kept as extra fields
    model_config = {"alias_generator": to_camel, "populate_by_name": True, "extra": "allow"}


class SelfVerification(BaseModel):
    computed_answer_matches_option: bool = False
    matched_option_value: str = ""
    verification_status: str = "VERIFIED"  # VERIFIED | MISMATCH | ANSWER_NOT_IN_OPTIONS

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class MathQuestion(BaseModel):
    question_id: str = ""
    subject: str = "Mathematics"
    topic: str = ""
    subtopic: str = ""
    difficulty: str = "Standard"  # Foundation | Standard | Challenge
    year_group: str = ""
    question_text: str = ""
    working: WorkingSteps = Field(default_factory=WorkingSteps)
    answer_format: str  # see AnswerFormat; unknown formats parse as decimals
    computed_answer: str
    options: dict[str, str] = {}
    correct_option: str = ""
    verification: SelfVerification = Field(default_factory=SelfVerification)
    computational_verification: ComputationalVerification | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
