"""Pydantic models for Ember Score input and output."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ReviewStatus(str, Enum):
    REVIEWED = "reviewed"
    SPOT_CHECKED = "spot_checked"
    AI_ONLY = "ai_only"


class ScoreTier(str, Enum):
    VERIFIED = "verified"
    CONFIDENT = "confident"
    DRAFT = "draft"


class ErrorReportStatus(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class CommunityStats(BaseModel):
    helpful_count: int = Field(default=0, ge=0)
    practice_count: int = Field(default=0, ge=0)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class ErrorReport(BaseModel):
    status: str  # pending | resolved | dismissed, anything else is ignored

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class ScoreInput(BaseModel):
    """A content item as seen by the score engine."""

    id: str | None = None
    curriculum_reference: str | None = None
    review_status: str | None = None  # see ReviewStatus; unknown values score the baseline
    community_stats: CommunityStats | None = None
    error_reports: list[ErrorReport] | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class ScoreBreakdown(BaseModel):
    curriculum_alignment: int = Field(ge=0, le=40)
    expert_verification: int = Field(ge=0, le=40)
    community_feedback: float = Field(ge=0, le=20)

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}

    @property
    def total(self) -> float:
        return self.curriculum_alignment + self.expert_verification + self.community_feedback


class ScoreResult(BaseModel):
    score: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown
    tier: ScoreTier
    calculated_at: datetime = Field(default_factory=datetime.now)

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}


class TierInfo(BaseModel):
    label: str
    description: str
    color: str
    flames: int

    model_config = {"frozen": True}


class BreakdownRow(BaseModel):
    component: str
    score: float
    max_score: int
    percentage: float

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}
