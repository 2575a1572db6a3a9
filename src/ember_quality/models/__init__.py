"""Data models for scoring and validation."""

from ember_quality.models.question import (
    AnswerFormat,
    ComputationalVerification,
    MathQuestion,
    SelfVerification,
    WorkingSteps,
)
from ember_quality.models.scoring import (
    BreakdownRow,
    CommunityStats,
    ErrorReport,
    ErrorReportStatus,
    ReviewStatus,
    ScoreBreakdown,
    ScoreInput,
    ScoreResult,
    ScoreTier,
    TierInfo,
)
from ember_quality.models.validation import (
    BatchValidationResult,
    CheckResult,
    Severity,
    ValidationIssue,
    ValidationResult,
    ValidationWarning,
)

__all__ = [
    "AnswerFormat",
    "BatchValidationResult",
    "BreakdownRow",
    "CheckResult",
    "CommunityStats",
    "ComputationalVerification",
    "ErrorReport",
    "ErrorReportStatus",
    "MathQuestion",
    "ReviewStatus",
    "ScoreBreakdown",
    "ScoreInput",
    "ScoreResult",
    "ScoreTier",
    "SelfVerification",
    "Severity",
    "TierInfo",
    "ValidationIssue",
    "ValidationResult",
    "ValidationWarning",
    "WorkingSteps",
]
