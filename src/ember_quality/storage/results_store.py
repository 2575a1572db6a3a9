"""SQLite-backed store for validation results and cached Ember Scores."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from pathlib import Path

from ember_quality.models.scoring import ScoreBreakdown, ScoreResult, ScoreTier
from ember_quality.models.validation import (
    CheckResult,
    ValidationIssue,
    ValidationResult,
    ValidationWarning,
)

DEFAULT_DB_PATH = Path.home() / ".ember-quality" / "results.db"


class ResultsStore:
    """SQLite-backed store with WAL mode.

    Validation runs are appended; scores keep only the latest result per
    question since a score is always re-derivable from current inputs.
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS question_validations (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    question_id TEXT NOT NULL,
                    validated_at TEXT NOT NULL,
                    passed INTEGER NOT NULL,
                    checks TEXT NOT NULL,
                    errors TEXT NOT NULL,
                    warnings TEXT NOT NULL,
                    auto_corrected INTEGER NOT NULL DEFAULT 0,
                    corrections_applied TEXT
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS ember_scores (
                    question_id TEXT PRIMARY KEY,
                    score INTEGER NOT NULL,
                    tier TEXT NOT NULL,
                    breakdown TEXT NOT NULL,
                    calculated_at TEXT NOT NULL
                )
            """)

    def save_validation(self, result: ValidationResult) -> None:
        """Append a validation run."""
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO question_validations
                   (question_id, validated_at, passed, checks, errors, warnings,
                    auto_corrected, corrections_applied)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    result.question_id,
                    datetime.now().isoformat(),
                    1 if result.passed else 0,
                    json.dumps([c.model_dump(mode="json") for c in result.checks]),
                    json.dumps([e.model_dump(mode="json") for e in result.errors]),
                    json.dumps([w.model_dump(mode="json") for w in result.warnings]),
                    1 if result.corrected_data else 0,
                    json.dumps(result.corrected_data) if result.corrected_data else None,
                ),
            )

    def get_validations(
        self,
        question_id: str | None = None,
        limit: int = 50,
    ) -> list[ValidationResult]:
        """Most recent validation runs first, optionally for one question."""
        with self._connect() as conn:
            if question_id is not None:
                rows = conn.execute(
                    """SELECT question_id, passed, checks, errors, warnings, corrections_applied
                       FROM question_validations WHERE question_id = ?
                       ORDER BY id DESC LIMIT ?""",
                    (question_id, limit),
                ).fetchall()
            else:
                rows = conn.execute(
                    """SELECT question_id, passed, checks, errors, warnings, corrections_applied
                       FROM question_validations ORDER BY id DESC LIMIT ?""",
                    (limit,),
                ).fetchall()
        return [self._row_to_validation(row) for row in rows]

    def save_score(self, question_id: str, result: ScoreResult) -> None:
        """Cache the latest score for a question."""
        with self._connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO ember_scores
                   (question_id, score, tier, breakdown, calculated_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    question_id,
                    result.score,
                    result.tier.value,
                    result.breakdown.model_dump_json(),
                    result.calculated_at.isoformat(),
                ),
            )

    def get_score(self, question_id: str) -> ScoreResult | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT score, tier, breakdown, calculated_at FROM ember_scores WHERE question_id = ?",
                (question_id,),
            ).fetchone()
        if row is None:
            return None
        return ScoreResult(
            score=row[0],
            tier=ScoreTier(row[1]),
            breakdown=ScoreBreakdown.model_validate_json(row[2]),
            calculated_at=datetime.fromisoformat(row[3]),
        )

    def stats(self) -> dict:
        """Aggregate counts across stored validations and scores."""
        with self._connect() as conn:
            v = conn.execute(
                """SELECT
                       COUNT(*),
                       SUM(CASE WHEN passed = 1 THEN 1 ELSE 0 END),
                       SUM(auto_corrected),
                       COUNT(DISTINCT question_id)
                   FROM question_validations"""
            ).fetchone()
            tiers = dict(
                conn.execute("SELECT tier, COUNT(*) FROM ember_scores GROUP BY tier").fetchall()
            )
            avg_score = conn.execute("SELECT AVG(score) FROM ember_scores").fetchone()[0]
        total = v[0] or 0
        return {
            "total_validations": total,
            "passed_validations": v[1] or 0,
            "auto_corrected": v[2] or 0,
            "questions_validated": v[3] or 0,
            "pass_rate": (v[1] / total * 100) if total else 0.0,
            "scored_questions": sum(tiers.values()),
            "tiers": {t.value: tiers.get(t.value, 0) for t in ScoreTier},
            "avg_score": round(avg_score, 1) if avg_score is not None else None,
        }

    @staticmethod
    def _row_to_validation(row: tuple) -> ValidationResult:
        return ValidationResult(
            question_id=row[0],
            passed=bool(row[1]),
            checks=[CheckResult.model_validate(c) for c in json.loads(row[2])],
            errors=[ValidationIssue.model_validate(e) for e in json.loads(row[3])],
            warnings=[ValidationWarning.model_validate(w) for w in json.loads(row[4])],
            corrected_data=json.loads(row[5]) if row[5] else None,
        )
