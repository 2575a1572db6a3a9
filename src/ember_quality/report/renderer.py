"""Render validation results as a plain-text report."""

from __future__ import annotations

import math
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ember_quality.models.validation import ValidationResult

REPORT_TEMPLATES_DIR = Path(__file__).parent / "templates"


def _percent(part: int, total: int) -> int:
    if total == 0:
        return 0
    return int(math.floor(part / total * 100 + 0.5))


def generate_validation_report(results: list[ValidationResult]) -> str:
    """Summarise validation results, listing every failed question."""
    env = Environment(
        loader=FileSystemLoader(str(REPORT_TEMPLATES_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )
    template = env.get_template("validation_report.txt.j2")

    total = len(results)
    passed = sum(1 for r in results if r.passed)
    failed = total - passed
    return template.render(
        total=total,
        passed=passed,
        failed=failed,
        passed_pct=_percent(passed, total),
        failed_pct=_percent(failed, total),
        auto_corrected=sum(1 for r in results if r.corrected_data),
        failed_results=[r for r in results if not r.passed],
    ).rstrip("\n")


def save_report(report: str, output_path: str | Path) -> Path:
    """Save a report to file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report + "\n", encoding="utf-8")
    return path
