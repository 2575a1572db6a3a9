"""CLI interface using typer + rich."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ember_quality.config import load_config
from ember_quality.models.question import MathQuestion
from ember_quality.models.scoring import ScoreInput
from ember_quality.report.renderer import generate_validation_report, save_report
from ember_quality.scoring.display import format_score_breakdown, get_tier_info
from ember_quality.scoring.ember_score import calculate_score
from ember_quality.storage.results_store import ResultsStore
from ember_quality.validation.pipeline import BatchSizeError, validate_batch

app = typer.Typer(
    name="ember-quality",
    help="Ember Score calculation and math question validation",
    no_args_is_help=True,
)
console = Console()

TIER_STYLES = {"blue": "bold blue", "green": "bold green", "gray": "dim"}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_records(file: Path) -> list[dict[str, Any]]:
    if not file.exists():
        console.print(f"[red]File not found: {escape(str(file))}[/red]")
        raise typer.Exit(1)
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {escape(str(file))}: {e}[/red]")
        raise typer.Exit(1)
    records = data if isinstance(data, list) else [data]
    if not all(isinstance(r, dict) for r in records):
        console.print("[red]Expected a JSON object or a list of objects[/red]")
        raise typer.Exit(1)
    return records


@app.command()
def score(
    file: Path = typer.Argument(help="JSON file with one content item or a list"),
    save: bool = typer.Option(False, "--save", help="Cache scores in the results store"),
    detail: bool = typer.Option(False, "--detail", "-d", help="Show per-component breakdown"),
) -> None:
    """Calculate Ember Scores for content items."""
    config = load_config()
    try:
        items = [ScoreInput.model_validate(r) for r in _load_records(file)]
    except ValidationError as e:
        console.print(f"[red]Invalid content item: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title="Ember Scores")
    table.add_column("ID")
    table.add_column("Score", justify="right")
    table.add_column("Tier")
    table.add_column("Curriculum", justify="right")
    table.add_column("Expert", justify="right")
    table.add_column("Community", justify="right")

    store = ResultsStore(config.store.resolved_db_path) if save else None
    for i, item in enumerate(items, 1):
        result = calculate_score(
            item,
            verified_threshold=config.scoring.verified_threshold,
            confident_threshold=config.scoring.confident_threshold,
        )
        info = get_tier_info(result.tier)
        b = result.breakdown
        table.add_row(
            item.id or f"#{i}",
            str(result.score),
            f"[{TIER_STYLES.get(info.color, '')}]{info.label}[/] {'🔥' * info.flames}",
            str(b.curriculum_alignment),
            str(b.expert_verification),
            f"{b.community_feedback:g}",
        )
        if detail:
            rows = format_score_breakdown(b)
            lines = [f"{r.component}: {r.score:g}/{r.max_score} ({r.percentage:.0f}%)" for r in rows]
            console.print(Panel("\n".join(lines), title=f"{item.id or f'#{i}'}: {info.description}"))
        if store is not None:
            if item.id:
                store.save_score(item.id, result)
            else:
                console.print(f"[yellow]Item #{i} has no id, not saved[/yellow]")

    console.print(table)


@app.command()
def validate(
    file: Path = typer.Argument(help="JSON file with one question or a list"),
    report: Path = typer.Option(None, "--report", "-r", help="Write a text report to this path"),
    save: bool = typer.Option(False, "--save", help="Record results in the results store"),
    show_checks: bool = typer.Option(False, "--checks", help="List every check per question"),
) -> None:
    """Validate authored math questions."""
    config = load_config()
    try:
        questions = [MathQuestion.model_validate(r) for r in _load_records(file)]
    except ValidationError as e:
        console.print(f"[red]Invalid question: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        batch = validate_batch(
            questions,
            max_batch_size=config.validation.max_batch_size,
            tolerance=config.validation.tolerance,
            computational_subject=config.validation.computational_subject,
        )
    except BatchSizeError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    results = batch.results

    table = Table(title="Validation Results")
    table.add_column("Question")
    table.add_column("Result")
    table.add_column("Errors", justify="right")
    table.add_column("Warnings", justify="right")
    table.add_column("Auto-fix")
    for result in results:
        table.add_row(
            result.question_id or "<unnamed>",
            "[green]PASS[/green]" if result.passed else "[red]FAIL[/red]",
            str(len(result.errors)),
            str(len(result.warnings)),
            ", ".join(f"{k}={v}" for k, v in (result.corrected_data or {}).items()),
        )
    console.print(table)

    for result in results:
        if show_checks:
            lines = [
                f"{'[green]✓[/green]' if c.passed else '[red]✗[/red]'} "
                f"{c.check_name} [dim]({c.severity.value})[/dim]: {escape(c.details)}"
                for c in result.checks
            ]
            console.print(Panel("\n".join(lines), title=result.question_id or "<unnamed>"))
        elif not result.passed:
            for error in result.errors:
                console.print(f"  [red]- {escape(f'[{error.code}]')}[/red] {escape(error.message)}", highlight=False)

    if report:
        path = save_report(generate_validation_report(results), report)
        console.print(f"[green]Report saved: {path}[/green]")

    if save:
        store = ResultsStore(config.store.resolved_db_path)
        for result in results:
            store.save_validation(result)
        console.print(f"[green]{len(results)} results recorded[/green]")

    if batch.failed:
        raise typer.Exit(2)


@app.command()
def history(
    question_id: str = typer.Option(None, "--question-id", "-q", help="Only this question"),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum rows"),
) -> None:
    """Show recorded validation runs."""
    config = load_config()
    store = ResultsStore(config.store.resolved_db_path)
    results = store.get_validations(question_id=question_id, limit=limit)
    if not results:
        console.print("[yellow]No validation runs recorded.[/yellow]")
        return

    table = Table(title="Validation History")
    table.add_column("Question")
    table.add_column("Result")
    table.add_column("Failed checks")
    for result in results:
        failed = [c.check_name for c in result.checks if not c.passed]
        table.add_row(
            result.question_id or "<unnamed>",
            "[green]PASS[/green]" if result.passed else "[red]FAIL[/red]",
            ", ".join(failed) or "-",
        )
    console.print(table)


@app.command()
def stats() -> None:
    """Show aggregate validation and score statistics."""
    config = load_config()
    s = ResultsStore(config.store.resolved_db_path).stats()
    tiers = ", ".join(f"{k}: {v}" for k, v in s["tiers"].items())
    avg = s["avg_score"] if s["avg_score"] is not None else "-"
    console.print(Panel(
        f"Validations: {s['total_validations']} "
        f"({s['questions_validated']} questions, {s['pass_rate']:.1f}% passed)\n"
        f"Auto-corrected: {s['auto_corrected']}\n"
        f"Scored questions: {s['scored_questions']} ({tiers})\n"
        f"Average score: {avg}",
        title="Ember Quality Stats",
        border_style="blue",
    ))


if __name__ == "__main__":
    app()
