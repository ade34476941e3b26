"""
examprep CLI.

Commands:
    examprep add-card      - Add a memorized item
    examprep due           - Items due for review
    examprep review ID N   - Record a review with recall score N (0-5)
    examprep add-test      - Record a completed test
    examprep check-in      - Daily login, keeps the streak alive
    examprep progress      - XP, level, streak, weak areas, subject accuracy
    examprep series        - Test scores in chronological order
"""
from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from examprep.config import get_settings
from examprep.core.errors import ExamPrepError
from examprep.core.models import MemorizedItem, TestRecord, utcnow
from examprep.db.state_store import StateStore
from examprep.progress.aggregator import ProgressAggregator
from examprep.progress.gamification import ActivityKind
from examprep.study.review_service import ReviewService

console = Console()

app = typer.Typer(
    name="examprep",
    help="Spaced-repetition review and progress tracking",
    no_args_is_help=True,
)

@app.callback()
def main_callback(
    ctx: typer.Context,
    db: Optional[Path] = typer.Option(
        None, "--db", help="State database path (defaults to EXAMPREP_STATE_DB_PATH)"
    ),
) -> None:
    """Spaced-repetition review and progress tracking."""
    ctx.obj = {"db_path": db}


def _open_store(ctx: typer.Context) -> StateStore:
    db_path = (ctx.obj or {}).get("db_path")
    return StateStore(db_path or get_settings().state_db_path)


def _fail(error: ExamPrepError) -> None:
    console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(code=1)


def _format_progress_bar(score: float, width: int = 10) -> str:
    """Format a progress bar."""
    filled = int(score / 100 * width)
    return "#" * filled + "-" * (width - filled)


@app.command("add-card")
def add_card(
    ctx: typer.Context,
    subject: str = typer.Option(..., "--subject", "-s"),
    topic: str = typer.Option(..., "--topic", "-t"),
    question: str = typer.Option(..., "--question", "-q"),
    answer: str = typer.Option(..., "--answer", "-a"),
) -> None:
    """Add a memorized item, due immediately."""
    settings = get_settings()
    store = _open_store(ctx)
    try:
        item = MemorizedItem(
            question=question,
            answer=answer,
            subject=subject,
            topic=topic,
            ease_factor=settings.default_ease_factor,
        )
        store.add_item(item)
        service = ReviewService.from_settings(settings)
        progress = store.get_progress()
        service.ledger.record_activity(progress, ActivityKind.FLASHCARDS_CREATED)
        store.save_progress(progress)
    finally:
        store.close()

    console.print(f"[green]Added[/green] card {item.id}: {subject}/{topic}")


@app.command("due")
def show_due(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum cards to show"),
) -> None:
    """List cards due for review, most overdue first."""
    settings = get_settings()
    store = _open_store(ctx)
    try:
        service = ReviewService.from_settings(settings)
        due = service.scheduler.due_items(
            store.list_items(), limit=limit or settings.due_limit
        )
    finally:
        store.close()

    if not due:
        console.print("[green]All caught up![/green]")
        return

    table = Table(title="Due Reviews")
    table.add_column("ID", justify="right")
    table.add_column("Subject")
    table.add_column("Topic")
    table.add_column("Question")
    table.add_column("Interval", justify="right")

    for item in due:
        table.add_row(
            str(item.id), item.subject, item.topic, item.question, f"{item.interval_days}d"
        )

    console.print(table)


@app.command("review")
def review(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="Card id"),
    score: int = typer.Argument(..., help="Recall quality 0-5"),
) -> None:
    """Record a review and reschedule the card."""
    store = _open_store(ctx)
    try:
        service = ReviewService.from_settings(get_settings())
        item = store.get_item(item_id)
        progress = store.get_progress()
        weak_areas = store.get_weak_areas()

        outcome = service.review(item, score, progress, weak_areas)

        store.save_item(outcome.item)
        store.save_weak_areas(outcome.weak_areas)
        store.save_progress(outcome.progress)
    except ExamPrepError as e:
        _fail(e)
    finally:
        store.close()

    console.print(
        f"[cyan]Next review[/cyan] in {outcome.item.interval_days} day(s): "
        f"{outcome.item.next_review_at:%Y-%m-%d %H:%M}"
    )
    if outcome.weak_area is not None:
        console.print(
            f"[yellow]Weak area[/yellow] {outcome.weak_area.subject}/{outcome.weak_area.topic} "
            f"({outcome.weak_area.attempts} misses)"
        )


@app.command("add-test")
def add_test(
    ctx: typer.Context,
    subject: str = typer.Option(..., "--subject", "-s"),
    topic: str = typer.Option(..., "--topic", "-t"),
    questions: int = typer.Option(..., "--questions", help="Number of questions"),
    correct: Optional[int] = typer.Option(None, "--correct", help="Correct answers, if graded"),
    taken_at: Optional[datetime] = typer.Option(None, "--at", help="When the test was taken"),
) -> None:
    """Record a completed test."""
    store = _open_store(ctx)
    try:
        record = TestRecord(
            subject=subject,
            topic=topic,
            questions_count=questions,
            correct_answers=correct,
            created_at=taken_at or utcnow(),
        )
        record = store.add_test_record(record)
        service = ReviewService.from_settings(get_settings())
        progress = service.complete_test(store.get_progress(), record)
        store.save_progress(progress)
    except ExamPrepError as e:
        _fail(e)
    finally:
        store.close()

    console.print(f"[green]Recorded[/green] test {record.id}: {subject}/{topic}")


@app.command("check-in")
def check_in(ctx: typer.Context) -> None:
    """Record today's activity for the streak."""
    store = _open_store(ctx)
    try:
        service = ReviewService.from_settings(get_settings())
        progress = service.check_in(store.get_progress())
        store.save_progress(progress)
    finally:
        store.close()

    console.print(f"[bold yellow]Streak:[/bold yellow] {progress.streak} day(s)")


@app.command("progress")
def show_progress(ctx: typer.Context) -> None:
    """Show XP, level, streak, weak areas and accuracy by subject."""
    settings = get_settings()
    store = _open_store(ctx)
    try:
        aggregator = ProgressAggregator(recent_limit=settings.recent_tests_limit)
        summary = aggregator.summary(
            store.get_progress(), store.get_weak_areas(), store.list_test_records()
        )
    finally:
        store.close()

    content = Text()
    content.append(f"Level {summary.level}", style="bold")
    content.append(f"  XP {summary.xp}/{settings.xp_per_level}\n")
    content.append(f"Streak: {summary.streak} day(s)\n", style="yellow")
    console.print(Panel(content, title="[bold]Progress[/bold]", border_style="blue"))

    if summary.subject_accuracy:
        table = Table(title="Accuracy by Subject")
        table.add_column("Subject")
        table.add_column("Accuracy")
        table.add_column("Questions", justify="right")
        for row in summary.subject_accuracy:
            pct = row.accuracy * 100
            table.add_row(
                row.subject, f"{_format_progress_bar(pct)} {pct:.0f}%", str(row.total_questions)
            )
        console.print(table)

    if summary.weak_areas:
        table = Table(title="Weak Areas")
        table.add_column("Subject")
        table.add_column("Topic")
        table.add_column("Accuracy", justify="right")
        table.add_column("Attempts", justify="right")
        for area in summary.weak_areas:
            table.add_row(area.subject, area.topic, f"{area.accuracy:.0%}", str(area.attempts))
        console.print(table)


@app.command("series")
def show_series(ctx: typer.Context) -> None:
    """Show test scores in the order they were taken."""
    store = _open_store(ctx)
    try:
        points = list(ProgressAggregator().performance_series(store.list_test_records()))
    finally:
        store.close()

    if not points:
        console.print("[dim]No tests recorded yet.[/dim]")
        return

    table = Table(title="Performance Over Time")
    table.add_column("Test", justify="right")
    table.add_column("Topic")
    table.add_column("Score", justify="right")
    for point in points:
        table.add_row(f"Test {point.index}", point.label, f"{point.value:.0f}%")
    console.print(table)


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """CLI entry point."""
    settings = get_settings()

    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<level>{message}</level>",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="10 MB", retention=5)

    app()


if __name__ == "__main__":
    main()
