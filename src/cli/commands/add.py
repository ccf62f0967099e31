"""Add daily score CLI command."""

import click
import structlog
from rich.console import Console

from cli.utils import fail, get_components, parse_instant
from journal.record import SCORE_MAX, SCORE_MIN, DailyScore
from journal.storage import JournalError

console = Console()
logger = structlog.get_logger()


@click.command(context_settings={"ignore_unknown_options": True})
@click.option("-t", "--tag", "tags", multiple=True, help="Tag the entry (repeatable)")
@click.option("--at", "at", help="Entry date/time (ISO 8601, defaults to now)")
@click.argument("score", type=click.IntRange(SCORE_MIN, SCORE_MAX))
@click.argument("comment", nargs=-1)
@click.pass_obj
def add(obj: dict, tags: tuple[str, ...], at: str, score: int, comment: tuple[str, ...]):
    """Append today's SCORE with an optional COMMENT to the journal."""
    c = get_components(obj)
    now = parse_instant(at)

    try:
        daily_score = DailyScore.create(
            score,
            comment=" ".join(comment) if comment else None,
            tags=tags,
            now=now,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    try:
        path = c["storage"].append(daily_score)
    except JournalError as e:
        fail(str(e), e)

    logger.info("daily_score_added", score=score, tags=sorted(daily_score.tags))
    console.print(f"[green]Added:[/] {score} to {path}")
