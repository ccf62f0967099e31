"""Mood report CLI command."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import click
import structlog
from rich.console import Console
from rich.table import Table

from cli.utils import fail, get_components, parse_instant
from journal.mood_report import MoodReport
from journal.storage import JournalError
from shared_types import MOOD_REPORT_ALIASES, MoodReportKind

console = Console()
logger = structlog.get_logger()

CAPTIONS = {
    MoodReportKind.MONTHLY: "30-days mood:",
    MoodReportKind.YEARLY: "365-days mood:",
    MoodReportKind.MONTHLY_ITERATIVE: "monthly moods:",
    MoodReportKind.WEEKLY_ITERATIVE: "weekly moods:",
    MoodReportKind.SEVEN_DAYS_ITERATIVE: "weekly moods:",
    MoodReportKind.THIRTY_DAYS_ITERATIVE: "thirty day intervals moods:",
    MoodReportKind.MOVING_MONTHLY: "30-days moving mood:",
}

MOOD_STYLE = {1: "green", 0: "dim", -1: "red"}


def resolve_report_kind(value: str) -> MoodReportKind:
    """Map a report name or its short alias to a MoodReportKind."""
    if value in MOOD_REPORT_ALIASES:
        return MOOD_REPORT_ALIASES[value]
    return MoodReportKind(value)


REPORT_CHOICES = [k.value for k in MoodReportKind] + list(MOOD_REPORT_ALIASES)


@click.command()
@click.argument("kind", type=click.Choice(REPORT_CHOICES))
@click.option("-t", "--tag", "tags", multiple=True, help="Only count entries with this tag (repeatable)")
@click.option("--at", "at", help="Compute the report as of this date/time (ISO 8601)")
@click.option("--plot", "plot_path", type=click.Path(dir_okay=False, path_type=Path), help="Save a chart of the series to this image file")
@click.option("--skip-invalid", is_flag=True, help="Skip unparsable journal lines")
@click.pass_obj
def mood(obj: dict, kind: str, tags: tuple[str, ...], at: Optional[str], plot_path: Optional[Path], skip_invalid: bool):
    """Show mood report KIND computed from the journal."""
    c = get_components(obj)
    report_kind = resolve_report_kind(kind)
    now = parse_instant(at)

    try:
        daily_scores = c["storage"].read(skip_invalid=skip_invalid)
    except JournalError as e:
        fail(str(e), e)

    required_tags = tags or tuple(c["config_model"].mood.default_tags)
    report = MoodReport(daily_scores, tags=required_tags)
    data = report.report(report_kind, now)
    caption = CAPTIONS[report_kind]

    if not report_kind.is_series:
        console.print(f"{caption} {data}", soft_wrap=True, highlight=False, markup=False)
        if plot_path is not None:
            console.print(f"[yellow]Nothing to plot: {report_kind} is a single value.[/]")
        return

    console.print(f"{caption} {[p.mood for p in data]}", soft_wrap=True, highlight=False, markup=False)
    if data:
        _print_series(data, now)

    if plot_path is not None:
        if not data:
            console.print("[yellow]Nothing to plot: no entries in this report.[/]")
            return
        from journal.plot import draw_mood_chart

        plot_cfg = c["config_model"].plot
        try:
            saved = draw_mood_chart(
                data,
                plot_path,
                title=plot_cfg.title,
                date_format=plot_cfg.date_format,
                figsize=(plot_cfg.width, plot_cfg.height),
                dpi=plot_cfg.dpi,
            )
        except OSError as e:
            console.print(f"[yellow]Warning:[/] can't save plot: {e}")
            return
        console.print(f"[green]Plot saved:[/] {saved}")


def _print_series(data, now: datetime) -> None:
    table = Table(show_header=True)
    table.add_column("Until", style="dim")
    table.add_column("Mood", justify="right")

    for point in data:
        until = datetime.fromtimestamp(point.timestamp, tz=timezone.utc).astimezone(now.tzinfo)
        sign = (point.mood > 0) - (point.mood < 0)
        table.add_row(until.strftime("%Y-%m-%d"), f"[{MOOD_STYLE[sign]}]{point.mood:+d}[/]")

    console.print(table)
