"""Line chart rendering for mood series."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")  # Non-interactive backend, charts go to files
import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import structlog

from .mood_report import MoodPoint

logger = structlog.get_logger()

DEFAULT_TITLE = "30-days moving cumulative mood"
DEFAULT_DATE_FORMAT = "%d/%m/%Y"


def draw_mood_chart(
    points: Sequence[MoodPoint],
    output_path: str | Path,
    title: str = DEFAULT_TITLE,
    date_format: str = DEFAULT_DATE_FORMAT,
    figsize: tuple[float, float] = (10, 5),
    dpi: int = 100,
) -> Path:
    """Save a line chart of mood sums over time.

    Args:
        points: Series as returned by MoodReport, oldest first
        output_path: Image file; the format follows its extension
        title: Chart title
        date_format: strftime format for x axis ticks

    Returns:
        Path of the written image
    """
    if not points:
        raise ValueError("Cannot plot an empty mood series")

    x = [datetime.fromtimestamp(p.timestamp, tz=timezone.utc).astimezone() for p in points]
    y = [p.mood for p in points]

    fig, ax = plt.subplots(figsize=figsize)
    try:
        ax.plot(x, y, marker="o", linewidth=1.5)
        ax.set_title(title)
        ax.set_ylabel("Mood")
        ax.axhline(0, color="grey", linewidth=0.5)
        ax.xaxis.set_major_formatter(mdates.DateFormatter(date_format, tz=x[0].tzinfo))
        fig.autofmt_xdate()

        output_path = Path(output_path).expanduser()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)

    logger.info("plot_saved", path=str(output_path), points=len(points))
    return output_path
