"""Shared enums and types for howdy."""

from enum import StrEnum


class MoodReportKind(StrEnum):
    MONTHLY = "monthly"
    YEARLY = "yearly"
    WEEKLY_ITERATIVE = "weekly-iterative"
    SEVEN_DAYS_ITERATIVE = "seven-days-iterative"
    MONTHLY_ITERATIVE = "monthly-iterative"
    THIRTY_DAYS_ITERATIVE = "thirty-days-iterative"
    MOVING_MONTHLY = "moving-monthly"

    @property
    def is_series(self) -> bool:
        """True for reports that produce a timestamped series (plottable)."""
        return self not in (MoodReportKind.MONTHLY, MoodReportKind.YEARLY)


# Short forms accepted by the CLI
MOOD_REPORT_ALIASES = {
    "m": MoodReportKind.MONTHLY,
    "y": MoodReportKind.YEARLY,
    "w": MoodReportKind.WEEKLY_ITERATIVE,
    "7d": MoodReportKind.SEVEN_DAYS_ITERATIVE,
    "mi": MoodReportKind.MONTHLY_ITERATIVE,
    "30d": MoodReportKind.THIRTY_DAYS_ITERATIVE,
    "mm": MoodReportKind.MOVING_MONTHLY,
}


class ExportFormat(StrEnum):
    XLSX = "xlsx"
    JSON = "json"
