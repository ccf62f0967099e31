"""Mood aggregates over decoded daily scores."""

from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, NamedTuple, Sequence

import structlog

from shared_types import MoodReportKind

from .record import DailyScore
from .timebuckets import (
    local_date,
    most_recent_monday,
    shift_month,
    start_of_month,
    start_of_next_day,
    unix_seconds,
)

logger = structlog.get_logger()


class MoodPoint(NamedTuple):
    """Sum of scores for one bucket, stamped with the bucket's end (unix seconds)."""

    timestamp: int
    mood: int


class MoodReport:
    """Aggregate mood sums over a fixed list of entries.

    Every aggregate takes the report instant `now` explicitly; calendar dates
    ("today", day and month starts) are taken in now's UTC offset. Series are
    returned oldest first.
    """

    def __init__(self, daily_scores: Sequence[DailyScore], tags: Iterable[str] = ()):
        """
        Args:
            daily_scores: Decoded entries, in any order
            tags: Required tags; an entry counts only if it has all of them
        """
        self.daily_scores = daily_scores
        self.tags = frozenset(tags)

    def _filtered(self) -> Iterator[DailyScore]:
        return (s for s in self.daily_scores if s.has_tags(self.tags))

    def _sum_between(self, first: date, last: date, now: datetime) -> int:
        return sum(
            s.score for s in self._filtered() if first <= local_date(s.timestamp, now.tzinfo) <= last
        )

    # --- fixed windows ---

    def window_sum(self, days_back: int, now: datetime) -> int:
        """Sum of scores dated within the last `days_back` calendar days, today included."""
        cutoff = now.date() - timedelta(days=days_back - 1)
        return sum(s.score for s in self._filtered() if local_date(s.timestamp, now.tzinfo) >= cutoff)

    def thirty_days_mood(self, now: datetime) -> int:
        return self.window_sum(30, now)

    def yearly_mood(self, now: datetime) -> int:
        return self.window_sum(365, now)

    # --- sliding window ---

    def moving_window_histogram(
        self,
        start_days_ago: int,
        end_days_ago: int,
        frame_size: int,
        now: datetime,
    ) -> list[MoodPoint]:
        """Day-stepped overlapping frames.

        One point per frame end from `start_days_ago` down to `end_days_ago`
        (inclusive). Each frame covers the calendar dates
        [frame_end - frame_size, frame_end].
        """
        today = now.date()
        points = []
        for frame_end in range(start_days_ago, end_days_ago - 1, -1):
            last = today - timedelta(days=frame_end)
            first = last - timedelta(days=frame_size)
            points.append(
                MoodPoint(
                    unix_seconds(now - timedelta(days=frame_end)),
                    self._sum_between(first, last, now),
                )
            )
        return points

    def thirty_days_moving_mood(self, now: datetime) -> list[MoodPoint]:
        return self.moving_window_histogram(29, 0, 29, now)

    # --- back-to-back periods ---

    def iterative_period_mood(self, report_end: datetime, period: timedelta) -> list[MoodPoint]:
        """Sum scores into consecutive periods of equal length ending at `report_end`.

        Bucket i holds entries with report_end - (i + 1) * period <= t < report_end - i * period.
        Its timestamp is recomputed from each entry added to it as
        `entry + elapsed % period`: the period end for an entry inside the period,
        the entry itself for one exactly on the older boundary. Back-filled buckets
        keep the scheduled report_end - i * period. Entries at or after report_end
        are ignored, and empty periods between the oldest entry and report_end are
        kept with a zero sum.
        """
        period_seconds = int(period.total_seconds())
        if period_seconds <= 0:
            raise ValueError(f"Period must be positive, got {period}")

        end = unix_seconds(report_end)
        buckets: list[list[int]] = []
        for score in self._filtered():
            elapsed = end - unix_seconds(score.timestamp)
            if elapsed <= 0:
                continue

            index = (elapsed - 1) // period_seconds
            while len(buckets) <= index:
                buckets.append([end - len(buckets) * period_seconds, 0])
            buckets[index][1] += score.score
            buckets[index][0] = unix_seconds(score.timestamp) + elapsed % period_seconds

        return [MoodPoint(ts, mood) for ts, mood in reversed(buckets)]

    def iterative_weekly_mood(self, now: datetime) -> list[MoodPoint]:
        """Calendar weeks (Monday to Monday), the current week excluded."""
        return self.iterative_period_mood(most_recent_monday(now), timedelta(weeks=1))

    def iterative_days_mood(self, days: int, now: datetime) -> list[MoodPoint]:
        """Periods of `days` days ending with today."""
        return self.iterative_period_mood(start_of_next_day(now), timedelta(days=days))

    def iterative_seven_days_mood(self, now: datetime) -> list[MoodPoint]:
        return self.iterative_days_mood(7, now)

    def iterative_thirty_days_mood(self, now: datetime) -> list[MoodPoint]:
        return self.iterative_days_mood(30, now)

    def iterative_monthly_mood(self, now: datetime) -> list[MoodPoint]:
        """Calendar months, the current month excluded.

        Each point is stamped with the first instant of the following month,
        i.e. the boundary where the summed month ended.
        """
        current_month = start_of_month(now)

        sums: dict[datetime, int] = defaultdict(int)
        for score in self._filtered():
            local = score.timestamp.astimezone(now.tzinfo)
            if local >= current_month:
                continue
            sums[start_of_month(local)] += score.score

        if not sums:
            return []

        oldest = min(sums)
        points = []
        month_end = current_month
        while month_end > oldest:
            month = shift_month(month_end, -1)
            points.append(MoodPoint(unix_seconds(month_end), sums.get(month, 0)))
            month_end = month

        points.reverse()
        return points

    # --- dispatch ---

    def report(self, kind: MoodReportKind, now: datetime) -> int | list[MoodPoint]:
        """Compute the report of the given kind as of `now`."""
        reports = {
            MoodReportKind.MONTHLY: self.thirty_days_mood,
            MoodReportKind.YEARLY: self.yearly_mood,
            MoodReportKind.WEEKLY_ITERATIVE: self.iterative_weekly_mood,
            MoodReportKind.SEVEN_DAYS_ITERATIVE: self.iterative_seven_days_mood,
            MoodReportKind.MONTHLY_ITERATIVE: self.iterative_monthly_mood,
            MoodReportKind.THIRTY_DAYS_ITERATIVE: self.iterative_thirty_days_mood,
            MoodReportKind.MOVING_MONTHLY: self.thirty_days_moving_mood,
        }
        result = reports[MoodReportKind(kind)](now)
        logger.debug(
            "mood_report_computed",
            kind=str(kind),
            entries=len(self.daily_scores),
            tags=sorted(self.tags),
        )
        return result
