"""Tests for mood aggregates."""

from datetime import datetime, timedelta, timezone

import pytest

from journal.mood_report import MoodPoint, MoodReport
from journal.timebuckets import unix_seconds
from shared_types import MoodReportKind

PLUS_TWO = timezone(timedelta(hours=2))
DAY = 24 * 60 * 60
WEEK = 7 * DAY


class TestTagFilter:
    """Tag filter requires all tags."""

    @pytest.fixture
    def report_entries(self, now, make_score):
        return [
            make_score(1, now, tags={"a", "b"}),
            make_score(10, now, tags={"a"}),
            make_score(100, now),
        ]

    @pytest.mark.parametrize(
        "tags,expected",
        [
            ((), 111),
            (("a",), 11),
            (("a", "b"), 1),
            (("a", "c"), 0),
            (("c",), 0),
        ],
    )
    def test_filter(self, report_entries, now, tags, expected):
        report = MoodReport(report_entries, tags=tags)
        assert report.thirty_days_mood(now) == expected

    def test_filter_applies_to_series(self, report_entries, now):
        report = MoodReport(report_entries, tags={"a", "b"})
        assert report.iterative_seven_days_mood(now) == [
            MoodPoint(unix_seconds(datetime(2024, 1, 11, tzinfo=PLUS_TWO)), 1)
        ]


class TestWindowSum:
    """Fixed windows ending today."""

    def test_thirty_days_mood(self, now, make_score):
        report = MoodReport(
            [
                make_score(1, now),
                make_score(2, now - timedelta(days=29)),
                make_score(5, now - timedelta(days=40)),
            ]
        )
        assert report.thirty_days_mood(now) == 3

    def test_boundary_day_is_included(self, now, make_score):
        first_day = datetime(2023, 12, 12, 0, 0, tzinfo=PLUS_TWO)  # today - 29
        day_before = datetime(2023, 12, 11, 23, 59, 59, tzinfo=PLUS_TWO)
        report = MoodReport([make_score(1, first_day), make_score(10, day_before)])
        assert report.window_sum(30, now) == 1

    def test_dates_taken_in_report_offset(self, now, make_score):
        """23:30 UTC on the 9th is already the 10th at +02:00."""
        late_utc = datetime(2024, 1, 9, 23, 30, tzinfo=timezone.utc)
        early_utc = datetime(2024, 1, 9, 21, 30, tzinfo=timezone.utc)
        report = MoodReport([make_score(1, late_utc), make_score(10, early_utc)])
        assert report.window_sum(1, now) == 1

    def test_yearly_mood(self, now, make_score):
        report = MoodReport(
            [
                make_score(1, now),
                make_score(2, now),
                make_score(5, now - timedelta(days=40)),
                make_score(-4, now - timedelta(weeks=55)),
            ]
        )
        assert report.yearly_mood(now) == 8

    def test_empty(self, now):
        assert MoodReport([]).thirty_days_mood(now) == 0


class TestMovingWindow:
    """Day-stepped overlapping frames."""

    def test_thirty_days_moving_mood(self, now, make_score):
        report = MoodReport(
            [
                make_score(1, now),
                make_score(-1, now - timedelta(days=25)),
                make_score(20, now - timedelta(days=90)),
            ]
        )
        points = report.thirty_days_moving_mood(now)

        assert len(points) == 30
        assert [p.mood for p in points] == [0] * 4 + [-1] * 25 + [0]

    def test_points_are_daily_and_end_now(self, now):
        points = MoodReport([]).thirty_days_moving_mood(now)

        assert points[-1].timestamp == unix_seconds(now)
        assert points[0].timestamp == unix_seconds(now - timedelta(days=29))
        assert all(b.timestamp - a.timestamp == DAY for a, b in zip(points, points[1:]))
        assert all(p.mood == 0 for p in points)

    def test_custom_frames(self, now, make_score):
        report = MoodReport([make_score(3, now - timedelta(days=2))])
        # frames of 2 days ending 3, 2, 1 and 0 days ago
        points = report.moving_window_histogram(3, 0, 1, now)
        assert [p.mood for p in points] == [0, 3, 3, 0]


class TestIterativePeriods:
    """Back-to-back periods."""

    def test_weekly_with_gap(self, now, make_score):
        monday = datetime(2024, 1, 8, tzinfo=PLUS_TWO)
        report = MoodReport(
            [
                make_score(1, monday - timedelta(days=1)),
                make_score(2, monday - timedelta(days=2)),
                make_score(4, monday - timedelta(days=15)),
                make_score(100, now),
            ]
        )
        end = unix_seconds(monday)

        assert report.iterative_weekly_mood(now) == [
            MoodPoint(end - 2 * WEEK, 4),
            MoodPoint(end - WEEK, 0),
            MoodPoint(end, 3),
        ]

    def test_entry_on_period_boundary_goes_to_earlier_period(self, now, make_score):
        monday = datetime(2024, 1, 8, tzinfo=PLUS_TWO)
        end = unix_seconds(monday)

        # stamped with the entry itself, the older boundary of the period
        exactly_a_week = MoodReport([make_score(5, monday - timedelta(weeks=1))])
        assert exactly_a_week.iterative_weekly_mood(now) == [MoodPoint(end - WEEK, 5)]

        one_second_more = MoodReport([make_score(5, monday - timedelta(weeks=1, seconds=1))])
        assert one_second_more.iterative_weekly_mood(now) == [
            MoodPoint(end - WEEK, 5),
            MoodPoint(end, 0),
        ]

    def test_bucket_stamp_follows_last_entry_added(self, now, make_score):
        end = unix_seconds(datetime(2024, 1, 11, tzinfo=PLUS_TWO))
        inside = make_score(1, now)
        on_boundary = make_score(2, datetime(2024, 1, 4, tzinfo=PLUS_TWO))

        assert MoodReport([on_boundary, inside]).iterative_seven_days_mood(now) == [
            MoodPoint(end, 3)
        ]
        assert MoodReport([inside, on_boundary]).iterative_seven_days_mood(now) == [
            MoodPoint(end - WEEK, 3)
        ]

    def test_entries_at_or_after_report_end_ignored(self, now, make_score):
        monday = datetime(2024, 1, 8, tzinfo=PLUS_TWO)
        report = MoodReport([make_score(1, monday), make_score(2, now)])
        assert report.iterative_weekly_mood(now) == []

    def test_seven_days(self, now, make_score):
        end = datetime(2024, 1, 11, tzinfo=PLUS_TWO)
        report = MoodReport(
            [
                make_score(1, now),
                make_score(2, datetime(2024, 1, 4, 1, tzinfo=PLUS_TWO)),
                make_score(4, datetime(2024, 1, 3, 23, tzinfo=PLUS_TWO)),
            ]
        )
        assert report.iterative_seven_days_mood(now) == [
            MoodPoint(unix_seconds(end) - WEEK, 4),
            MoodPoint(unix_seconds(end), 3),
        ]

    def test_thirty_days(self, now, make_score):
        end = unix_seconds(datetime(2024, 1, 11, tzinfo=PLUS_TWO))
        report = MoodReport([make_score(1, now), make_score(2, now - timedelta(days=45))])
        assert report.iterative_thirty_days_mood(now) == [
            MoodPoint(end - 30 * DAY, 2),
            MoodPoint(end, 1),
        ]

    def test_unsorted_input(self, now, make_score):
        report = MoodReport(
            [make_score(2, now - timedelta(days=10)), make_score(1, now), make_score(3, now - timedelta(days=9))]
        )
        assert [p.mood for p in report.iterative_seven_days_mood(now)] == [5, 1]

    def test_empty(self, now):
        assert MoodReport([]).iterative_weekly_mood(now) == []
        assert MoodReport([]).iterative_monthly_mood(now) == []

    def test_period_must_be_positive(self, now):
        with pytest.raises(ValueError):
            MoodReport([]).iterative_period_mood(now, timedelta(0))


class TestIterativeMonthly:
    """Calendar month buckets."""

    def test_monthly_with_gap_over_year_end(self, now, make_score):
        report = MoodReport(
            [
                make_score(1, datetime(2023, 12, 15, tzinfo=PLUS_TWO)),
                make_score(2, datetime(2023, 12, 20, tzinfo=PLUS_TWO)),
                make_score(4, datetime(2023, 10, 5, tzinfo=PLUS_TWO)),
                make_score(100, datetime(2024, 1, 5, tzinfo=PLUS_TWO)),
            ]
        )
        assert report.iterative_monthly_mood(now) == [
            MoodPoint(unix_seconds(datetime(2023, 11, 1, tzinfo=PLUS_TWO)), 4),
            MoodPoint(unix_seconds(datetime(2023, 12, 1, tzinfo=PLUS_TWO)), 0),
            MoodPoint(unix_seconds(datetime(2024, 1, 1, tzinfo=PLUS_TWO)), 3),
        ]

    def test_months_taken_in_report_offset(self, now, make_score):
        report = MoodReport(
            [
                # 2024-01-01 01:30 at +02:00: current month, excluded
                make_score(100, datetime(2023, 12, 31, 23, 30, tzinfo=timezone.utc)),
                # 2023-12-01 01:00 at +02:00: December
                make_score(3, datetime(2023, 11, 30, 23, 0, tzinfo=timezone.utc)),
            ]
        )
        assert report.iterative_monthly_mood(now) == [
            MoodPoint(unix_seconds(datetime(2024, 1, 1, tzinfo=PLUS_TWO)), 3),
        ]

    def test_only_current_month(self, now, make_score):
        report = MoodReport([make_score(1, now)])
        assert report.iterative_monthly_mood(now) == []


class TestReportDispatch:
    def test_report_matches_methods(self, now, make_score):
        report = MoodReport([make_score(1, now), make_score(2, now - timedelta(days=20))])
        assert report.report(MoodReportKind.MONTHLY, now) == report.thirty_days_mood(now)
        assert report.report(MoodReportKind.YEARLY, now) == 3
        assert report.report("weekly-iterative", now) == report.iterative_weekly_mood(now)
        assert report.report(MoodReportKind.MOVING_MONTHLY, now) == report.thirty_days_moving_mood(now)

    @pytest.mark.parametrize("kind", list(MoodReportKind))
    def test_reports_are_deterministic(self, now, make_score, kind):
        report = MoodReport(
            [make_score(s, now - timedelta(days=7 * s)) for s in range(1, 12)], tags=()
        )
        assert report.report(kind, now) == report.report(kind, now)

    def test_series_kinds(self):
        assert not MoodReportKind.MONTHLY.is_series
        assert not MoodReportKind.YEARLY.is_series
        assert MoodReportKind.WEEKLY_ITERATIVE.is_series
