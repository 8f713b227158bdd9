"""Tests for dashboard summaries.

**Feature: productivity-dashboard**
"""

from datetime import date, datetime, timezone

from doctracker.models import DayType, EntryRecord, ProductiveLine
from doctracker.productivity.dashboard import today_snapshot, trend_days, weekly_trend

UTC = timezone.utc
TODAY = date(2026, 3, 15)


def make_entry(name: str, day: int, lines: list) -> EntryRecord:
    return EntryRecord(
        owner_id=name.lower(),
        display_name=name,
        date=datetime(2026, 3, day, 9, 0, tzinfo=UTC),
        day_type=DayType.FULL_DAY,
        productive_lines=lines,
    )


class TestTodaySnapshot:
    """Today's summary cards."""

    def test_only_today_counted(self):
        entries = [
            make_entry("Ana", 15, [
                ProductiveLine(platform="Portal", doc_type="Invoice", count=30, time_in_mins=90),
                ProductiveLine(platform="Mail", doc_type="Invoice", count=5, time_in_mins=30),
            ]),
            make_entry("Ana", 14, [ProductiveLine(platform="Portal", count=99, time_in_mins=99)]),
        ]

        snapshot = today_snapshot(entries, TODAY)

        assert snapshot.date == "2026-03-15"
        assert snapshot.documents == 35
        assert snapshot.minutes == 120
        assert snapshot.hours == 2.0
        assert snapshot.efficiency == 17.5
        assert snapshot.by_platform == {"Portal": 30, "Mail": 5}
        assert snapshot.by_doc_type == {"Invoice": 35}

    def test_no_time_gives_zero_efficiency(self):
        snapshot = today_snapshot([make_entry("Ana", 15, [ProductiveLine(count=4)])], TODAY)
        assert snapshot.documents == 4
        assert snapshot.efficiency == 0

    def test_quarter_hour_rounds_up(self):
        snapshot = today_snapshot(
            [make_entry("Ana", 15, [ProductiveLine(count=1, time_in_mins=15)])], TODAY
        )
        assert snapshot.hours == 0.3
        assert snapshot.efficiency == 4.0

    def test_no_entries(self):
        snapshot = today_snapshot([], TODAY)
        assert snapshot.documents == 0
        assert snapshot.hours == 0
        assert snapshot.by_platform == {}


class TestWeeklyTrend:
    """Per-user document counts for the last seven days."""

    def test_trend_days(self):
        days = trend_days(TODAY)
        assert days[0] == "2026-03-09"
        assert days[-1] == "2026-03-15"
        assert len(days) == 7

    def test_series_per_user(self):
        entries = [
            make_entry("Ana", 15, [ProductiveLine(count=3), ProductiveLine(count=2)]),
            make_entry("Ana", 10, [ProductiveLine(count=7)]),
            make_entry("Bo", 12, [ProductiveLine(count=1)]),
            make_entry("Bo", 1, [ProductiveLine(count=50)]),
        ]

        trend = weekly_trend(entries, TODAY)

        assert list(trend) == ["Ana", "Bo"]
        assert list(trend["Ana"]) == trend_days(TODAY)
        assert trend["Ana"]["2026-03-15"] == 5
        assert trend["Ana"]["2026-03-10"] == 7
        assert trend["Bo"]["2026-03-12"] == 1
        assert sum(trend["Bo"].values()) == 1
