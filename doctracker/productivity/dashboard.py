"""Dashboard summaries: today's cards and the 7-day per-user trend."""

from datetime import date, timedelta
from typing import Iterable

from doctracker.models import EntryRecord, TodaySnapshot
from doctracker.productivity.aggregator import aggregate_entries
from doctracker.productivity.metrics import efficiency, round_half_up

TREND_DAYS = 7


def trend_days(today: date, days: int = TREND_DAYS) -> list[str]:
    """The last ``days`` calendar days ending today, oldest first."""
    return [(today - timedelta(days=offset)).isoformat() for offset in range(days - 1, -1, -1)]


def today_snapshot(entries: Iterable[EntryRecord], today: date) -> TodaySnapshot:
    """Summarize entries dated ``today``.

    Args:
        entries: Entry records (any dates; others are ignored).
        today: The calendar day to summarize.

    Returns:
        TodaySnapshot with documents, minutes, hours, efficiency and
        platform/document type breakdowns.
    """
    day = today.isoformat()
    folded = aggregate_entries(entry for entry in entries if entry.day_key == day)
    return TodaySnapshot(
        date=day,
        documents=folded.total_documents,
        minutes=folded.total_time,
        hours=round_half_up(folded.total_time / 60, 1),
        efficiency=efficiency(folded.total_documents, folded.total_time),
        by_platform=folded.breakdown.by_platform,
        by_doc_type=folded.breakdown.by_doc_type,
    )


def weekly_trend(
    entries: Iterable[EntryRecord], today: date, days: int = TREND_DAYS
) -> dict[str, dict[str, int]]:
    """Documents per display name for each of the last ``days`` days.

    Every name seen in ``entries`` gets a zero-filled series, even when all
    of its entries fall outside the trend window.
    """
    window = trend_days(today, days)
    trend: dict[str, dict[str, int]] = {}
    for entry in entries:
        series = trend.setdefault(entry.display_name, dict.fromkeys(window, 0))
        if entry.day_key in series:
            series[entry.day_key] += aggregate_entries([entry]).total_documents
    return trend
