"""Fold entry records into totals, breakdowns and a daily timeline."""

import logging
from typing import Iterable, NamedTuple, Optional

from doctracker.models import Breakdown, EntryRecord, TimelineDay, TimeWindow

logger = logging.getLogger(__name__)


class Aggregation(NamedTuple):
    """Raw sums produced by a single fold."""

    total_documents: int
    total_time: int
    breakdown: Breakdown
    timeline: list[TimelineDay]


def _quantity(value: Optional[int]) -> int:
    """Line quantities are already normalised; anything unusable counts as 0."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


def _add(mapping: dict[str, int], key: Optional[str], amount: int) -> None:
    if key:
        mapping[key] = mapping.get(key, 0) + amount


def aggregate_entries(
    entries: Iterable[EntryRecord], window: Optional[TimeWindow] = None
) -> Aggregation:
    """Fold entries into totals, category breakdowns and a timeline.

    Category breakdowns are weighted by document count, not by the number of
    lines. Timeline days appear in the order they are first encountered,
    which is chronological when entries arrive sorted by date.

    Args:
        entries: Entry records, ideally ascending by date.
        window: When given, entries dated outside it are skipped.

    Returns:
        Aggregation with sums for the included entries.
    """
    total_documents = 0
    total_time = 0
    by_platform: dict[str, int] = {}
    by_doc_type: dict[str, int] = {}
    by_queue: dict[str, int] = {}
    days: dict[str, list[int]] = {}

    for entry in entries:
        if window is not None and not (window.start_date <= entry.date <= window.end_date):
            logger.debug("Skipping entry %s dated %s outside window", entry.id, entry.date)
            continue

        bucket = days.setdefault(entry.day_key, [0, 0])
        for line in entry.productive_lines:
            documents = _quantity(line.count)
            minutes = _quantity(line.time_in_mins)

            total_documents += documents
            total_time += minutes
            bucket[0] += documents
            bucket[1] += minutes

            _add(by_platform, line.platform, documents)
            _add(by_doc_type, line.doc_type, documents)
            _add(by_queue, line.queue, documents)

    timeline = [
        TimelineDay(date=day, documents=documents, time=minutes)
        for day, (documents, minutes) in days.items()
    ]
    return Aggregation(
        total_documents=total_documents,
        total_time=total_time,
        breakdown=Breakdown(
            by_platform=by_platform,
            by_doc_type=by_doc_type,
            by_queue=by_queue,
        ),
        timeline=timeline,
    )
