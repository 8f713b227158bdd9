"""Productivity statistics service.

Entry point used by the CLI (or any API layer) to compute stats, range
comparisons and top metrics for a user.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from doctracker.db.base import EntryRepository
from doctracker.errors import CalculationError, DocTrackerError
from doctracker.models import AggregationResult, TimeWindow, TopMetrics
from doctracker.productivity.aggregator import Aggregation, aggregate_entries
from doctracker.productivity.metrics import derive_summary
from doctracker.productivity.ranking import DEFAULT_TOP_LIMIT, top_n
from doctracker.productivity.window import (
    SUPPORTED_RANGES,
    resolve_window,
    window_span_days,
)

logger = logging.getLogger(__name__)

DEFAULT_RANGE = "1w"


class ProductivityService:
    """Computes productivity statistics from a repository of entries."""

    def __init__(self, repository: EntryRepository):
        """Initialize the service.

        Args:
            repository: Storage collaborator supplying entry records.
        """
        self.repository = repository

    def aggregate(self, user_id: str, window: TimeWindow) -> Aggregation:
        """Fetch a user's entries in the window and fold them."""
        entries = self.repository.fetch_entries(user_id, window.start_date, window.end_date)
        logger.debug(
            "Fetched %d entries for %s in %s window", len(entries), user_id, window.range
        )
        return aggregate_entries(entries, window)

    def get_productivity_stats(
        self,
        user_id: str,
        range_token: str = DEFAULT_RANGE,
        now: Optional[datetime] = None,
    ) -> AggregationResult:
        """Get productivity statistics for a user.

        Args:
            user_id: Owner whose entries are aggregated.
            range_token: One of 24h, 1w, 1m.
            now: Window anchor. Defaults to the current UTC time.

        Returns:
            AggregationResult with summary, breakdown and timeline.

        Raises:
            InvalidRangeError: If the range token is not supported.
            CalculationError: If fetching or folding fails unexpectedly.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        window = resolve_window(range_token, now)

        try:
            folded = self.aggregate(user_id, window)
            summary = derive_summary(
                total_documents=folded.total_documents,
                total_time=folded.total_time,
                days_active=len(folded.timeline),
                window_span_days=window_span_days(window),
            )
            return AggregationResult(
                range=window.range,
                start_date=window.start_date,
                end_date=window.end_date,
                summary=summary,
                breakdown=folded.breakdown,
                timeline=folded.timeline,
            )
        except DocTrackerError:
            raise
        except Exception as e:
            logger.exception("Failed to calculate %s stats for %s", range_token, user_id)
            raise CalculationError(f"Error calculating productivity metrics: {e}") from e

    def get_productivity_comparison(
        self, user_id: str, now: Optional[datetime] = None
    ) -> dict[str, AggregationResult]:
        """Get statistics for every supported range, anchored at the same instant."""
        if now is None:
            now = datetime.now(timezone.utc)
        return {
            range_token: self.get_productivity_stats(user_id, range_token, now)
            for range_token in SUPPORTED_RANGES
        }

    def get_top_metrics(
        self,
        user_id: str,
        range_token: str = DEFAULT_RANGE,
        now: Optional[datetime] = None,
        limit: int = DEFAULT_TOP_LIMIT,
    ) -> TopMetrics:
        """Get the top platforms, document types and queues for a range."""
        stats = self.get_productivity_stats(user_id, range_token, now)
        return TopMetrics(
            top_platforms=top_n(stats.breakdown.by_platform, limit),
            top_doc_types=top_n(stats.breakdown.by_doc_type, limit),
            top_queues=top_n(stats.breakdown.by_queue, limit),
        )
