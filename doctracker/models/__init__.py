"""Data models for DocTracker."""

from doctracker.models.entry import (
    DayType,
    EntryRecord,
    NonProductiveLine,
    ProductiveLine,
)
from doctracker.models.stats import (
    AggregationResult,
    Breakdown,
    RankedItem,
    Summary,
    TimelineDay,
    TimeWindow,
    TodaySnapshot,
    TopMetrics,
)
from doctracker.models.user import UserContext

__all__ = [
    "AggregationResult",
    "Breakdown",
    "DayType",
    "EntryRecord",
    "NonProductiveLine",
    "ProductiveLine",
    "RankedItem",
    "Summary",
    "TimelineDay",
    "TimeWindow",
    "TodaySnapshot",
    "TopMetrics",
    "UserContext",
]
