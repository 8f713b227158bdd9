"""Productivity aggregation engine."""

from doctracker.productivity.aggregator import Aggregation, aggregate_entries
from doctracker.productivity.dashboard import today_snapshot, weekly_trend
from doctracker.productivity.metrics import derive_summary, efficiency, round_half_up
from doctracker.productivity.ranking import top_n
from doctracker.productivity.service import ProductivityService
from doctracker.productivity.window import (
    SUPPORTED_RANGES,
    resolve_window,
    window_span_days,
)

__all__ = [
    "Aggregation",
    "ProductivityService",
    "SUPPORTED_RANGES",
    "aggregate_entries",
    "derive_summary",
    "efficiency",
    "round_half_up",
    "resolve_window",
    "today_snapshot",
    "top_n",
    "weekly_trend",
    "window_span_days",
]
