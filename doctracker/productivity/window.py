"""Range token resolution.

Maps a symbolic range (``24h``, ``1w``, ``1m``) to a concrete window ending
at an explicitly supplied ``now``.
"""

import math
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from doctracker.errors import InvalidRangeError
from doctracker.models import TimeWindow
from doctracker.models.entry import ensure_utc

SUPPORTED_RANGES = ("24h", "1w", "1m")

# Offsets are relativedelta so "1m" subtracts a calendar month (Mar 31 -> Feb 28/29).
RANGE_OFFSETS = {
    "24h": relativedelta(hours=24),
    "1w": relativedelta(days=7),
    "1m": relativedelta(months=1),
}


def resolve_window(range_token: str, now: datetime) -> TimeWindow:
    """Resolve a range token to its [start, end] window.

    Args:
        range_token: One of SUPPORTED_RANGES.
        now: Anchor instant; becomes the window end.

    Returns:
        TimeWindow with start = now - offset and end = now.

    Raises:
        InvalidRangeError: If the token is not supported.
    """
    offset = RANGE_OFFSETS.get(range_token)
    if offset is None:
        raise InvalidRangeError(range_token)

    end = ensure_utc(now)
    return TimeWindow(range=range_token, start_date=end - offset, end_date=end)


def window_span_days(window: TimeWindow) -> int:
    """Whole days covered by the window, rounded up."""
    span = window.end_date - window.start_date
    return max(0, math.ceil(span / timedelta(days=1)))
