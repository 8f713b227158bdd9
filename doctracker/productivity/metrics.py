"""Derived productivity metrics.

Every ratio guards its denominator and falls back to ``0``; dashboards show
zero rather than an empty or error value.
"""

from decimal import ROUND_HALF_UP, Decimal

from doctracker.models import Summary


def round_half_up(value: float, digits: int = 2) -> float:
    """Round to ``digits`` decimals with ties going up.

    Works on the exact binary value of ``value``, so ``0.125`` becomes
    ``0.13`` while ``1.005`` (stored just below the tie) stays ``1.0``.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _ratio(numerator: float, denominator: float, digits: int = 2) -> float:
    if denominator <= 0:
        return 0
    return round_half_up(numerator / denominator, digits)

def derive_summary(
    total_documents: int,
    total_time: int,
    days_active: int,
    window_span_days: int,
) -> Summary:
    """Build the summary block from raw sums.

    Args:
        total_documents: Sum of line counts in the window.
        total_time: Sum of line minutes in the window.
        days_active: Distinct calendar days with at least one entry.
        window_span_days: Window length in whole days, rounded up.

    Returns:
        Summary with totals and 2-decimal averages.
    """
    return Summary(
        total_documents=total_documents,
        total_time=total_time,
        total_time_hours=round_half_up(total_time / 60),
        avg_documents_per_day=_ratio(total_documents, window_span_days),
        avg_time_per_day=_ratio(total_time, window_span_days),
        avg_time_per_document=_ratio(total_time, total_documents),
        days_active=days_active,
    )


def efficiency(documents: int, minutes: int) -> float:
    """Documents per hour, to one decimal place."""
    return _ratio(documents, minutes / 60, digits=1)
