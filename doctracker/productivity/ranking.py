"""Top-N ranking of category breakdowns."""

from doctracker.models import RankedItem

DEFAULT_TOP_LIMIT = 5


def top_n(mapping: dict[str, int], n: int = DEFAULT_TOP_LIMIT) -> list[RankedItem]:
    """Rank categories by count, highest first.

    ``sorted`` is stable, so equal counts keep the mapping's insertion order.

    Args:
        mapping: Category label to document count.
        n: Maximum number of items to return.

    Returns:
        Up to ``n`` ranked items; empty for empty input or ``n <= 0``.
    """
    if n <= 0:
        return []
    ranked = sorted(mapping.items(), key=lambda item: item[1], reverse=True)
    return [RankedItem(name=name, count=count) for name, count in ranked[:n]]
