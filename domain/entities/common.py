"""Helpers shared by the domain entities.

Timestamps are kept as naive UTC datetimes throughout the domain layer, and
child collections (gallery images, checklist items) are ordered by an integer
order index that is only meaningful relative to its siblings.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional


def utcnow() -> datetime:
    """Return the current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime read from storage to naive UTC.

    Args:
        value: Datetime returned by the database driver, aware or naive.

    Returns:
        Optional[datetime]: Naive UTC datetime, or None when value is None.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def next_order_index(order_indexes: Iterable[int]) -> int:
    """Compute the order index for a row appended to a child collection.

    The new index is ``max(existing) + 1``, or 0 for an empty collection.
    Indices are never compacted after a deletion, so gaps are expected.

    Example:
        >>> next_order_index([0, 1, 4])
        5
        >>> next_order_index([])
        0
    """
    return max(order_indexes, default=-1) + 1
