"""Listing criteria domain entities.

This module contains the in-process filters applied to fully fetched lists
of notes and tasks: a case-insensitive text query and, for tasks, a filter
on the creation date relative to today.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional, Protocol, TypeVar

from domain.entities.common import utcnow


class Searchable(Protocol):
    def matches_text_search(self, query: str) -> bool: ...


T = TypeVar("T", bound=Searchable)


class DateFilter(Enum):
    """Enumeration of the creation date windows offered for tasks."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def subtract_months(day: date, months: int) -> date:
    """Move a date back by whole calendar months.

    The day of month is clamped to the length of the target month.

    Example:
        >>> subtract_months(date(2024, 3, 31), 1)
        datetime.date(2024, 2, 29)
    """
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def date_cutoff(date_filter: DateFilter, today: date) -> Optional[date]:
    """Return the earliest creation date kept by a filter.

    Args:
        date_filter (DateFilter): Selected window.
        today (date): Reference day.

    Returns:
        Optional[date]: Inclusive lower bound, or None for ``ALL``.
    """
    if date_filter is DateFilter.TODAY:
        return today
    if date_filter is DateFilter.WEEK:
        return today - timedelta(days=7)
    if date_filter is DateFilter.MONTH:
        return subtract_months(today, 1)
    if date_filter is DateFilter.YEAR:
        return subtract_months(today, 12)
    return None


@dataclass
class ListCriteria:
    """Filters applied after a full fetch of the user's items.

    Attributes:
        query (str): Text query, empty to keep every item.
        date_filter (DateFilter): Creation date window, tasks only.

    Example:
        >>> criteria = ListCriteria(query="milk", date_filter=DateFilter.WEEK)
        >>> recent = criteria.apply(tasks)
    """

    query: str = ""
    date_filter: DateFilter = DateFilter.ALL

    def __post_init__(self):
        self.query = (self.query or "").strip()

    def has_text_search(self) -> bool:
        return bool(self.query)

    def apply(self, items: List[T], today: Optional[date] = None) -> List[T]:
        """Filter items, keeping their order.

        The date window compares the calendar date of ``created_at`` with
        the cutoff; ``TODAY`` keeps only items created on ``today``, which
        defaults to the current UTC date like the stored timestamps.
        """
        result = [item for item in items if item.matches_text_search(self.query)]

        if self.date_filter is DateFilter.ALL:
            return result

        today = today or utcnow().date()
        cutoff = date_cutoff(self.date_filter, today)
        if self.date_filter is DateFilter.TODAY:
            return [item for item in result if item.created_at.date() == cutoff]
        return [item for item in result if item.created_at.date() >= cutoff]
