from datetime import date, datetime
from uuid import uuid4

import pytest

from domain.entities.listing import DateFilter, ListCriteria, date_cutoff, subtract_months
from domain.entities.task import UserTask

TODAY = date(2024, 3, 31)


def task(title, created_at, description=None):
    return UserTask(
        id=uuid4(),
        owner_id=uuid4(),
        title=title,
        description=description,
        created_at=created_at,
        updated_at=created_at,
    )


@pytest.mark.parametrize(
    "day, months, expected",
    [
        (date(2024, 3, 31), 1, date(2024, 2, 29)),
        (date(2023, 3, 31), 1, date(2023, 2, 28)),
        (date(2024, 2, 29), 12, date(2023, 2, 28)),
        (date(2024, 1, 15), 1, date(2023, 12, 15)),
    ],
)
def test_subtract_months_clamps_to_month_length(day, months, expected):
    assert subtract_months(day, months) == expected


def test_date_cutoffs():
    assert date_cutoff(DateFilter.ALL, TODAY) is None
    assert date_cutoff(DateFilter.TODAY, TODAY) == TODAY
    assert date_cutoff(DateFilter.WEEK, TODAY) == date(2024, 3, 24)
    assert date_cutoff(DateFilter.MONTH, TODAY) == date(2024, 2, 29)
    assert date_cutoff(DateFilter.YEAR, TODAY) == date(2023, 3, 31)


def test_date_filter_keeps_items_on_the_cutoff_day():
    items = [
        task("Today", datetime(2024, 3, 31, 23, 59)),
        task("Cutoff", datetime(2024, 3, 24, 0, 1)),
        task("Before", datetime(2024, 3, 23, 23, 59)),
    ]

    today = ListCriteria(date_filter=DateFilter.TODAY).apply(items, today=TODAY)
    week = ListCriteria(date_filter=DateFilter.WEEK).apply(items, today=TODAY)

    assert [item.title for item in today] == ["Today"]
    assert [item.title for item in week] == ["Today", "Cutoff"]


def test_query_and_date_filter_combine():
    items = [
        task("Pack boxes", datetime(2024, 3, 30)),
        task("Book van", datetime(2024, 3, 30), description="Moving BOXES"),
        task("Old boxes", datetime(2023, 1, 1)),
        task("Taxes", datetime(2024, 3, 30)),
    ]

    criteria = ListCriteria(query="  boxes ", date_filter=DateFilter.MONTH)

    assert criteria.query == "boxes"
    assert criteria.has_text_search()
    assert [item.title for item in criteria.apply(items, today=TODAY)] == [
        "Pack boxes",
        "Book van",
    ]


def test_empty_criteria_keep_everything():
    items = [task("A", datetime(2020, 1, 1)), task("B", datetime(2024, 3, 1))]

    assert ListCriteria().apply(items) == items
    assert not ListCriteria(query=None).has_text_search()


def test_today_defaults_to_the_utc_date(monkeypatch):
    monkeypatch.setattr(
        "domain.entities.listing.utcnow", lambda: datetime(2024, 3, 31, 23, 30)
    )
    items = [
        task("Late tonight", datetime(2024, 3, 31, 23, 10)),
        task("Yesterday", datetime(2024, 3, 30, 23, 50)),
    ]

    today = ListCriteria(date_filter=DateFilter.TODAY).apply(items)

    assert [item.title for item in today] == ["Late tonight"]
