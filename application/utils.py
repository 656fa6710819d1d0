from uuid import UUID

from domain.entities.listing import DateFilter, ListCriteria
from fastapi import HTTPException, status


def parse_uuid(value: str) -> UUID:
    """Convert a path parameter to UUID, answering 400 when it is malformed.

    Args:
        value (str): Raw path segment.

    Returns:
        UUID: The parsed identifier.

    Raises:
        HTTPException: 400 with the offending value.

    Example:
        >>> parse_uuid("123e4567-e89b-12d3-a456-426614174000")
        UUID('123e4567-e89b-12d3-a456-426614174000')
    """
    try:
        return UUID(value)
    except (ValueError, TypeError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid UUID format: {value}",
        ) from e


def build_list_criteria(q: str = "", date: str = DateFilter.ALL.value) -> ListCriteria:
    """Build listing filters from query parameters.

    Raises:
        HTTPException: 400 if the date window is not one of all, today, week,
            month or year.
    """
    try:
        date_filter = DateFilter((date or DateFilter.ALL.value).lower())
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date parameter.",
        ) from e
    return ListCriteria(query=q, date_filter=date_filter)
