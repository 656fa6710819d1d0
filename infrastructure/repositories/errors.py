"""Helpers for translating driver errors raised by the data backend."""

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an integrity error comes from a unique constraint.

    Postgres drivers expose the SQLSTATE as ``pgcode`` (psycopg2) or
    ``sqlstate`` (psycopg 3); SQLite only reports it in the message.

    Args:
        error (IntegrityError): Error raised on flush or commit.

    Returns:
        bool: True for a unique violation, False for other constraints.
    """
    original = getattr(error, "orig", None)
    code = getattr(original, "pgcode", None) or getattr(original, "sqlstate", None)
    if code:
        return code == UNIQUE_VIOLATION
    return "UNIQUE constraint failed" in str(original or error)
