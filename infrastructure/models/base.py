"""SQLAlchemy declarative base for all ORM models.

This module provides a shared declarative base that all ORM models inherit from.
Having a centralized base ensures metadata consistency across all models.

The tables themselves belong to the hosted data backend; ``Base.metadata`` is
only used to create them in throwaway databases such as the test suite's.

Usage:
    >>> from infrastructure.models.base import Base
    >>>
    >>> class MyModel(Base):
    ...     __tablename__ = 'my_table'
    ...     # ... column definitions
"""

from sqlalchemy.orm import declarative_base

# Shared declarative base for all ORM models in the infrastructure layer
Base = declarative_base()
