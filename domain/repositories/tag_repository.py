"""Tag repository interface.

This module defines the abstract interface for tag data access
operations, following the Repository pattern from DDD.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from ..entities.tag import TagEntity


class TagRepositoryInterface(ABC):
    """Abstract interface for tag repository operations.

    The tag catalog is global and read only for the application, so the
    contract only covers lookups.

    NOTE: All methods receive a fresh database session to ensure
    proper transaction management and avoid session leaks.
    """

    @abstractmethod
    async def get_all(self, db_session: Session) -> List[TagEntity]:
        """Retrieve all tags from the repository.

        Args:
            db_session (Session): Fresh database session for this operation.

        Returns:
            List[TagEntity]: List of all available tag entities.

        Example:
            >>> with get_db_session() as db:
            ...     tags = await repository.get_all(db)
            ...     print(len(tags))
            5
        """
        pass

    @abstractmethod
    async def get_by_id(self, db_session: Session, tag_id: UUID) -> Optional[TagEntity]:
        """Retrieve a tag by its unique identifier.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag_id (UUID): The unique identifier of the tag to retrieve.

        Returns:
            Optional[TagEntity]: The tag entity if found, None otherwise.
        """
        pass

    @abstractmethod
    async def get_by_ids(
        self, db_session: Session, tag_ids: Iterable[UUID]
    ) -> List[TagEntity]:
        """Retrieve the tags matching the given identifiers.

        Unknown identifiers are skipped; the caller compares lengths.
        """
        pass
