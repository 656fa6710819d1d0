"""Profile repository interface for the NotyApp service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

if TYPE_CHECKING:
    from domain.entities.profile import Profile
    from sqlalchemy.orm import Session


class ProfileRepository(ABC):
    """Abstract repository interface for user profiles."""

    @abstractmethod
    async def get_by_id(self, db_session: Session, user_id: UUID) -> Optional[Profile]:
        pass

    @abstractmethod
    async def get_by_email(self, db_session: Session, email: str) -> Optional[Profile]:
        """Find a profile by email address, ignoring case."""
        pass

    @abstractmethod
    async def update(self, db_session: Session, profile: Profile) -> Profile:
        """Persist the display name and avatar of a profile.

        Raises:
            ValueError: If the profile no longer exists
        """
        pass

    @abstractmethod
    async def search(
        self, db_session: Session, query: str, exclude_user_id: UUID, limit: int
    ) -> List[Profile]:
        """Find profiles whose email or full name contains the query.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            query (str): Case-insensitive substring to look for
            exclude_user_id (UUID): Profile left out of the results
            limit (int): Maximum number of profiles returned

        Returns:
            List[Profile]: Matching profiles
        """
        pass
