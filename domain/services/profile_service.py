"""Profile domain service for the NotyApp service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from domain.entities.profile import Profile

if TYPE_CHECKING:
    from domain.entities.user import AuthenticatedUser
    from domain.repositories.profile_repository import ProfileRepository
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 3
SEARCH_LIMIT = 10


class ProfileNotFoundError(Exception):
    """Exception raised when the caller has no profile row."""

    pass


class ProfileService:
    """Domain service for reading and editing user profiles."""

    def __init__(self, profile_repository: "ProfileRepository"):
        self._profile_repository = profile_repository

    async def get_profile(
        self, db_session: "Session", user: "AuthenticatedUser"
    ) -> Profile:
        profile = await self._profile_repository.get_by_id(db_session, user.id)
        if not profile:
            raise ProfileNotFoundError(f"Profile for user {user.id} not found")
        return profile

    async def update_profile(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        full_name: Optional[str],
        avatar_url: Optional[str],
    ) -> Profile:
        """Update the caller's display name and avatar.

        Returns:
            Profile: The profile re-read from storage
        """
        profile = await self.get_profile(db_session, user)
        profile.update(full_name, avatar_url)
        await self._profile_repository.update(db_session, profile)
        logger.info(f"Updated profile {user.id}")
        return await self.get_profile(db_session, user)

    async def search_profiles(
        self, db_session: "Session", user: "AuthenticatedUser", query: str
    ) -> List[Profile]:
        """Find share recipients by email or full name.

        Queries shorter than three characters return nothing. The caller is
        never part of the results, which hold at most ten profiles.
        """
        query = (query or "").strip()
        if len(query) < MIN_SEARCH_LENGTH:
            return []

        return await self._profile_repository.search(
            db_session, query, exclude_user_id=user.id, limit=SEARCH_LIMIT
        )
