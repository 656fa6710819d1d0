"""Profile output schemas for API responses."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.profile import Profile


class ProfileResponse(BaseModel):
    """Schema for profile data in API responses.

    Example:
        >>> ProfileResponse.from_entity(profile).email
        "user@example.com"
    """

    id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, profile: Profile) -> ProfileResponse:
        return cls(
            id=str(profile.id),
            email=profile.email,
            full_name=profile.full_name,
            avatar_url=profile.avatar_url,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
