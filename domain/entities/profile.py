"""Profile domain entity.

Profiles mirror the auth users of the data backend and are used to show
the user's own details and to find share recipients.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from domain.entities.common import utcnow


@dataclass
class Profile:
    """Public profile of a registered user.

    Attributes:
        id (UUID): Same id as the auth user.
        email (str): Email address of the user.
        full_name (Optional[str]): Display name.
        avatar_url (Optional[str]): Public URL of the avatar image.
        created_at (Optional[datetime]): Creation timestamp.
        updated_at (Optional[datetime]): Last update timestamp.
    """

    id: UUID
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def update(self, full_name: Optional[str], avatar_url: Optional[str]) -> None:
        self.full_name = full_name.strip() if full_name and full_name.strip() else None
        self.avatar_url = avatar_url or None
        self.updated_at = utcnow()
