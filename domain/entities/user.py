"""Authenticated user and session entities.

These value objects describe the caller as resolved by the data backend's
auth endpoints. They carry no persistence concerns.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class AuthenticatedUser:
    """The user behind a verified access token.

    Attributes:
        id (UUID): Auth user id, also the primary key of the user's profile.
        email (Optional[str]): Email address registered with the auth backend.
    """

    id: UUID
    email: Optional[str] = None

    @property
    def normalized_email(self) -> Optional[str]:
        return self.email.strip().lower() if self.email else None


@dataclass(frozen=True)
class AuthSession:
    """Tokens issued by a successful password login."""

    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int
    user: AuthenticatedUser
