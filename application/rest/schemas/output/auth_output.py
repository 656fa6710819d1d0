"""Auth output schemas for API responses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.user import AuthenticatedUser, AuthSession


class SessionUserResponse(BaseModel):
    """The user behind the current session."""

    id: str
    email: Optional[str] = None

    @classmethod
    def from_entity(cls, user: AuthenticatedUser) -> SessionUserResponse:
        return cls(id=str(user.id), email=user.email)


class LoginResponse(BaseModel):
    """Tokens issued by a successful login.

    Attributes:
        access_token (str): Bearer token for the ``Authorization`` header.
        refresh_token (str): Token used to renew the session.
        token_type (str): Token type, ``bearer``.
        expires_in (int): Lifetime of the access token, in seconds.
        user (SessionUserResponse): The authenticated user.
    """

    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int
    user: SessionUserResponse

    @classmethod
    def from_entity(cls, session: AuthSession) -> LoginResponse:
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            token_type=session.token_type,
            expires_in=session.expires_in,
            user=SessionUserResponse.from_entity(session.user),
        )
