"""Supabase auth integration utilities.

This module provides a small async client for the data backend's auth
endpoints: resolving an access token to a user, password login and logout.

Classes:
    - SupabaseAuthClient: httpx client bound to the backend URL and anon key

Architecture:
    Auth integration is separated from other dependencies to follow
    single responsibility principle and make testing easier. Each request
    resolves its bearer token with exactly one call to ``/auth/v1/user``.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

import httpx

from domain.entities.user import AuthenticatedUser, AuthSession

from .config import HTTP_TIMEOUT, SUPABASE_ANON_KEY, SUPABASE_URL

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Base exception for auth failures.

    Attributes:
        status_code (int): HTTP status the API answers with.
    """

    status_code = 401


class InvalidSessionError(AuthError):
    """The token or the credentials were rejected by the auth backend."""

    status_code = 401


class AuthServiceUnavailableError(AuthError):
    """The auth backend could not be reached."""

    status_code = 503

    def __init__(self, message: str = "Authentication service unavailable"):
        super().__init__(message)


class AuthConfigurationError(AuthError):
    """The auth backend URL or anon key is not configured."""

    status_code = 500

    def __init__(self):
        super().__init__(
            "Authentication is not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY."
        )


class SupabaseAuthClient:
    """Async client for the ``/auth/v1`` endpoints of the data backend.

    Example:
        >>> client = SupabaseAuthClient()
        >>> user = await client.get_user("eyJhbGciOi...")
        >>> print(user.email)
        "user@example.com"
    """

    def __init__(
        self,
        base_url: str = SUPABASE_URL,
        anon_key: str = SUPABASE_ANON_KEY,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self._http_client = http_client
        self._timeout = timeout

    async def get_user(self, access_token: str) -> AuthenticatedUser:
        """Resolve an access token to the user it was issued to.

        Args:
            access_token (str): Bearer token sent by the browser.

        Returns:
            AuthenticatedUser: Id and email of the user.

        Raises:
            InvalidSessionError: If the backend rejects the token.
            AuthServiceUnavailableError: If the backend cannot be reached or
                answers with an unreadable body.
        """
        response = await self._request(
            "GET", "/auth/v1/user", access_token=access_token
        )
        if response.status_code != 200:
            logger.info(f"Token rejected by auth backend: {response.status_code}")
            raise InvalidSessionError("Invalid or expired session")

        return self._parse_user(self._json_body(response))

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Exchange email and password for a session.

        Raises:
            InvalidSessionError: With the backend's message, on rejection.
        """
        response = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.status_code != 200:
            message = self._error_message(response) or "Invalid login credentials"
            logger.warning(f"Login rejected for {email}: {message}")
            raise InvalidSessionError(message)

        body = self._json_body(response)
        return AuthSession(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token", ""),
            token_type=body.get("token_type", "bearer"),
            expires_in=int(body.get("expires_in", 0)),
            user=self._parse_user(body.get("user") or {}),
        )

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token.

        Rejections are logged only; the session is gone either way.
        """
        response = await self._request(
            "POST", "/auth/v1/logout", access_token=access_token
        )
        if response.status_code not in (200, 204):
            logger.warning(f"Logout answered with status {response.status_code}")

    async def _request(
        self,
        method: str,
        path: str,
        access_token: Optional[str] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        if not self.base_url or not self.anon_key:
            raise AuthConfigurationError()

        headers = {"apikey": self.anon_key}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        url = f"{self.base_url}{path}"
        try:
            if self._http_client is not None:
                return await self._http_client.request(
                    method, url, headers=headers, **kwargs
                )
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                return await client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Error calling auth backend {path}: {e}")
            raise AuthServiceUnavailableError() from e

    @staticmethod
    def _json_body(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Auth backend answered with a non-JSON body: {e}")
            raise AuthServiceUnavailableError() from e
        if not isinstance(body, dict):
            logger.error("Auth backend answered with an unexpected payload")
            raise AuthServiceUnavailableError()
        return body

    @staticmethod
    def _parse_user(data: Dict[str, Any]) -> AuthenticatedUser:
        try:
            return AuthenticatedUser(id=UUID(str(data["id"])), email=data.get("email"))
        except (KeyError, ValueError) as e:
            logger.error(f"Unexpected user payload from auth backend: {e}")
            raise InvalidSessionError("Invalid or expired session") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        return body.get("error_description") or body.get("msg") or body.get("message")
