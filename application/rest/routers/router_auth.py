import logging

from application.rest.schemas.input.auth_input import LoginRequest
from application.rest.schemas.output.auth_output import (
    LoginResponse,
    SessionUserResponse,
)
from application.rest.schemas.output.common_output import ErrorResponse
from domain.entities.user import AuthenticatedUser
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import HTTPAuthorizationCredentials
from utils.dependencies import bearer_scheme, get_auth_client, get_current_user
from utils.supabase_auth import AuthError, SupabaseAuthClient

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    path="/auth/login",
    description="Sign in with email and password.",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": LoginResponse,
            "description": "Session created; use the access token as bearer token.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "Credentials rejected by the auth backend.",
            "content": {
                "application/json": {
                    "example": {"detail": "Invalid login credentials"}
                }
            },
        },
        status.HTTP_503_SERVICE_UNAVAILABLE: {
            "model": ErrorResponse,
            "description": "The auth backend could not be reached.",
            "content": {
                "application/json": {
                    "example": {"detail": "Authentication service unavailable"}
                }
            },
        },
    },
)
async def login(
    credentials: LoginRequest,
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
) -> LoginResponse:
    """Exchange email and password for an access and refresh token.

    Args:
        credentials (LoginRequest): Email and password.
        auth_client (SupabaseAuthClient): Client created at start-up.

    Returns:
        LoginResponse: Tokens and the signed-in user.

    Raises:
        HTTPException: 401 with the backend's message when rejected.
        HTTPException: 503 if the auth backend cannot be reached.
    """
    try:
        session = await auth_client.sign_in_with_password(
            credentials.email, credentials.password
        )
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e

    logger.info(f"User {session.user.id} signed in")
    return LoginResponse.from_entity(session)


@router.post(
    path="/auth/logout",
    description="Revoke the current session.",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        status.HTTP_204_NO_CONTENT: {
            "description": "Session revoked.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
    },
)
async def logout(
    user: AuthenticatedUser = Depends(get_current_user),
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
) -> Response:
    try:
        await auth_client.sign_out(credentials.credentials)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e

    logger.info(f"User {user.id} signed out")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    path="/auth/session",
    description="Return the user behind the bearer token.",
    response_model=SessionUserResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": SessionUserResponse,
            "description": "The session is valid.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "Missing, invalid or expired session.",
            "content": {
                "application/json": {"example": {"detail": "Authentication required"}}
            },
        },
    },
)
async def get_session(
    user: AuthenticatedUser = Depends(get_current_user),
) -> SessionUserResponse:
    return SessionUserResponse.from_entity(user)
