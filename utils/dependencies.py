"""Database, auth and service dependencies for the NotyApp service.

This module provides dependency injection functions for FastAPI,
including database session management, session resolution and the
domain service factories.

Functions:
    - get_db: Database session factory with automatic cleanup
    - resolve_session: Bearer token to user, auth backend failures raised
    - get_current_user: Resolve the bearer token to the authenticated user
    - get_optional_user: Same, but None instead of a 401 answer
    - get_*_service: Domain service factories

Architecture:
    These utilities are shared across all layers and provide clean dependency
    injection for database access and user management operations. Long-lived
    collaborators (auth client, upload service) are created once in
    ``main.create_app`` and read from ``app.state``.
"""

import logging
from typing import Generator, Optional

from domain.entities.user import AuthenticatedUser
from domain.services.note_service import NoteService
from domain.services.profile_service import ProfileService
from domain.services.share_service import ShareService
from domain.services.tag_service import TagService
from domain.services.task_service import TaskService
from domain.services.upload_service import UploadService
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from infrastructure.repositories.sqlalchemy_note_repository import (
    SQLAlchemyNoteRepository,
)
from infrastructure.repositories.sqlalchemy_profile_repository import (
    SQLAlchemyProfileRepository,
)
from infrastructure.repositories.sqlalchemy_share_repository import (
    SQLAlchemyShareRepository,
)
from infrastructure.repositories.sqlalchemy_tag_repository import (
    SqlAlchemyTagRepository,
)
from infrastructure.repositories.sqlalchemy_task_repository import (
    SQLAlchemyTaskRepository,
)
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .config import DATABASE_URL, LOG_LEVEL
from .supabase_auth import AuthError, InvalidSessionError, SupabaseAuthClient

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

# Database setup
engine = create_engine(DATABASE_URL, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """Get database session with automatic cleanup.

    Yields:
        Session: SQLAlchemy database session that automatically closes after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_auth_client(request: Request) -> SupabaseAuthClient:
    return request.app.state.auth_client


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service


async def resolve_session(
    credentials: Optional[HTTPAuthorizationCredentials],
    auth_client: SupabaseAuthClient,
) -> Optional[AuthenticatedUser]:
    """Resolve a bearer token with one call to the auth backend.

    Args:
        credentials: Parsed ``Authorization`` header, if any.
        auth_client: Client bound to the auth backend.

    Returns:
        Optional[AuthenticatedUser]: The user, or None when the header is
        missing, is not a bearer token or is rejected.

    Raises:
        AuthError: If the auth backend is unreachable or not configured.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None

    try:
        return await auth_client.get_user(credentials.credentials)
    except InvalidSessionError:
        return None


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
) -> Optional[AuthenticatedUser]:
    """Resolve the bearer token, or return None when there is no valid session.

    Raises:
        HTTPException: 503 if the auth backend cannot be reached, 500 if it is
            not configured.
    """
    try:
        return await resolve_session(credentials, auth_client)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e


async def get_current_user(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> AuthenticatedUser:
    """Require an authenticated user.

    Returns:
        AuthenticatedUser: Id and email resolved from the access token.

    Raises:
        HTTPException: 401 if the token is missing, malformed or rejected.

    Example:
        >>> @router.get("/notes")
        ... async def list_notes(user: AuthenticatedUser = Depends(get_current_user)):
        ...     ...
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_tag_service() -> TagService:
    """Create and configure the tag service with repository dependency.

    This factory function creates the domain service with its repository dependency.
    The session is injected per-request in each endpoint method.

    Returns:
        TagService: Configured domain service ready for use.
    """
    # Infrastructure layer: SQLAlchemy repository (no session stored)
    tag_repository = SqlAlchemyTagRepository()

    # Domain layer: Domain service with business logic
    return TagService(tag_repository)


def get_note_service(tag_service: TagService = Depends(get_tag_service)) -> NoteService:
    return NoteService(
        SQLAlchemyNoteRepository(), SQLAlchemyShareRepository(), tag_service
    )


def get_task_service(tag_service: TagService = Depends(get_tag_service)) -> TaskService:
    return TaskService(SQLAlchemyTaskRepository(), tag_service)


def get_share_service() -> ShareService:
    return ShareService(
        SQLAlchemyNoteRepository(),
        SQLAlchemyShareRepository(),
        SQLAlchemyProfileRepository(),
    )


def get_profile_service() -> ProfileService:
    return ProfileService(SQLAlchemyProfileRepository())
