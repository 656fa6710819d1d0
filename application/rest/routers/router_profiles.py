import logging
from typing import List

from application.rest.schemas.input.profile_input import ProfileUpdate
from application.rest.schemas.output.common_output import ErrorResponse
from application.rest.schemas.output.profile_output import ProfileResponse
from domain.entities.user import AuthenticatedUser
from domain.services.profile_service import ProfileNotFoundError, ProfileService
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from utils.dependencies import get_current_user, get_db, get_profile_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    path="/profile",
    description="Retrieve the current user's profile.",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": ProfileResponse,
            "description": "Profile retrieved successfully.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "No profile row exists for the user.",
        },
    },
)
async def get_profile(
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    try:
        profile = await profile_service.get_profile(db, user)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error retrieving profile {user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve profile",
        ) from e

    return ProfileResponse.from_entity(profile)


@router.put(
    path="/profile",
    description="Update the current user's display name and avatar.",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": ProfileResponse,
            "description": "Profile updated; the stored profile is returned.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "No profile row exists for the user.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - profile update failed.",
            "content": {
                "application/json": {"example": {"detail": "Failed to update profile"}}
            },
        },
    },
)
async def update_profile(
    profile_update: ProfileUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Update the caller's profile.

    Args:
        profile_update (ProfileUpdate): New full name and avatar URL.
        db (Session): Database session dependency injected by FastAPI.
        user (AuthenticatedUser): The resolved session user.
        profile_service (ProfileService): Domain service with injected repository.

    Returns:
        ProfileResponse: The profile as re-read after the update.

    Example:
        >>> update = ProfileUpdate(full_name="Ada Lovelace")
        >>> result = await update_profile(update, db, user, profile_service)
        >>> print(result.full_name)
        "Ada Lovelace"
    """
    try:
        profile = await profile_service.update_profile(
            db, user, profile_update.full_name, profile_update.avatar_url
        )
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error updating profile {user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile",
        ) from e

    return ProfileResponse.from_entity(profile)


@router.get(
    path="/profiles/search",
    description="Find share recipients by email or full name.",
    response_model=List[ProfileResponse],
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": List[ProfileResponse],
            "description": "Up to ten matching profiles; empty for short queries.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
    },
)
async def search_profiles(
    q: str = "",
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> List[ProfileResponse]:
    """Search profiles for the share dialog.

    Queries of fewer than three characters return an empty list. The caller
    is never part of the results.
    """
    try:
        profiles = await profile_service.search_profiles(db, user, q)
    except Exception as e:
        logger.error(f"Error searching profiles: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search profiles",
        ) from e

    return [ProfileResponse.from_entity(profile) for profile in profiles]
