from typing import List

from application.converters.tag_converter import TagConverter
from application.rest.schemas.output.common_output import ErrorResponse
from application.rest.schemas.output.tag_output import TagResponse
from domain.entities.user import AuthenticatedUser
from domain.services.tag_service import TagNotFoundError, TagService
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from utils.dependencies import get_current_user, get_db, get_tag_service

from application.utils import parse_uuid

router = APIRouter()


@router.get(
    path="/tags",
    description="Retrieve the fixed tag catalogue offered for notes and tasks.",
    response_model=List[TagResponse],
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": List[TagResponse],
            "description": "All tags, ordered by name.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
            "content": {
                "application/json": {"example": {"detail": "Authentication required"}}
            },
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - database connection failed.",
            "content": {
                "application/json": {
                    "example": {"detail": "Failed to retrieve tags"}
                }
            },
        },
    },
)
async def get_tags(
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
    user: AuthenticatedUser = Depends(get_current_user),
) -> List[TagResponse]:
    """Get the tag catalogue.

    1. Router receives request and fresh DB session
    2. Router delegates to Domain Service, passing session
    3. Repository reads the catalogue
    4. Entities are converted to response schemas

    Args:
        db (Session): Fresh database session for this request.
        tag_service (TagService): Domain service with injected repository.
        user (AuthenticatedUser): The caller; tags are shared by every user.

    Returns:
        List[TagResponse]: List of all tag response schemas.

    Example:
        >>> tags = await get_tags(db, tag_service, user)
        >>> print([tag.name for tag in tags])
        ['Ideas', 'Personal', 'Work']
    """
    try:
        tag_entities = await tag_service.get_all_tags(db)
        return TagConverter.entities_to_responses(tag_entities)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve tags",
        ) from e


@router.get(
    path="/tags/{tag_id}",
    description="Retrieve a specific tag by its unique identifier.",
    response_model=TagResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": TagResponse,
            "description": "Tag retrieved successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid UUID format.",
            "content": {
                "application/json": {
                    "example": {"detail": "Invalid UUID format: invalid-id"}
                }
            },
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Tag not found.",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Tag with ID 123e4567-e89b-12d3-a456-426614174000 not found"
                    }
                }
            },
        },
    },
)
async def get_tag_by_id(
    tag_id: str,
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
    user: AuthenticatedUser = Depends(get_current_user),
) -> TagResponse:
    tag_uuid = parse_uuid(tag_id)
    try:
        tag_entity = await tag_service.get_tag_by_id(db, tag_uuid)
        return TagConverter.entity_to_response(tag_entity)
    except TagNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve tag",
        ) from e
