import logging

from application.rest.schemas.input.share_input import SharedNoteCreate, ShareRequest
from application.rest.schemas.output.common_output import ErrorResponse
from application.rest.schemas.output.note_output import (
    NoteDetailResponse,
    NotesListResponse,
)
from application.rest.schemas.output.share_output import (
    NoteSharesResponse,
    SharedNoteCreatedResponse,
    ShareResponse,
)
from domain.entities.note import NoteAccess
from domain.entities.user import AuthenticatedUser
from domain.services.note_service import NoteAccessDeniedError, NoteNotFoundError
from domain.services.share_service import (
    DuplicateShareError,
    ShareNotFoundError,
    ShareRecipient,
    ShareService,
)
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from utils.dependencies import get_current_user, get_db, get_share_service

from application.utils import build_list_criteria, parse_uuid

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    path="/shared",
    description="Retrieve notes shared with the current user and notes the user has shared.",
    response_model=NotesListResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NotesListResponse,
            "description": "Shared notes, each once, most recently updated first.",
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
            "description": "Internal server error - database query failed.",
            "content": {
                "application/json": {
                    "example": {"detail": "Failed to retrieve shared notes"}
                }
            },
        },
    },
)
async def get_shared_notes(
    q: str = "",
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    share_service: ShareService = Depends(get_share_service),
) -> NotesListResponse:
    """Get the shared notes section.

    Received shares are matched by the user's email or user id, so notes
    shared before the recipient signed up are listed too.

    Args:
        q (str, optional): Case-insensitive title filter. Defaults to "".
        db (Session): Database session dependency injected by FastAPI.
        user (AuthenticatedUser): The resolved session user.
        share_service (ShareService): Domain service with injected repositories.

    Returns:
        NotesListResponse: Received and owned shared notes.

    Example:
        >>> result = await get_shared_notes(db=db, user=user, share_service=service)
        >>> print([note.title for note in result.notes])
        ['Trip plan', 'Team notes']
    """
    criteria = build_list_criteria(q)
    try:
        notes = await share_service.list_shared_notes(db, user, criteria)
    except Exception as e:
        logger.error(f"Error listing shared notes for user {user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve shared notes",
        ) from e

    return NotesListResponse.from_entities(notes)


@router.post(
    path="/shared",
    description="Create a note and share it with one or more recipients.",
    response_model=SharedNoteCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": SharedNoteCreatedResponse,
            "description": "Note and shares created successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Blank title, no recipient or invalid email.",
            "content": {
                "application/json": {
                    "example": {"detail": "At least one recipient is required"}
                }
            },
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_409_CONFLICT: {
            "model": ErrorResponse,
            "description": "The same recipient is listed twice.",
            "content": {
                "application/json": {
                    "example": {"detail": "This note is already shared with that user"}
                }
            },
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - creation failed.",
            "content": {
                "application/json": {
                    "example": {"detail": "Failed to create shared note"}
                }
            },
        },
    },
)
async def create_shared_note(
    note_data: SharedNoteCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    share_service: ShareService = Depends(get_share_service),
) -> SharedNoteCreatedResponse:
    """Create a note owned by the current user and share it right away.

    Args:
        note_data (SharedNoteCreate): Title, content, cover image and recipients.
        db (Session): Database session dependency injected by FastAPI.
        user (AuthenticatedUser): The resolved session user.
        share_service (ShareService): Domain service with injected repositories.

    Returns:
        SharedNoteCreatedResponse: The created note and its shares.

    Raises:
        HTTPException: 400 if the title is blank or there is no valid recipient.
        HTTPException: 409 if a recipient is listed twice.
        HTTPException: 500 if internal server errors occur.
    """
    recipients = [
        ShareRecipient(email=recipient.email, user_id=recipient.user_id)
        for recipient in note_data.recipients
    ]
    try:
        note, shares = await share_service.create_shared_note(
            db,
            user,
            title=note_data.title,
            content=note_data.content,
            recipients=recipients,
            cover_image_url=note_data.cover_image_url,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except DuplicateShareError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error creating shared note: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create shared note",
        ) from e

    return SharedNoteCreatedResponse(
        note=NoteDetailResponse.from_entity_with_access(note, NoteAccess.OWNER),
        shares=[ShareResponse.from_entity(share) for share in shares],
    )


@router.post(
    path="/notes/{note_id}/shares",
    description="Share a note with another user by email.",
    response_model=ShareResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": ShareResponse,
            "description": "Note shared successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid email, invalid UUID or sharing with oneself.",
            "content": {
                "application/json": {
                    "example": {"detail": "You cannot share a note with yourself"}
                }
            },
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_403_FORBIDDEN: {
            "model": ErrorResponse,
            "description": "Only the owner can share the note.",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Only the owner can manage shares of this note"
                    }
                }
            },
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note not found.",
        },
        status.HTTP_409_CONFLICT: {
            "model": ErrorResponse,
            "description": "The note is already shared with that email.",
            "content": {
                "application/json": {
                    "example": {"detail": "This note is already shared with that user"}
                }
            },
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - share creation failed.",
            "content": {
                "application/json": {"example": {"detail": "Failed to share note"}}
            },
        },
    },
)
async def share_note(
    note_id: str,
    share_request: ShareRequest,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    share_service: ShareService = Depends(get_share_service),
) -> ShareResponse:
    """Share a note with another user.

    The recipient does not need an account yet: the share is stored with
    the email and matched once that user signs in.

    Args:
        note_id (str): String representation of the note UUID.
        share_request (ShareRequest): Pydantic model containing recipient email.
        db (Session): Database session dependency injected by FastAPI.
        user (AuthenticatedUser): The resolved session user.
        share_service (ShareService): Domain service with injected repositories.

    Returns:
        ShareResponse: Created share information.

    Example:
        >>> share_request = ShareRequest(email="colleague@example.com")
        >>> result = await share_note("note-uuid", share_request, db, user, share_service)
        >>> print(result.shared_with_email)
        "colleague@example.com"
    """
    note_uuid = parse_uuid(note_id)
    try:
        share = await share_service.share_note(db, user, note_uuid, share_request.email)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except NoteAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except NoteNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except DuplicateShareError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error sharing note {note_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to share note",
        ) from e

    return ShareResponse.from_entity(share)


@router.get(
    path="/notes/{note_id}/shares",
    description="Retrieve all shares of a note owned by the current user.",
    response_model=NoteSharesResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NoteSharesResponse,
            "description": "List of note shares.",
        },
        status.HTTP_403_FORBIDDEN: {
            "model": ErrorResponse,
            "description": "Only the owner can view the shares.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note not found.",
        },
    },
)
async def get_note_shares(
    note_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    share_service: ShareService = Depends(get_share_service),
) -> NoteSharesResponse:
    note_uuid = parse_uuid(note_id)
    try:
        shares = await share_service.list_shares(db, user, note_uuid)
    except NoteAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except NoteNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error listing shares of note {note_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve shares",
        ) from e

    return NoteSharesResponse(
        note_id=str(note_uuid),
        shares=[ShareResponse.from_entity(share) for share in shares],
    )


@router.delete(
    path="/notes/{note_id}/shares/{share_id}",
    description="Revoke a share of a note owned by the current user.",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        status.HTTP_204_NO_CONTENT: {
            "description": "Share revoked successfully.",
        },
        status.HTTP_403_FORBIDDEN: {
            "model": ErrorResponse,
            "description": "Only the owner can revoke shares.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note or share not found.",
        },
    },
)
async def delete_note_share(
    note_id: str,
    share_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    share_service: ShareService = Depends(get_share_service),
) -> Response:
    note_uuid = parse_uuid(note_id)
    share_uuid = parse_uuid(share_id)
    try:
        await share_service.delete_share(db, user, note_uuid, share_uuid)
    except NoteAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except (NoteNotFoundError, ShareNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error revoking share {share_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to revoke share",
        ) from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)
