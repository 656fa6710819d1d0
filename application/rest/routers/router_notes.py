import logging

from application.rest.schemas.input.note_input import (
    ChecklistItemCreate,
    NoteCreate,
    NoteImageCreate,
    NoteUpdate,
    TagAssignment,
)
from application.rest.schemas.output.common_output import ErrorResponse
from application.rest.schemas.output.note_output import (
    NoteDetailResponse,
    NotesListResponse,
)
from domain.entities.note import Note, NoteAccess
from domain.entities.user import AuthenticatedUser
from domain.services.note_service import (
    NoteAccessDeniedError,
    NoteNotFoundError,
    NoteService,
)
from domain.services.tag_service import TagNotFoundError
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from utils.dependencies import get_current_user, get_db, get_note_service

from application.utils import build_list_criteria, parse_uuid

logger = logging.getLogger(__name__)
router = APIRouter()


def editor_detail(note: Note, user: AuthenticatedUser) -> NoteDetailResponse:
    """Build the detail answer after a successful edit by ``user``."""
    access = NoteAccess.OWNER if note.is_owned_by(user.id) else NoteAccess.EDITOR
    return NoteDetailResponse.from_entity_with_access(note, access)


@router.get(
    path="/notes",
    description="Retrieve the dashboard notes: owned by the current user and not shared.",
    response_model=NotesListResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NotesListResponse,
            "description": "User's unshared notes, most recently updated first.",
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
                "application/json": {"example": {"detail": "Failed to retrieve notes"}}
            },
        },
    },
)
async def get_notes(
    q: str = "",
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NotesListResponse:
    """Get the dashboard notes of the current user.

    Notes the user has shared with someone are listed under ``/shared``
    instead. The title filter runs over the fetched list.

    Args:
        q (str, optional): Case-insensitive title filter. Defaults to "".
        db (Session): Database session dependency injected by FastAPI.
        user (AuthenticatedUser): The resolved session user.
        note_service (NoteService): Domain service with injected repositories.

    Returns:
        NotesListResponse: Matching notes.

    Raises:
        HTTPException: 401 if the session is missing or invalid.
        HTTPException: 500 if internal server errors occur.

    Example:
        >>> result = await get_notes(q="groc", db=db, user=user, note_service=service)
        >>> print(f"Total notes: {len(result.notes)}")
        Total notes: 1
    """
    criteria = build_list_criteria(q)
    try:
        notes = await note_service.list_dashboard_notes(db, user, criteria)
    except Exception as e:
        logger.error(f"Error listing notes for user {user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve notes",
        ) from e

    logger.info(f"Returning {len(notes)} notes for user {user.id}")
    return NotesListResponse.from_entities(notes)


@router.post(
    path="/notes",
    description="Create a new note with optional cover image, tag and checklist.",
    response_model=NoteDetailResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": NoteDetailResponse,
            "description": "Note created successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Blank title or more than one tag.",
            "content": {
                "application/json": {"example": {"detail": "Note title is required"}}
            },
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
            "content": {
                "application/json": {"example": {"detail": "Authentication required"}}
            },
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Requested tag does not exist.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - note creation failed.",
            "content": {
                "application/json": {"example": {"detail": "Failed to create note"}}
            },
        },
    },
)
async def create_note(
    note_data: NoteCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    """Create a new note owned by the current user.

    Args:
        note_data (NoteCreate): Pydantic model containing note creation data.
        db (Session): Database session dependency injected by FastAPI.
        user (AuthenticatedUser): The resolved session user.
        note_service (NoteService): Domain service with injected repositories.

    Returns:
        NoteDetailResponse: The created note with its checklist.

    Raises:
        HTTPException: 400 if the title is blank or several tags are sent.
        HTTPException: 404 if the tag does not exist.
        HTTPException: 500 if internal server errors occur.

    Example:
        >>> note_data = NoteCreate(title="Groceries", checklist=["Milk"])
        >>> result = await create_note(note_data, db, user, note_service)
        >>> print(result.checklist[0].title)
        "Milk"
    """
    logger.info(f"Creating note for user_id: {user.id}")
    try:
        note = await note_service.create_note(
            db,
            user,
            title=note_data.title,
            content=note_data.content,
            cover_image_url=note_data.cover_image_url,
            tag_ids=note_data.tag_ids,
            checklist=note_data.checklist,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except TagNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error creating note: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create note",
        ) from e

    return NoteDetailResponse.from_entity_with_access(note, NoteAccess.OWNER)


@router.get(
    path="/notes/{note_id}",
    description="Retrieve a note with its gallery, checklist and tag.",
    response_model=NoteDetailResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NoteDetailResponse,
            "description": "Note retrieved successfully.",
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
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note not found or not accessible.",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Note 123e4567-e89b-12d3-a456-426614174000 not found"
                    }
                }
            },
        },
    },
)
async def get_note(
    note_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    """Get a note readable by the current user.

    The owner and every share recipient can read the note. ``is_owner`` and
    ``can_edit`` tell the client which controls to show.

    Raises:
        HTTPException: 404 if the note does not exist or is not shared with
            the user.
    """
    note_uuid = parse_uuid(note_id)
    try:
        note, access = await note_service.get_note(db, user, note_uuid)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error retrieving note {note_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve note",
        ) from e

    return NoteDetailResponse.from_entity_with_access(note, access)


@router.put(
    path="/notes/{note_id}",
    description="Update title, content, cover image and optionally the tag of a note.",
    response_model=NoteDetailResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NoteDetailResponse,
            "description": "Note updated successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Blank title, invalid UUID or more than one tag.",
            "content": {
                "application/json": {"example": {"detail": "Note title is required"}}
            },
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_403_FORBIDDEN: {
            "model": ErrorResponse,
            "description": "The note is shared read-only with the user.",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "You do not have permission to edit this note"
                    }
                }
            },
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note or tag not found.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - note update failed.",
            "content": {
                "application/json": {"example": {"detail": "Failed to update note"}}
            },
        },
    },
)
async def update_note(
    note_id: str,
    note_update: NoteUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    """Update a note as its owner or as a recipient allowed to edit.

    Args:
        note_id (str): String representation of the note UUID.
        note_update (NoteUpdate): New title, content, cover image and tag.
        db (Session): Database session dependency injected by FastAPI.
        user (AuthenticatedUser): The resolved session user.
        note_service (NoteService): Domain service with injected repositories.

    Returns:
        NoteDetailResponse: The note as stored after the update.

    Raises:
        HTTPException: 400 if the title is blank or several tags are sent.
        HTTPException: 403 if the user may only read the note.
        HTTPException: 404 if the note or the tag does not exist.
        HTTPException: 500 if internal server errors occur.

    Example:
        >>> update = NoteUpdate(title="Updated Title", content="Updated content")
        >>> result = await update_note("note-uuid", update, db, user, note_service)
        >>> print(result.title)
        "Updated Title"
    """
    note_uuid = parse_uuid(note_id)
    try:
        note, access = await note_service.update_note(
            db,
            user,
            note_uuid,
            title=note_update.title,
            content=note_update.content,
            cover_image_url=note_update.cover_image_url,
            tag_ids=note_update.tag_ids,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except NoteAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except (NoteNotFoundError, TagNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error updating note {note_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update note",
        ) from e

    return NoteDetailResponse.from_entity_with_access(note, access)


@router.delete(
    path="/notes/{note_id}",
    description="Delete a note with its images, checklist, tag links and shares.",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        status.HTTP_204_NO_CONTENT: {
            "description": "Note deleted successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid UUID format.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_403_FORBIDDEN: {
            "model": ErrorResponse,
            "description": "Only the owner can delete the note.",
            "content": {
                "application/json": {
                    "example": {"detail": "Only the owner can delete this note"}
                }
            },
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note not found or not accessible.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - note deletion failed.",
            "content": {
                "application/json": {"example": {"detail": "Failed to delete note"}}
            },
        },
    },
)
async def delete_note(
    note_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> Response:
    """Delete a note. Recipients of a share get 403.

    Example:
        >>> await delete_note("note-uuid", db, user, note_service)
        # Note deleted successfully (204 No Content)
    """
    note_uuid = parse_uuid(note_id)
    try:
        await note_service.delete_note(db, user, note_uuid)
    except NoteAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except NoteNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error deleting note {note_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete note",
        ) from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    path="/notes/{note_id}/images",
    description="Append an uploaded image to the note's gallery.",
    response_model=NoteDetailResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": NoteDetailResponse,
            "description": "Image attached; the updated note is returned.",
        },
        status.HTTP_403_FORBIDDEN: {
            "model": ErrorResponse,
            "description": "The note is shared read-only with the user.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note not found or not accessible.",
        },
    },
)
async def add_note_image(
    note_id: str,
    image: NoteImageCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    """Attach an image URL returned by ``POST /api/upload``.

    The image is placed after the current last image of the gallery.
    """
    note_uuid = parse_uuid(note_id)
    try:
        note = await note_service.add_image(db, user, note_uuid, image.image_url)
    except NoteAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except NoteNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error adding image to note {note_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add image",
        ) from e

    return editor_detail(note, user)


@router.delete(
    path="/notes/{note_id}/images/{image_id}",
    description="Remove an image from the note's gallery.",
    response_model=NoteDetailResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NoteDetailResponse,
            "description": "Image removed; the updated note is returned.",
        },
        status.HTTP_403_FORBIDDEN: {
            "model": ErrorResponse,
            "description": "The note is shared read-only with the user.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note or image not found.",
        },
    },
)
async def delete_note_image(
    note_id: str,
    image_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    note_uuid = parse_uuid(note_id)
    image_uuid = parse_uuid(image_id)
    try:
        note = await note_service.delete_image(db, user, note_uuid, image_uuid)
    except NoteAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except NoteNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error removing image {image_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove image",
        ) from e

    return editor_detail(note, user)


@router.post(
    path="/notes/{note_id}/checklist",
    description="Append an item to the note's checklist.",
    response_model=NoteDetailResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": NoteDetailResponse,
            "description": "Item added; the updated note is returned.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Blank item title.",
            "content": {
                "application/json": {
                    "example": {"detail": "Checklist item title cannot be empty"}
                }
            },
        },
        status.HTTP_403_FORBIDDEN: {
            "model": ErrorResponse,
            "description": "The note is shared read-only with the user.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note not found or not accessible.",
        },
    },
)
async def add_note_checklist_item(
    note_id: str,
    item: ChecklistItemCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    note_uuid = parse_uuid(note_id)
    try:
        note = await note_service.add_checklist_item(db, user, note_uuid, item.title)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except NoteAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except NoteNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error adding checklist item to note {note_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add checklist item",
        ) from e

    return editor_detail(note, user)


@router.post(
    path="/notes/{note_id}/checklist/{item_id}/toggle",
    description="Flip the completion flag of a checklist item.",
    response_model=NoteDetailResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NoteDetailResponse,
            "description": "Item toggled; the updated note is returned.",
        },
        status.HTTP_403_FORBIDDEN: {
            "model": ErrorResponse,
            "description": "The note is shared read-only with the user.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note or checklist item not found.",
        },
    },
)
async def toggle_note_checklist_item(
    note_id: str,
    item_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    note_uuid = parse_uuid(note_id)
    item_uuid = parse_uuid(item_id)
    try:
        note = await note_service.toggle_checklist_item(db, user, note_uuid, item_uuid)
    except NoteAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except NoteNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error toggling checklist item {item_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update checklist item",
        ) from e

    return editor_detail(note, user)


@router.delete(
    path="/notes/{note_id}/checklist/{item_id}",
    description="Remove an item from the note's checklist.",
    response_model=NoteDetailResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NoteDetailResponse,
            "description": "Item removed; the updated note is returned.",
        },
        status.HTTP_403_FORBIDDEN: {
            "model": ErrorResponse,
            "description": "The note is shared read-only with the user.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note or checklist item not found.",
        },
    },
)
async def delete_note_checklist_item(
    note_id: str,
    item_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    note_uuid = parse_uuid(note_id)
    item_uuid = parse_uuid(item_id)
    try:
        note = await note_service.delete_checklist_item(db, user, note_uuid, item_uuid)
    except NoteAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except NoteNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error removing checklist item {item_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove checklist item",
        ) from e

    return editor_detail(note, user)


@router.put(
    path="/notes/{note_id}/tags",
    description="Replace the tag of a note. At most one tag can be assigned.",
    response_model=NoteDetailResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": NoteDetailResponse,
            "description": "Tag replaced; the updated note is returned.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "More than one tag requested.",
            "content": {
                "application/json": {
                    "example": {"detail": "Only one tag can be assigned"}
                }
            },
        },
        status.HTTP_403_FORBIDDEN: {
            "model": ErrorResponse,
            "description": "The note is shared read-only with the user.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Note or tag not found.",
        },
    },
)
async def set_note_tags(
    note_id: str,
    assignment: TagAssignment,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    """Replace the note's tag; an empty list removes it."""
    note_uuid = parse_uuid(note_id)
    try:
        note = await note_service.set_tags(db, user, note_uuid, assignment.tag_ids)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except NoteAccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except (NoteNotFoundError, TagNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error setting tags of note {note_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update tags",
        ) from e

    return editor_detail(note, user)
