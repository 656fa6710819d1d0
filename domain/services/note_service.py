"""Note domain service for the NotyApp service.

This module contains the NoteService that orchestrates note operations
following Domain-Driven Design principles: CRUD on notes, their gallery,
their checklist and their tag, with owner and share-recipient access control.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple
from uuid import UUID

from domain.entities.checklist import ChecklistItem
from domain.entities.common import next_order_index
from domain.entities.listing import ListCriteria
from domain.entities.note import Note, NoteAccess, NoteImage

if TYPE_CHECKING:
    from domain.entities.user import AuthenticatedUser
    from domain.repositories.note_repository import NoteRepository
    from domain.repositories.share_repository import ShareRepository
    from domain.services.tag_service import TagService
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class NoteError(Exception):
    """Base exception for note-related errors."""

    pass


class NoteNotFoundError(NoteError):
    """Exception raised when a note is not found."""

    pass


class NoteAccessDeniedError(NoteError):
    """Exception raised when user doesn't have access to a note."""

    pass


class NoteService:
    """Domain service for handling note operations.

    A note is readable by its owner and by any recipient of a share,
    matched by user id or by email. Recipients whose share has ``can_edit``
    may change the note and its children; only the owner may delete it.
    """

    def __init__(
        self,
        note_repository: "NoteRepository",
        share_repository: "ShareRepository",
        tag_service: "TagService",
    ):
        """Initialize the note service with dependencies.

        Args:
            note_repository: Repository for performing note operations
            share_repository: Repository used to resolve recipient access
            tag_service: Service resolving tag assignments
        """
        self._note_repository = note_repository
        self._share_repository = share_repository
        self._tag_service = tag_service

    async def list_dashboard_notes(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        criteria: Optional[ListCriteria] = None,
    ) -> List[Note]:
        """List the user's own notes that are not shared with anyone.

        Args:
            db_session: Database session for this operation
            user: The authenticated user
            criteria: Optional in-process title filter

        Returns:
            List[Note]: Notes ordered by last update, newest first
        """
        logger.info(f"Listing dashboard notes for user {user.id}")

        notes = await self._note_repository.list_notes_by_owner(db_session, user.id)
        shared_ids = await self._share_repository.shared_note_ids(db_session, user.id)
        notes = [note for note in notes if note.id not in shared_ids]

        return (criteria or ListCriteria()).apply(notes)

    async def create_note(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        title: str,
        content: Optional[str],
        cover_image_url: Optional[str] = None,
        tag_ids: Optional[List[UUID]] = None,
        checklist: Optional[List[str]] = None,
    ) -> Note:
        """Create a new note with business logic validation.

        Args:
            db_session: Database session for this operation
            user: The authenticated user, owner of the note
            title: Note title
            content: Note content
            cover_image_url: URL of an already uploaded cover image
            tag_ids: Requested tag ids, at most one
            checklist: Initial checklist item titles

        Returns:
            Note: Created note with assigned ID

        Raises:
            ValueError: If title or tags are invalid
            TagNotFoundError: If a requested tag does not exist
            NoteError: If creation fails
        """
        tags = await self._tag_service.resolve_assignment(db_session, tag_ids)
        logger.info(f"Creating note for user {user.id} with {len(tags)} tags")

        try:
            note = Note.create_new(
                title=title,
                content=content,
                owner_id=user.id,
                cover_image_url=cover_image_url,
                tags=tags,
                checklist_titles=checklist,
            )
        except ValueError as e:
            logger.warning(f"Invalid note data: {str(e)}")
            raise

        try:
            created_note = await self._note_repository.create_note(db_session, note)
        except Exception as e:
            logger.error(f"Failed to create note: {str(e)}")
            raise NoteError(f"Failed to create note: {str(e)}") from e

        logger.info(f"Successfully created note {created_note.id}")
        return created_note

    async def get_note(
        self, db_session: "Session", user: "AuthenticatedUser", note_id: UUID
    ) -> Tuple[Note, NoteAccess]:
        """Get a note by ID with access control.

        Args:
            db_session: Database session for this operation
            user: The authenticated user
            note_id: UUID of the note to retrieve

        Returns:
            Tuple[Note, NoteAccess]: The note and the caller's access level

        Raises:
            NoteNotFoundError: If note not found or user doesn't have access
        """
        logger.info(f"Getting note {note_id} for user {user.id}")

        note = await self._note_repository.get_note(db_session, note_id)
        if not note:
            raise NoteNotFoundError(f"Note {note_id} not found")

        if note.is_owned_by(user.id):
            return note, NoteAccess.OWNER

        share = await self._share_repository.find_for_recipient(
            db_session, note_id, user.id, user.normalized_email
        )
        if not share:
            logger.info(f"User {user.id} has no access to note {note_id}")
            raise NoteNotFoundError(f"Note {note_id} not found")

        return note, NoteAccess.EDITOR if share.can_edit else NoteAccess.VIEWER

    async def update_note(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        note_id: UUID,
        title: str,
        content: Optional[str],
        cover_image_url: Optional[str],
        tag_ids: Optional[List[UUID]] = None,
    ) -> Tuple[Note, NoteAccess]:
        """Update a note as its owner or as an editing recipient.

        ``tag_ids`` of None leaves the tag untouched; an empty list clears it.

        Raises:
            NoteNotFoundError: If the note is not visible to the user
            NoteAccessDeniedError: If the user may only read the note
            ValueError: If the new title or tags are invalid
        """
        note, access = await self._get_editable_note(db_session, user, note_id)

        tags = None
        if tag_ids is not None:
            tags = await self._tag_service.resolve_assignment(db_session, tag_ids)

        try:
            note.update_content(title, content, cover_image_url)
        except ValueError as e:
            logger.warning(f"Invalid note update for {note_id}: {str(e)}")
            raise

        await self._note_repository.update_note(db_session, note)
        if tags is not None:
            await self._note_repository.replace_tags(
                db_session, note_id, [tag.id for tag in tags]
            )

        logger.info(f"Successfully updated note {note_id}")
        return await self._reload(db_session, note_id), access

    async def delete_note(
        self, db_session: "Session", user: "AuthenticatedUser", note_id: UUID
    ) -> None:
        """Delete a note. Only the owner may do so.

        Raises:
            NoteNotFoundError: If the note is not visible to the user
            NoteAccessDeniedError: If the user is a recipient, not the owner
        """
        note, access = await self.get_note(db_session, user, note_id)
        if access is not NoteAccess.OWNER:
            logger.warning(f"User {user.id} tried to delete note {note_id}")
            raise NoteAccessDeniedError("Only the owner can delete this note")

        await self._note_repository.delete_note(db_session, note.id)
        logger.info(f"Deleted note {note_id}")

    async def add_image(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        note_id: UUID,
        image_url: str,
    ) -> Note:
        """Append an image to the note's gallery."""
        note, _ = await self._get_editable_note(db_session, user, note_id)

        image = NoteImage.create_new(
            note_id=note.id,
            image_url=image_url,
            order_index=next_order_index(image.order_index for image in note.images),
        )
        await self._note_repository.add_image(db_session, image)
        await self._touch(db_session, note)
        return await self._reload(db_session, note_id)

    async def delete_image(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        note_id: UUID,
        image_id: UUID,
    ) -> Note:
        note, _ = await self._get_editable_note(db_session, user, note_id)
        if not note.find_image(image_id):
            raise NoteNotFoundError(f"Image {image_id} not found")

        await self._note_repository.delete_image(db_session, note_id, image_id)
        await self._touch(db_session, note)
        return await self._reload(db_session, note_id)

    async def add_checklist_item(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        note_id: UUID,
        title: str,
    ) -> Note:
        """Append an item to the note's checklist.

        Raises:
            ValueError: If the title is blank
        """
        note, _ = await self._get_editable_note(db_session, user, note_id)

        item = ChecklistItem.create_new(
            parent_id=note.id,
            title=title,
            order_index=next_order_index(item.order_index for item in note.checklist),
        )
        await self._note_repository.add_checklist_item(db_session, item)
        await self._touch(db_session, note)
        return await self._reload(db_session, note_id)

    async def toggle_checklist_item(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        note_id: UUID,
        item_id: UUID,
    ) -> Note:
        note, _ = await self._get_editable_note(db_session, user, note_id)
        item = note.find_checklist_item(item_id)
        if not item:
            raise NoteNotFoundError(f"Checklist item {item_id} not found")

        item.toggle()
        await self._note_repository.update_checklist_item(db_session, item)
        await self._touch(db_session, note)
        return await self._reload(db_session, note_id)

    async def delete_checklist_item(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        note_id: UUID,
        item_id: UUID,
    ) -> Note:
        note, _ = await self._get_editable_note(db_session, user, note_id)
        if not note.find_checklist_item(item_id):
            raise NoteNotFoundError(f"Checklist item {item_id} not found")

        await self._note_repository.delete_checklist_item(db_session, note_id, item_id)
        await self._touch(db_session, note)
        return await self._reload(db_session, note_id)

    async def set_tags(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        note_id: UUID,
        tag_ids: List[UUID],
    ) -> Note:
        """Replace the note's tag under the single-tag rule.

        Raises:
            ValueError: If more than one distinct tag is requested
            TagNotFoundError: If the tag does not exist
        """
        note, _ = await self._get_editable_note(db_session, user, note_id)
        tags = await self._tag_service.resolve_assignment(db_session, tag_ids)

        await self._note_repository.replace_tags(
            db_session, note_id, [tag.id for tag in tags]
        )
        await self._touch(db_session, note)
        return await self._reload(db_session, note_id)

    async def _get_editable_note(
        self, db_session: "Session", user: "AuthenticatedUser", note_id: UUID
    ) -> Tuple[Note, NoteAccess]:
        note, access = await self.get_note(db_session, user, note_id)
        if not access.can_edit:
            logger.warning(f"User {user.id} may not edit note {note_id}")
            raise NoteAccessDeniedError("You do not have permission to edit this note")
        return note, access

    async def _touch(self, db_session: "Session", note: Note) -> None:
        note.update_content(note.title, note.content, note.cover_image_url)
        await self._note_repository.update_note(db_session, note)

    async def _reload(self, db_session: "Session", note_id: UUID) -> Note:
        note = await self._note_repository.get_note(db_session, note_id)
        if not note:
            raise NoteNotFoundError(f"Note {note_id} not found")
        return note
