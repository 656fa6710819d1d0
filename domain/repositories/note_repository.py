"""Note repository interface for the NotyApp service.

This module defines the repository interface for notes and their child
collections (gallery images, checklist items, tag links) following
Domain-Driven Design principles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional
from uuid import UUID

if TYPE_CHECKING:
    from domain.entities.checklist import ChecklistItem
    from domain.entities.note import Note, NoteImage
    from sqlalchemy.orm import Session


class NoteRepository(ABC):
    """Abstract repository interface for note operations.

    This interface defines the contract for note repositories,
    allowing different implementations (e.g., SQLAlchemy, in-memory, etc.)
    while keeping the domain layer independent of infrastructure concerns.

    Access control is not part of this contract: the repository reads and
    writes rows by id, and the domain services decide who may do so.
    """

    @abstractmethod
    async def create_note(self, db_session: Session, note: Note) -> Note:
        """Create a new note together with its initial checklist and tags.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            note (Note): Domain Note entity to create

        Returns:
            Note: Created note, re-read from storage

        Raises:
            Exception: If creation fails at the data layer
        """
        pass

    @abstractmethod
    async def get_note(self, db_session: Session, note_id: UUID) -> Optional[Note]:
        """Get a note by ID with images, checklist and tags.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            note_id (UUID): UUID of the note to retrieve

        Returns:
            Optional[Note]: Note if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_notes_by_owner(
        self, db_session: Session, owner_id: UUID
    ) -> List[Note]:
        """List every note owned by a user, most recently updated first."""
        pass

    @abstractmethod
    async def list_notes_by_ids(
        self, db_session: Session, note_ids: Iterable[UUID]
    ) -> List[Note]:
        """List the notes with the given ids, most recently updated first."""
        pass

    @abstractmethod
    async def update_note(self, db_session: Session, note: Note) -> Note:
        """Persist the editable fields of a note.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            note (Note): Domain Note entity with updates

        Returns:
            Note: Updated note, re-read from storage

        Raises:
            ValueError: If the note no longer exists
        """
        pass

    @abstractmethod
    async def delete_note(self, db_session: Session, note_id: UUID) -> bool:
        """Delete a note and every child row.

        Returns:
            bool: True if deletion successful, False if note not found
        """
        pass

    @abstractmethod
    async def add_image(self, db_session: Session, image: NoteImage) -> NoteImage:
        pass

    @abstractmethod
    async def delete_image(
        self, db_session: Session, note_id: UUID, image_id: UUID
    ) -> bool:
        pass

    @abstractmethod
    async def add_checklist_item(
        self, db_session: Session, item: ChecklistItem
    ) -> ChecklistItem:
        pass

    @abstractmethod
    async def update_checklist_item(
        self, db_session: Session, item: ChecklistItem
    ) -> ChecklistItem:
        """Persist the completion flag of a checklist item."""
        pass

    @abstractmethod
    async def delete_checklist_item(
        self, db_session: Session, note_id: UUID, item_id: UUID
    ) -> bool:
        pass

    @abstractmethod
    async def replace_tags(
        self, db_session: Session, note_id: UUID, tag_ids: List[UUID]
    ) -> None:
        """Replace every tag link of a note with the given tags.

        Existing links are deleted first, then the new ones are inserted.
        """
        pass
