"""Note output schemas for API responses.

This module contains Pydantic models for note-related API responses:
list summaries, the detailed note with its gallery and checklist, and
the checklist item shared with tasks.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from application.converters.tag_converter import TagConverter
from application.rest.schemas.output.tag_output import TagResponse
from domain.entities.note import NoteAccess
from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.checklist import ChecklistItem
    from domain.entities.note import Note, NoteImage


class ChecklistItemResponse(BaseModel):
    """Schema for a checklist item of a note or a task."""

    id: str
    title: str
    completed: bool
    order_index: int
    created_at: datetime

    @classmethod
    def from_entity(cls, item: ChecklistItem) -> ChecklistItemResponse:
        return cls(
            id=str(item.id),
            title=item.title,
            completed=item.completed,
            order_index=item.order_index,
            created_at=item.created_at,
        )


class NoteImageResponse(BaseModel):
    """Schema for an image of a note's gallery."""

    id: str
    image_url: str
    order_index: int
    created_at: datetime

    @classmethod
    def from_entity(cls, image: NoteImage) -> NoteImageResponse:
        return cls(
            id=str(image.id),
            image_url=image.image_url,
            order_index=image.order_index,
            created_at=image.created_at,
        )


class NoteResponse(BaseModel):
    """Schema for note data in list responses.

    Attributes:
        id (str): UUID string identifier of the note.
        title (str): The title of the note.
        content (str, optional): The content/body of the note.
        cover_image_url (str, optional): Public URL of the cover image.
        owner_id (str): UUID of the note owner.
        created_at (datetime): Timestamp when the note was created.
        updated_at (datetime): Timestamp when the note was last updated.
        tag (TagResponse, optional): The note's tag.
        image_count (int): Number of gallery images.
        checklist_total (int): Number of checklist items.
        checklist_completed (int): Number of checked checklist items.

    Example:
        >>> note_response = NoteResponse.from_entity(note)
        >>> note_response.tag.name
        "Work"
    """

    id: str  # UUID as string
    title: str
    content: Optional[str] = None
    cover_image_url: Optional[str] = None
    owner_id: str
    created_at: datetime
    updated_at: datetime
    tag: Optional[TagResponse] = None
    image_count: int = 0
    checklist_total: int = 0
    checklist_completed: int = 0

    @classmethod
    def from_entity(cls, note: Note) -> NoteResponse:
        """Create NoteResponse from Note domain entity.

        Args:
            note: The domain Note entity to convert

        Returns:
            NoteResponse: The converted note response schema
        """
        return cls(
            id=str(note.id),
            title=note.title,
            content=note.content,
            cover_image_url=note.cover_image_url,
            owner_id=str(note.owner_id),
            created_at=note.created_at,
            updated_at=note.updated_at,
            tag=TagConverter.optional_entity_to_response(note.tag),
            image_count=len(note.images),
            checklist_total=len(note.checklist),
            checklist_completed=sum(1 for item in note.checklist if item.completed),
        )


class NoteDetailResponse(NoteResponse):
    """Schema for a single note with its gallery, checklist and access flags.

    Attributes:
        images (List[NoteImageResponse]): Gallery ordered by order index.
        checklist (List[ChecklistItemResponse]): Checklist ordered by order index.
        is_owner (bool): Whether the caller owns the note.
        can_edit (bool): Whether the caller may edit the note.
    """

    images: List[NoteImageResponse] = []
    checklist: List[ChecklistItemResponse] = []
    is_owner: bool = False
    can_edit: bool = False

    @classmethod
    def from_entity_with_access(cls, note: Note, access: NoteAccess) -> NoteDetailResponse:
        summary = NoteResponse.from_entity(note)
        return cls(
            **summary.model_dump(exclude={"tag"}),
            tag=summary.tag,
            images=[NoteImageResponse.from_entity(image) for image in note.images],
            checklist=[ChecklistItemResponse.from_entity(item) for item in note.checklist],
            is_owner=access is NoteAccess.OWNER,
            can_edit=access.can_edit,
        )


class NotesListResponse(BaseModel):
    """Schema for a list of notes.

    Attributes:
        notes (List[NoteResponse]): Notes, most recently updated first.
    """

    notes: List[NoteResponse]

    @classmethod
    def from_entities(cls, notes: List[Note]) -> NotesListResponse:
        return cls(notes=[NoteResponse.from_entity(note) for note in notes])
