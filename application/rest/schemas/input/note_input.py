"""Note input schemas for API requests.

This module contains Pydantic models for note-related API requests,
including note creation, update and the gallery, checklist and tag
sub-operations.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class NoteCreate(BaseModel):
    """Schema for creating a new note.

    Blank titles are rejected by the domain layer with a 400 answer.

    Attributes:
        title (str): The title of the note.
        content (str, optional): The free-text body of the note.
        cover_image_url (str, optional): URL returned by the upload gateway.
        tag_ids (List[UUID], optional): Tag to attach, at most one.
        checklist (List[str], optional): Initial checklist item titles.

    Example:
        >>> note_data = NoteCreate(
        ...     title="Groceries",
        ...     content="For the weekend",
        ...     tag_ids=["tag-uuid-1"],
        ...     checklist=["Milk", "Eggs"]
        ... )
    """

    title: str
    content: Optional[str] = None
    cover_image_url: Optional[str] = None
    tag_ids: Optional[List[UUID]] = None
    checklist: Optional[List[str]] = None


class NoteUpdate(BaseModel):
    """Schema for updating an existing note.

    Title, content and cover image are replaced as sent. ``tag_ids`` is
    optional: when omitted the tag is left untouched, an empty list clears it.

    Example:
        >>> update_data = NoteUpdate(title="Updated Title", content=None, tag_ids=[])
    """

    title: str
    content: Optional[str] = None
    cover_image_url: Optional[str] = None
    tag_ids: Optional[List[UUID]] = None


class NoteImageCreate(BaseModel):
    """Schema for attaching an uploaded image to a note's gallery."""

    image_url: str


class ChecklistItemCreate(BaseModel):
    """Schema for appending an item to a checklist."""

    title: str


class TagAssignment(BaseModel):
    """Schema for replacing the tag of a note or task.

    Example:
        >>> TagAssignment(tag_ids=["tag-uuid-1"])
    """

    tag_ids: List[UUID] = []
