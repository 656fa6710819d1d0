"""Share input schemas for API requests.

This module contains Pydantic models for sharing notes with other users
and for creating notes that are shared from the start.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class ShareRequest(BaseModel):
    """Schema for sharing an existing note.

    Attributes:
        email (str): Email address of the recipient.

    Example:
        >>> share_data = ShareRequest(email="colleague@example.com")
    """

    email: str


class ShareRecipientInput(BaseModel):
    """A recipient picked in the shared note form.

    Attributes:
        email (str): Email address of the recipient.
        user_id (UUID, optional): Profile id, when picked from the user search.
    """

    email: str
    user_id: Optional[UUID] = None


class SharedNoteCreate(BaseModel):
    """Schema for creating a note and sharing it in one operation.

    Example:
        >>> SharedNoteCreate(
        ...     title="Trip plan",
        ...     content="Day 1: museum",
        ...     recipients=[{"email": "friend@example.com"}]
        ... )
    """

    title: str
    content: Optional[str] = None
    cover_image_url: Optional[str] = None
    recipients: List[ShareRecipientInput]
