"""Share output schemas for API responses.

This module contains Pydantic models for share-related API responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from application.rest.schemas.output.note_output import NoteDetailResponse
from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.share import NoteShare


class ShareResponse(BaseModel):
    """Schema for share data in API responses.

    Attributes:
        id (str): UUID string identifier of the share.
        note_id (str): UUID string of the shared note.
        owner_id (str): UUID of the user who shared the note.
        shared_with_email (str): Email address of the recipient.
        shared_with_user_id (str, optional): UUID of the recipient, when known.
        can_edit (bool): Whether the recipient may edit the note.
        created_at (datetime): Timestamp when the share was created.

    Example:
        >>> share_response = ShareResponse(
        ...     id="share-uuid-123",
        ...     note_id="note-uuid-456",
        ...     owner_id="owner-uuid",
        ...     shared_with_email="recipient@example.com",
        ...     shared_with_user_id=None,
        ...     can_edit=True,
        ...     created_at=datetime.now()
        ... )
    """

    id: str  # UUID string
    note_id: str  # UUID string
    owner_id: str
    shared_with_email: str
    shared_with_user_id: Optional[str] = None
    can_edit: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, share: NoteShare) -> ShareResponse:
        return cls(
            id=str(share.id),
            note_id=str(share.note_id),
            owner_id=str(share.owner_id),
            shared_with_email=share.shared_with_email,
            shared_with_user_id=(
                str(share.shared_with_user_id) if share.shared_with_user_id else None
            ),
            can_edit=share.can_edit,
            created_at=share.created_at,
        )


class NoteSharesResponse(BaseModel):
    """Schema for all shares of a note.

    Attributes:
        note_id (str): UUID string of the note.
        shares (List[ShareResponse]): Shares, oldest first.
    """

    note_id: str  # UUID string
    shares: List[ShareResponse]


class SharedNoteCreatedResponse(BaseModel):
    """Schema returned after creating a shared note."""

    note: NoteDetailResponse
    shares: List[ShareResponse]
