"""Note share domain entity.

A share makes a note visible (and, with ``can_edit``, editable) to another
registered user, referenced by email address.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from domain.entities.common import utcnow


def normalize_email(email: str) -> str:
    """Strip and lowercase an email address.

    Raises:
        ValueError: If the value does not look like an email address.
    """
    normalized = (email or "").strip().lower()
    if "@" not in normalized or normalized.startswith("@") or normalized.endswith("@"):
        raise ValueError("A valid email address is required")
    return normalized


@dataclass
class NoteShare:
    """Domain entity representing a note shared with another user.

    Attributes:
        id (UUID): Unique identifier of the share.
        note_id (UUID): Id of the shared note.
        owner_id (UUID): Id of the note owner who created the share.
        shared_with_email (str): Recipient email, normalized.
        shared_with_user_id (Optional[UUID]): Recipient user id when the email
            belongs to a registered profile at share time.
        can_edit (bool): Whether the recipient may edit the note.
        created_at (datetime): Timestamp when the share was created.
    """

    id: UUID
    note_id: UUID
    owner_id: UUID
    shared_with_email: str
    shared_with_user_id: Optional[UUID] = None
    can_edit: bool = True
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        self.shared_with_email = normalize_email(self.shared_with_email)

    @classmethod
    def create_new(
        cls,
        note_id: UUID,
        owner_id: UUID,
        shared_with_email: str,
        shared_with_user_id: Optional[UUID] = None,
    ) -> "NoteShare":
        return cls(
            id=uuid4(),
            note_id=note_id,
            owner_id=owner_id,
            shared_with_email=shared_with_email,
            shared_with_user_id=shared_with_user_id,
            can_edit=True,
        )

    def is_recipient(self, user_id: UUID, email: Optional[str]) -> bool:
        """Check whether a user is the recipient, by id or by email."""
        if self.shared_with_user_id is not None and self.shared_with_user_id == user_id:
            return True
        return bool(email) and self.shared_with_email == email.strip().lower()
