"""Note domain entity for the NotyApp service.

This module contains the core Note domain entity representing a rich note
(title, free text, cover image, image gallery, checklist and a single tag)
following Domain-Driven Design principles.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID, uuid4

from domain.entities.checklist import ChecklistItem, build_checklist
from domain.entities.common import utcnow

if TYPE_CHECKING:
    from domain.entities.tag import TagEntity


class NoteAccess(Enum):
    """How the requesting user may interact with a note."""

    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"

    @property
    def can_edit(self) -> bool:
        return self in (NoteAccess.OWNER, NoteAccess.EDITOR)


@dataclass
class NoteImage:
    """An image of a note's gallery.

    Attributes:
        id (UUID): Unique identifier of the gallery row.
        note_id (UUID): Id of the owning note.
        image_url (str): Public URL returned by the image store.
        order_index (int): Relative position in the gallery.
        created_at (datetime): Creation timestamp.
    """

    id: UUID
    note_id: UUID
    image_url: str
    order_index: int
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        if not self.image_url or not self.image_url.strip():
            raise ValueError("Image URL cannot be empty")
        self.image_url = self.image_url.strip()

    @classmethod
    def create_new(cls, note_id: UUID, image_url: str, order_index: int) -> "NoteImage":
        return cls(id=uuid4(), note_id=note_id, image_url=image_url, order_index=order_index)


@dataclass
class Note:
    """Domain entity representing a note owned by a user.

    Attributes:
        id (UUID): Unique identifier for the note.
        title (str): Title of the note, never blank.
        content (Optional[str]): Free-text body of the note.
        owner_id (UUID): UUID of the user who owns the note.
        cover_image_url (Optional[str]): Public URL of the cover image.
        created_at (datetime): Timestamp when the note was created.
        updated_at (datetime): Timestamp when the note was last edited.
        tags (List[TagEntity]): Attached tags, at most one by business rule.
        images (List[NoteImage]): Gallery ordered by order index.
        checklist (List[ChecklistItem]): Checklist ordered by order index.
    """

    id: UUID
    title: str
    content: Optional[str]
    owner_id: UUID
    cover_image_url: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    tags: List["TagEntity"] = field(default_factory=list)
    images: List[NoteImage] = field(default_factory=list)
    checklist: List[ChecklistItem] = field(default_factory=list)

    def __post_init__(self):
        """Validate note after initialization.

        Raises:
            ValueError: If note title is empty.
        """
        if not self.title or not self.title.strip():
            raise ValueError("Note title is required")
        self.title = self.title.strip()

    @classmethod
    def create_new(
        cls,
        title: str,
        content: Optional[str],
        owner_id: UUID,
        cover_image_url: Optional[str] = None,
        tags: Optional[List["TagEntity"]] = None,
        checklist_titles: Optional[List[str]] = None,
    ) -> "Note":
        """Factory method to create a new note with default values.

        Args:
            title (str): Title of the note.
            content (Optional[str]): Content of the note.
            owner_id (UUID): UUID of the note owner.
            cover_image_url (Optional[str]): URL of an already uploaded cover.
            tags (Optional[List[TagEntity]]): Tags to attach.
            checklist_titles (Optional[List[str]]): Initial checklist titles.

        Returns:
            Note: New note instance with generated UUID and timestamps.

        Raises:
            ValueError: If title is empty.
        """
        note_id = uuid4()
        now = utcnow()
        return cls(
            id=note_id,
            title=title,
            content=content,
            owner_id=owner_id,
            cover_image_url=cover_image_url or None,
            created_at=now,
            updated_at=now,
            tags=list(tags or []),
            checklist=build_checklist(note_id, checklist_titles),
        )

    def update_content(
        self, title: str, content: Optional[str], cover_image_url: Optional[str]
    ) -> None:
        """Replace the editable fields of the note.

        Raises:
            ValueError: If the new title is empty.
        """
        if not title or not title.strip():
            raise ValueError("Note title is required")

        self.title = title.strip()
        self.content = content
        self.cover_image_url = cover_image_url or None
        self.updated_at = utcnow()

    @property
    def tag(self) -> Optional["TagEntity"]:
        return self.tags[0] if self.tags else None

    def is_owned_by(self, user_id: UUID) -> bool:
        """Check if the note is owned by the specified user.

        Args:
            user_id (UUID): UUID of the user to check ownership for.

        Returns:
            bool: True if the user owns the note, False otherwise.
        """
        return self.owner_id == user_id

    def find_image(self, image_id: UUID) -> Optional[NoteImage]:
        return next((image for image in self.images if image.id == image_id), None)

    def find_checklist_item(self, item_id: UUID) -> Optional[ChecklistItem]:
        return next((item for item in self.checklist if item.id == item_id), None)

    def matches_text_search(self, query: str) -> bool:
        """Check if the note title contains the query, ignoring case.

        Args:
            query (str): The search query string.

        Returns:
            bool: True if the note matches the query, False otherwise.
        """
        if not query.strip():
            return True

        return query.lower().strip() in self.title.lower()
