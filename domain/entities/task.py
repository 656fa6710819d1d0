"""Task domain entity for the NotyApp service.

A task is a standalone to-do item owned by a user, with an optional
description, a checklist and at most one tag.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID, uuid4

from domain.entities.checklist import ChecklistItem, build_checklist
from domain.entities.common import utcnow

if TYPE_CHECKING:
    from domain.entities.tag import TagEntity


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up.

    Example:
        >>> round_half_up(12.5)
        13
    """
    return math.floor(value + 0.5)


@dataclass
class UserTask:
    """Domain entity representing a user task.

    Attributes:
        id (UUID): Unique identifier for the task.
        owner_id (UUID): UUID of the user who owns the task.
        title (str): Title of the task, never blank.
        description (Optional[str]): Free-text description.
        completed (bool): Completion flag of the task itself.
        order_index (int): Position among the user's tasks, 0 on creation.
        created_at (datetime): Timestamp when the task was created.
        updated_at (datetime): Timestamp when the task was last edited.
        tags (List[TagEntity]): Attached tags, at most one by business rule.
        checklist (List[ChecklistItem]): Checklist ordered by order index.
    """

    id: UUID
    owner_id: UUID
    title: str
    description: Optional[str] = None
    completed: bool = False
    order_index: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    tags: List["TagEntity"] = field(default_factory=list)
    checklist: List[ChecklistItem] = field(default_factory=list)

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("Task title is required")
        self.title = self.title.strip()

    @classmethod
    def create_new(
        cls,
        owner_id: UUID,
        title: str,
        description: Optional[str] = None,
        tags: Optional[List["TagEntity"]] = None,
        checklist_titles: Optional[List[str]] = None,
    ) -> "UserTask":
        task_id = uuid4()
        now = utcnow()
        return cls(
            id=task_id,
            owner_id=owner_id,
            title=title,
            description=description or None,
            completed=False,
            order_index=0,
            created_at=now,
            updated_at=now,
            tags=list(tags or []),
            checklist=build_checklist(task_id, checklist_titles),
        )

    def update_details(self, title: str, description: Optional[str]) -> None:
        """Replace the title and description of the task.

        Raises:
            ValueError: If the new title is empty.
        """
        if not title or not title.strip():
            raise ValueError("Task title is required")
        self.title = title.strip()
        self.description = description or None
        self.updated_at = utcnow()

    @property
    def tag(self) -> Optional["TagEntity"]:
        return self.tags[0] if self.tags else None

    @property
    def completed_items(self) -> int:
        return sum(1 for item in self.checklist if item.completed)

    @property
    def progress(self) -> int:
        """Completion percentage of the task.

        Without checklist items the task is either done (100) or not (0);
        otherwise the share of checked items, rounded to an integer.
        """
        if not self.checklist:
            return 100 if self.completed else 0
        return round_half_up(self.completed_items / len(self.checklist) * 100)

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.owner_id == user_id

    def find_checklist_item(self, item_id: UUID) -> Optional[ChecklistItem]:
        return next((item for item in self.checklist if item.id == item_id), None)

    def matches_text_search(self, query: str) -> bool:
        """Check if the title or the description contains the query."""
        if not query.strip():
            return True

        query_lower = query.lower().strip()
        return query_lower in self.title.lower() or query_lower in (
            self.description or ""
        ).lower()


def total_progress(tasks: List[UserTask]) -> int:
    """Average progress of a list of tasks, 0 for an empty list."""
    if not tasks:
        return 0
    return round_half_up(sum(task.progress for task in tasks) / len(tasks))
