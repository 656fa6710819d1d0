"""Checklist item entity shared by notes and tasks."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from domain.entities.common import utcnow


@dataclass
class ChecklistItem:
    """A titled, completable child row of a note or a task.

    Attributes:
        id (UUID): Unique identifier of the item.
        parent_id (UUID): Id of the owning note or task.
        title (str): Text of the item.
        completed (bool): Whether the item is checked.
        order_index (int): Relative position among the parent's items.
        created_at (datetime): Creation timestamp.
    """

    id: UUID
    parent_id: UUID
    title: str
    completed: bool = False
    order_index: int = 0
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("Checklist item title cannot be empty")
        self.title = self.title.strip()

    @classmethod
    def create_new(cls, parent_id: UUID, title: str, order_index: int) -> "ChecklistItem":
        return cls(
            id=uuid4(),
            parent_id=parent_id,
            title=title,
            completed=False,
            order_index=order_index,
        )

    def toggle(self) -> None:
        self.completed = not self.completed


def build_checklist(parent_id: UUID, titles: Optional[List[str]]) -> List[ChecklistItem]:
    """Build the initial checklist submitted together with its parent.

    Blank titles are dropped; the remaining items get indices ``0..n-1`` in
    submission order.

    Example:
        >>> items = build_checklist(task_id, ["Buy milk", "  ", "Call mom"])
        >>> [(item.title, item.order_index) for item in items]
        [('Buy milk', 0), ('Call mom', 1)]
    """
    cleaned = [title for title in (titles or []) if title and title.strip()]
    return [
        ChecklistItem.create_new(parent_id, title, index)
        for index, title in enumerate(cleaned)
    ]
