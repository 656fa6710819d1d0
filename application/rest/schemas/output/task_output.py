"""Task output schemas for API responses."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from application.converters.tag_converter import TagConverter
from application.rest.schemas.output.note_output import ChecklistItemResponse
from application.rest.schemas.output.tag_output import TagResponse
from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.task import UserTask


class TaskResponse(BaseModel):
    """Schema for task data in API responses.

    Attributes:
        id (str): UUID string identifier of the task.
        title (str): The title of the task.
        description (str, optional): Free-text description.
        completed (bool): Completion flag of the task itself.
        order_index (int): Position among the user's tasks.
        created_at (datetime): Timestamp when the task was created.
        updated_at (datetime): Timestamp when the task was last updated.
        tag (TagResponse, optional): The task's tag.
        checklist (List[ChecklistItemResponse]): Items ordered by order index.
        completed_items (int): Number of checked items.
        total_items (int): Number of items.
        progress (int): Completion percentage, 0 to 100.
    """

    id: str
    title: str
    description: Optional[str] = None
    completed: bool
    order_index: int
    created_at: datetime
    updated_at: datetime
    tag: Optional[TagResponse] = None
    checklist: List[ChecklistItemResponse] = []
    completed_items: int
    total_items: int
    progress: int

    @classmethod
    def from_entity(cls, task: UserTask) -> TaskResponse:
        return cls(
            id=str(task.id),
            title=task.title,
            description=task.description,
            completed=task.completed,
            order_index=task.order_index,
            created_at=task.created_at,
            updated_at=task.updated_at,
            tag=TagConverter.optional_entity_to_response(task.tag),
            checklist=[ChecklistItemResponse.from_entity(item) for item in task.checklist],
            completed_items=task.completed_items,
            total_items=len(task.checklist),
            progress=task.progress,
        )


class TasksListResponse(BaseModel):
    """Schema for the filtered task list.

    Attributes:
        tasks (List[TaskResponse]): Tasks, most recently created first.
        total_progress (int): Rounded mean progress of the listed tasks.
    """

    tasks: List[TaskResponse]
    total_progress: int
