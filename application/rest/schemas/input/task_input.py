"""Task input schemas for API requests."""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class TaskCreate(BaseModel):
    """Schema for creating a new task.

    Attributes:
        title (str): The title of the task.
        description (str, optional): Free-text description.
        tag_ids (List[UUID], optional): Tag to attach, at most one.
        checklist (List[str], optional): Initial checklist item titles;
            blank titles are dropped.

    Example:
        >>> TaskCreate(title="Move out", checklist=["Boxes", "", "Van"])
    """

    title: str
    description: Optional[str] = None
    tag_ids: Optional[List[UUID]] = None
    checklist: Optional[List[str]] = None


class TaskUpdate(BaseModel):
    title: str
    description: Optional[str] = None
    tag_ids: Optional[List[UUID]] = None
