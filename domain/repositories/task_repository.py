"""Task repository interface for the NotyApp service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

if TYPE_CHECKING:
    from domain.entities.checklist import ChecklistItem
    from domain.entities.task import UserTask
    from sqlalchemy.orm import Session


class TaskRepository(ABC):
    """Abstract repository interface for user tasks.

    Like the note repository, it does not filter by owner; the task service
    checks ownership on every operation.
    """

    @abstractmethod
    async def create_task(self, db_session: Session, task: UserTask) -> UserTask:
        """Create a task together with its initial checklist and tags.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            task (UserTask): Domain entity to create

        Returns:
            UserTask: Created task, re-read from storage
        """
        pass

    @abstractmethod
    async def get_task(self, db_session: Session, task_id: UUID) -> Optional[UserTask]:
        pass

    @abstractmethod
    async def list_tasks_by_owner(
        self, db_session: Session, owner_id: UUID
    ) -> List[UserTask]:
        """List every task of a user, most recently created first."""
        pass

    @abstractmethod
    async def update_task(self, db_session: Session, task: UserTask) -> UserTask:
        """Persist title, description and completion flag of a task.

        Raises:
            ValueError: If the task no longer exists
        """
        pass

    @abstractmethod
    async def delete_task(self, db_session: Session, task_id: UUID) -> bool:
        pass

    @abstractmethod
    async def add_checklist_item(
        self, db_session: Session, item: ChecklistItem
    ) -> ChecklistItem:
        pass

    @abstractmethod
    async def update_checklist_item(
        self, db_session: Session, item: ChecklistItem
    ) -> ChecklistItem:
        pass

    @abstractmethod
    async def delete_checklist_item(
        self, db_session: Session, task_id: UUID, item_id: UUID
    ) -> bool:
        pass

    @abstractmethod
    async def replace_tags(
        self, db_session: Session, task_id: UUID, tag_ids: List[UUID]
    ) -> None:
        """Replace every tag link of a task with the given tags."""
        pass
