"""Task domain service for the NotyApp service.

Tasks are private to their owner: every operation on a task owned by
someone else behaves as if the task did not exist.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from domain.entities.checklist import ChecklistItem
from domain.entities.common import next_order_index
from domain.entities.listing import ListCriteria
from domain.entities.task import UserTask

if TYPE_CHECKING:
    from domain.entities.user import AuthenticatedUser
    from domain.repositories.task_repository import TaskRepository
    from domain.services.tag_service import TagService
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class TaskError(Exception):
    """Base exception for task-related errors."""

    pass


class TaskNotFoundError(TaskError):
    """Exception raised when a task is not found or not owned by the caller."""

    pass


class TaskService:
    """Domain service for handling user task operations."""

    def __init__(self, task_repository: "TaskRepository", tag_service: "TagService"):
        self._task_repository = task_repository
        self._tag_service = tag_service

    async def list_tasks(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        criteria: Optional[ListCriteria] = None,
        today: Optional[date] = None,
    ) -> List[UserTask]:
        """List the user's tasks, newest first, then apply the filters.

        Args:
            db_session: Database session for this operation
            user: The authenticated user
            criteria: Text query and creation date window
            today: Reference day for the date window, defaults to today

        Returns:
            List[UserTask]: Matching tasks
        """
        logger.info(f"Listing tasks for user {user.id}")
        tasks = await self._task_repository.list_tasks_by_owner(db_session, user.id)
        return (criteria or ListCriteria()).apply(tasks, today=today)

    async def create_task(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        title: str,
        description: Optional[str] = None,
        tag_ids: Optional[List[UUID]] = None,
        checklist: Optional[List[str]] = None,
    ) -> UserTask:
        """Create a task with its initial checklist.

        Raises:
            ValueError: If title or tags are invalid
            TagNotFoundError: If a requested tag does not exist
            TaskError: If creation fails
        """
        tags = await self._tag_service.resolve_assignment(db_session, tag_ids)

        try:
            task = UserTask.create_new(
                owner_id=user.id,
                title=title,
                description=description,
                tags=tags,
                checklist_titles=checklist,
            )
        except ValueError as e:
            logger.warning(f"Invalid task data: {str(e)}")
            raise

        try:
            created = await self._task_repository.create_task(db_session, task)
        except Exception as e:
            logger.error(f"Failed to create task: {str(e)}")
            raise TaskError(f"Failed to create task: {str(e)}") from e

        logger.info(f"Created task {created.id} for user {user.id}")
        return created

    async def get_task(
        self, db_session: "Session", user: "AuthenticatedUser", task_id: UUID
    ) -> UserTask:
        """Get a task owned by the user.

        Raises:
            TaskNotFoundError: If the task does not exist or is not owned by the user
        """
        task = await self._task_repository.get_task(db_session, task_id)
        if not task or not task.is_owned_by(user.id):
            raise TaskNotFoundError(f"Task {task_id} not found")
        return task

    async def update_task(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        task_id: UUID,
        title: str,
        description: Optional[str],
        tag_ids: Optional[List[UUID]] = None,
    ) -> UserTask:
        """Update title, description and optionally the tag of a task."""
        task = await self.get_task(db_session, user, task_id)

        tags = None
        if tag_ids is not None:
            tags = await self._tag_service.resolve_assignment(db_session, tag_ids)

        try:
            task.update_details(title, description)
        except ValueError as e:
            logger.warning(f"Invalid task update for {task_id}: {str(e)}")
            raise

        await self._task_repository.update_task(db_session, task)
        if tags is not None:
            await self._task_repository.replace_tags(
                db_session, task_id, [tag.id for tag in tags]
            )
        return await self._reload(db_session, task_id)

    async def delete_task(
        self, db_session: "Session", user: "AuthenticatedUser", task_id: UUID
    ) -> None:
        task = await self.get_task(db_session, user, task_id)
        await self._task_repository.delete_task(db_session, task.id)
        logger.info(f"Deleted task {task_id}")

    async def add_checklist_item(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        task_id: UUID,
        title: str,
    ) -> UserTask:
        """Append an item to the task's checklist.

        Raises:
            ValueError: If the title is blank
        """
        task = await self.get_task(db_session, user, task_id)
        item = ChecklistItem.create_new(
            parent_id=task.id,
            title=title,
            order_index=next_order_index(item.order_index for item in task.checklist),
        )
        await self._task_repository.add_checklist_item(db_session, item)
        return await self._reload(db_session, task_id)

    async def toggle_checklist_item(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        task_id: UUID,
        item_id: UUID,
    ) -> UserTask:
        task = await self.get_task(db_session, user, task_id)
        item = task.find_checklist_item(item_id)
        if not item:
            raise TaskNotFoundError(f"Checklist item {item_id} not found")

        item.toggle()
        await self._task_repository.update_checklist_item(db_session, item)
        return await self._reload(db_session, task_id)

    async def delete_checklist_item(
        self,
        db_session: "Session",
        user: "AuthenticatedUser",
        task_id: UUID,
        item_id: UUID,
    ) -> UserTask:
        task = await self.get_task(db_session, user, task_id)
        if not task.find_checklist_item(item_id):
            raise TaskNotFoundError(f"Checklist item {item_id} not found")

        await self._task_repository.delete_checklist_item(db_session, task_id, item_id)
        return await self._reload(db_session, task_id)

    async def _reload(self, db_session: "Session", task_id: UUID) -> UserTask:
        task = await self._task_repository.get_task(db_session, task_id)
        if not task:
            raise TaskNotFoundError(f"Task {task_id} not found")
        return task
