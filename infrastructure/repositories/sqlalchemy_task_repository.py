"""SQLAlchemy implementation of the task repository."""

from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from domain.entities.checklist import ChecklistItem
from domain.entities.common import as_naive_utc
from domain.entities.task import UserTask
from domain.repositories.task_repository import TaskRepository
from infrastructure.models.associations import task_tags
from infrastructure.models.checklist_orm import TaskChecklistItemORM
from infrastructure.models.tag_orm import TagORM
from infrastructure.models.user_task_orm import UserTaskORM
from infrastructure.repositories.checklist_mapping import item_to_entity, items_to_entities
from infrastructure.repositories.sqlalchemy_tag_repository import SqlAlchemyTagRepository
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SQLAlchemyTaskRepository(TaskRepository):
    """SQLAlchemy implementation of the task repository.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session.
    """

    async def create_task(self, db_session: Session, task: UserTask) -> UserTask:
        try:
            db_task = UserTaskORM(
                id=task.id,
                user_id=task.owner_id,
                title=task.title,
                description=task.description,
                completed=task.completed,
                order_index=task.order_index,
                created_at=task.created_at,
                updated_at=task.updated_at,
            )

            for item in task.checklist:
                db_task.checklist_items.append(
                    TaskChecklistItemORM(
                        id=item.id,
                        title=item.title,
                        completed=item.completed,
                        order_index=item.order_index,
                        created_at=item.created_at,
                    )
                )

            for tag in task.tags:
                tag_orm = db_session.query(TagORM).filter(TagORM.id == tag.id).first()
                if tag_orm:
                    db_task.tags.append(tag_orm)

            db_session.add(db_task)
            db_session.commit()
            db_session.refresh(db_task)

            return self._orm_to_domain_entity(db_task)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to create task: {str(e)}")
            raise

    async def get_task(self, db_session: Session, task_id: UUID) -> Optional[UserTask]:
        try:
            db_task = (
                db_session.query(UserTaskORM).filter(UserTaskORM.id == task_id).first()
            )
            return self._orm_to_domain_entity(db_task) if db_task else None

        except Exception as e:
            logger.error(f"Failed to get task {task_id}: {str(e)}")
            raise

    async def list_tasks_by_owner(
        self, db_session: Session, owner_id: UUID
    ) -> List[UserTask]:
        try:
            tasks = (
                db_session.query(UserTaskORM)
                .filter(UserTaskORM.user_id == owner_id)
                .order_by(UserTaskORM.created_at.desc())
                .all()
            )
            logger.info(f"Found {len(tasks)} tasks for user {owner_id}")
            return [self._orm_to_domain_entity(task) for task in tasks]

        except Exception as e:
            logger.error(f"Failed to list tasks of user {owner_id}: {str(e)}")
            raise

    async def update_task(self, db_session: Session, task: UserTask) -> UserTask:
        try:
            db_task = (
                db_session.query(UserTaskORM).filter(UserTaskORM.id == task.id).first()
            )
            if not db_task:
                raise ValueError(f"Task {task.id} not found")

            db_task.title = task.title
            db_task.description = task.description
            db_task.completed = task.completed
            db_task.updated_at = task.updated_at

            db_session.commit()
            db_session.refresh(db_task)
            return self._orm_to_domain_entity(db_task)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update task {task.id}: {str(e)}")
            raise

    async def delete_task(self, db_session: Session, task_id: UUID) -> bool:
        try:
            db_task = (
                db_session.query(UserTaskORM).filter(UserTaskORM.id == task_id).first()
            )
            if not db_task:
                return False

            db_session.delete(db_task)
            db_session.commit()
            return True

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete task {task_id}: {str(e)}")
            raise

    async def add_checklist_item(
        self, db_session: Session, item: ChecklistItem
    ) -> ChecklistItem:
        try:
            db_item = TaskChecklistItemORM(
                id=item.id,
                task_id=item.parent_id,
                title=item.title,
                completed=item.completed,
                order_index=item.order_index,
                created_at=item.created_at,
            )
            db_session.add(db_item)
            db_session.commit()
            db_session.refresh(db_item)
            return item_to_entity(db_item)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to add checklist item to task {item.parent_id}: {str(e)}")
            raise

    async def update_checklist_item(
        self, db_session: Session, item: ChecklistItem
    ) -> ChecklistItem:
        try:
            db_item = (
                db_session.query(TaskChecklistItemORM)
                .filter(TaskChecklistItemORM.id == item.id)
                .first()
            )
            if not db_item:
                raise ValueError(f"Checklist item {item.id} not found")

            db_item.completed = item.completed
            db_session.commit()
            db_session.refresh(db_item)
            return item_to_entity(db_item)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update checklist item {item.id}: {str(e)}")
            raise

    async def delete_checklist_item(
        self, db_session: Session, task_id: UUID, item_id: UUID
    ) -> bool:
        try:
            db_item = (
                db_session.query(TaskChecklistItemORM)
                .filter(
                    TaskChecklistItemORM.id == item_id,
                    TaskChecklistItemORM.task_id == task_id,
                )
                .first()
            )
            if not db_item:
                return False

            db_session.delete(db_item)
            db_session.commit()
            return True

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete checklist item {item_id}: {str(e)}")
            raise

    async def replace_tags(
        self, db_session: Session, task_id: UUID, tag_ids: List[UUID]
    ) -> None:
        try:
            db_session.execute(task_tags.delete().where(task_tags.c.task_id == task_id))
            for tag_id in tag_ids:
                db_session.execute(
                    task_tags.insert().values(task_id=task_id, tag_id=tag_id)
                )
            db_session.commit()
            db_session.expire_all()

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to replace tags of task {task_id}: {str(e)}")
            raise

    def _orm_to_domain_entity(self, task_orm: UserTaskORM) -> UserTask:
        return UserTask(
            id=task_orm.id,
            owner_id=task_orm.user_id,
            title=task_orm.title,
            description=task_orm.description,
            completed=bool(task_orm.completed),
            order_index=task_orm.order_index,
            created_at=as_naive_utc(task_orm.created_at),
            updated_at=as_naive_utc(task_orm.updated_at),
            tags=[SqlAlchemyTagRepository.model_to_entity(tag) for tag in task_orm.tags],
            checklist=items_to_entities(task_orm.checklist_items),
        )
