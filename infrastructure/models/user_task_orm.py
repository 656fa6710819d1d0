"""SQLAlchemy ORM model for UserTask entity.

Classes:
    UserTaskORM: SQLAlchemy model for standalone user tasks.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by
    SQLAlchemyTaskRepository. Domain code should use the UserTask entity.
"""

import uuid

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from domain.entities.common import utcnow
from infrastructure.models.base import Base


class UserTaskORM(Base):
    """SQLAlchemy ORM model for the ``user_tasks`` table.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        user_id (UUID): Auth user UUID who owns the task.
        title (str): Task title.
        description (str): Optional description.
        completed (bool): Completion flag of the task itself.
        order_index (int): Position among the user's tasks.
        created_at (datetime): Timestamp when task was created.
        updated_at (datetime): Timestamp when task was last updated.
        checklist_items (List[TaskChecklistItemORM]): Checklist, ordered by order index.
        tags (List[TagORM]): Many-to-many relationship with tags.
    """

    __tablename__ = "user_tasks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id = Column(Uuid, nullable=False, index=True, comment="Owner auth user UUID")

    title = Column(String(255), nullable=False)

    description = Column(Text, nullable=True)

    completed = Column(Boolean, nullable=False, default=False)

    order_index = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    checklist_items = relationship(
        "TaskChecklistItemORM",
        back_populates="task",
        order_by="TaskChecklistItemORM.order_index",
        cascade="all, delete-orphan",
        lazy="select",
    )

    tags = relationship("TagORM", secondary="task_tags", lazy="select")

    def __repr__(self) -> str:
        return f"<UserTaskORM(id={self.id}, title='{self.title}', user_id='{self.user_id}')>"
