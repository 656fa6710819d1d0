"""SQLAlchemy ORM models for checklist items.

Notes and user tasks each own a checklist stored in its own table:

Classes:
    NoteChecklistItemORM: Items of a note, stored in the ``tasks`` table.
    TaskChecklistItemORM: Items of a user task, stored in ``task_checklist_items``.

Both tables share the same columns; only the parent foreign key differs.
"""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from domain.entities.common import utcnow
from infrastructure.models.base import Base


class NoteChecklistItemORM(Base):
    """SQLAlchemy ORM model for note checklist items.

    The backend names this table ``tasks``; its rows are not user tasks.
    """

    __tablename__ = "tasks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    note_id = Column(
        Uuid,
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to the owning note",
    )

    title = Column(Text, nullable=False)

    completed = Column(Boolean, nullable=False, default=False)

    order_index = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    note = relationship("NoteORM", back_populates="checklist_items")

    @property
    def parent_id(self):
        return self.note_id

    def __repr__(self) -> str:
        return f"<NoteChecklistItemORM(id={self.id}, note_id={self.note_id}, title='{self.title}')>"


class TaskChecklistItemORM(Base):
    """SQLAlchemy ORM model for user task checklist items."""

    __tablename__ = "task_checklist_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    task_id = Column(
        Uuid,
        ForeignKey("user_tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to the owning user task",
    )

    title = Column(Text, nullable=False)

    completed = Column(Boolean, nullable=False, default=False)

    order_index = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    task = relationship("UserTaskORM", back_populates="checklist_items")

    @property
    def parent_id(self):
        return self.task_id

    def __repr__(self) -> str:
        return f"<TaskChecklistItemORM(id={self.id}, task_id={self.task_id}, title='{self.title}')>"
