"""Association tables for many-to-many relationships in SQLAlchemy ORM.

This module defines the association tables that link notes and tasks to the
global tag catalog.

Tables:
    note_tags: Associates notes with tags (many-to-many relationship)
    task_tags: Associates user tasks with tags (many-to-many relationship)

Architecture:
    The storage allows any number of tags per item; the single-tag rule is
    enforced by the domain layer, not by these tables.
"""

from infrastructure.models.base import Base
from sqlalchemy import Column, ForeignKey, Table, Uuid

note_tags = Table(
    "note_tags",
    Base.metadata,
    Column("note_id", Uuid, ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Uuid, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    comment="Association table for many-to-many relationship between notes and tags",
)

task_tags = Table(
    "task_tags",
    Base.metadata,
    Column(
        "task_id", Uuid, ForeignKey("user_tasks.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("tag_id", Uuid, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    comment="Association table for many-to-many relationship between tasks and tags",
)
