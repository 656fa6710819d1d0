"""SQLAlchemy ORM model for Note entity.

This module contains the NoteORM class that maps the backend's ``notes``
table and its relationships to gallery images, checklist items, tags and
shares.

Classes:
    NoteORM: SQLAlchemy model for notes.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by:
    - SQLAlchemyNoteRepository and SQLAlchemyShareRepository
    - Other infrastructure-specific code

    Domain code should use the Note entity instead of this ORM model.
"""

import uuid

from sqlalchemy import Column, DateTime, String, Text, Uuid
from sqlalchemy.orm import relationship

from domain.entities.common import utcnow
from infrastructure.models.base import Base


class NoteORM(Base):
    """SQLAlchemy ORM model for notes.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        title (str): Note title, max 255 characters.
        content (str): Note content, nullable unlimited text.
        cover_image_url (str): Public URL of the cover image, nullable.
        user_id (UUID): Auth user UUID who owns the note.
        created_at (datetime): Timestamp when note was created.
        updated_at (datetime): Timestamp when note was last updated.
        images (List[NoteImageORM]): Gallery, ordered by order index.
        checklist_items (List[NoteChecklistItemORM]): Checklist, ordered by order index.
        tags (List[TagORM]): Many-to-many relationship with tags.
        shares (List[SharedNoteORM]): Shares of this note.

    Table Schema:
        - Table name: 'notes'
        - Primary key: id (UUID)
        - Indexes: user_id

    Example:
        >>> note_orm = NoteORM(title="Groceries", content=None, user_id=user_id)
        >>> db.add(note_orm)
        >>> db.commit()
    """

    __tablename__ = "notes"

    # Primary key with auto-generated UUID
    id = Column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key, auto-generated UUID",
    )

    title = Column(String(255), nullable=False, comment="Note title")

    content = Column(Text, nullable=True, comment="Note content, unlimited text")

    cover_image_url = Column(Text, nullable=True, comment="Public URL of the cover image")

    # Owner identification (auth user id)
    user_id = Column(Uuid, nullable=False, index=True, comment="Owner auth user UUID")

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when note was created",
    )

    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when note was last updated",
    )

    images = relationship(
        "NoteImageORM",
        back_populates="note",
        order_by="NoteImageORM.order_index",
        cascade="all, delete-orphan",
        lazy="select",
    )

    checklist_items = relationship(
        "NoteChecklistItemORM",
        back_populates="note",
        order_by="NoteChecklistItemORM.order_index",
        cascade="all, delete-orphan",
        lazy="select",
    )

    tags = relationship("TagORM", secondary="note_tags", lazy="select")

    shares = relationship(
        "SharedNoteORM",
        back_populates="note",
        cascade="all, delete-orphan",
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"<NoteORM(id={self.id}, title='{self.title}', user_id='{self.user_id}')>"
