"""SQLAlchemy ORM model for note shares.

This module contains the SharedNoteORM class that maps the ``shared_notes``
table, which grants a recipient (by email and, when known, user id) access
to a note.

Classes:
    SharedNoteORM: SQLAlchemy model for note sharing between users.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by:
    - SQLAlchemyShareRepository implementation
    - Other infrastructure-specific code

    Domain code should use the NoteShare entity instead of this ORM model.
"""

import uuid

from infrastructure.models.base import Base
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from domain.entities.common import utcnow


class SharedNoteORM(Base):
    """SQLAlchemy ORM model for note sharing between users.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        note_id (UUID): Foreign key to the shared note.
        owner_id (UUID): Auth user UUID of the note owner.
        shared_with_email (str): Normalized recipient email.
        shared_with_user_id (UUID): Recipient user UUID, when known.
        can_edit (bool): Whether the recipient may edit the note.
        created_at (datetime): Timestamp when share was created.
        note (NoteORM): Many-to-one relationship to the shared note.

    Table Schema:
        - Table name: 'shared_notes'
        - Primary key: id (UUID)
        - Foreign key: note_id -> notes.id
        - Unique constraint: (note_id, shared_with_email)

    Example:
        >>> share_orm = SharedNoteORM(
        ...     note_id=note.id,
        ...     owner_id=owner_id,
        ...     shared_with_email="friend@example.com",
        ... )
        >>> db.add(share_orm)
        >>> db.commit()
    """

    __tablename__ = "shared_notes"
    __table_args__ = (
        UniqueConstraint(
            "note_id", "shared_with_email", name="shared_notes_note_id_email_key"
        ),
    )

    # Primary key with auto-generated UUID
    id = Column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key, auto-generated UUID",
    )

    # Foreign key to the shared note
    note_id = Column(
        Uuid,
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to the shared note",
    )

    owner_id = Column(Uuid, nullable=False, index=True, comment="Note owner UUID")

    shared_with_email = Column(
        String(255), nullable=False, index=True, comment="Recipient email"
    )

    shared_with_user_id = Column(
        Uuid, nullable=True, index=True, comment="Recipient user UUID, when known"
    )

    can_edit = Column(Boolean, nullable=False, default=True)

    # Creation timestamp
    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when share was created",
    )

    note = relationship("NoteORM", back_populates="shares", lazy="select")

    def __repr__(self) -> str:
        return (
            f"<SharedNoteORM(id={self.id}, note_id={self.note_id}, "
            f"shared_with={self.shared_with_email})>"
        )
