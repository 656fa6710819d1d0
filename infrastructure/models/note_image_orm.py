"""SQLAlchemy ORM model for the images of a note's gallery."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from domain.entities.common import utcnow
from infrastructure.models.base import Base


class NoteImageORM(Base):
    """SQLAlchemy ORM model for the ``note_images`` table.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        note_id (UUID): Foreign key to the owning note.
        image_url (str): Public URL returned by the image store.
        order_index (int): Relative position in the gallery.
        created_at (datetime): Timestamp when the image was attached.
    """

    __tablename__ = "note_images"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    note_id = Column(
        Uuid,
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to the owning note",
    )

    image_url = Column(Text, nullable=False, comment="Public URL of the image")

    order_index = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    note = relationship("NoteORM", back_populates="images")

    def __repr__(self) -> str:
        return f"<NoteImageORM(id={self.id}, note_id={self.note_id}, order={self.order_index})>"
