"""SQLAlchemy ORM model for Tag entity.

This module contains the TagORM class that maps the global tag catalog.

Classes:
    TagORM: SQLAlchemy model for catalog tags.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by:
    - SqlAlchemyTagRepository implementation
    - Note and task repositories, to link tags
    - Other infrastructure-specific code

    Domain code should use TagEntity instead of this ORM model.
"""

import uuid

from infrastructure.models.base import Base
from sqlalchemy import Column, DateTime, String, Uuid

from domain.entities.common import utcnow


class TagORM(Base):
    """SQLAlchemy ORM model for tags that categorize notes and tasks.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        name (str): Tag name, max 50 characters.
        icon (str): Name of the icon shown with the tag.
        color (str): Optional display color.
        created_at (datetime): Timestamp when tag was created.

    Table Schema:
        - Table name: 'tags'
        - Primary key: id (UUID)

    Example:
        >>> tag_orm = TagORM(name="Work", icon="Code", color="#3b82f6")
        >>> db.add(tag_orm)
        >>> db.commit()
    """

    __tablename__ = "tags"

    # Primary key with auto-generated UUID
    id = Column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key, auto-generated UUID",
    )

    name = Column(String(50), nullable=False, comment="Tag display name")

    icon = Column(String(50), nullable=True, comment="Icon name shown with the tag")

    color = Column(String(20), nullable=True, comment="Display color")

    # Creation timestamp
    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when tag was created",
    )

    def __repr__(self) -> str:
        return f"<TagORM(id={self.id}, name='{self.name}')>"

    def __str__(self) -> str:
        return self.name
