"""SQLAlchemy ORM model for user profiles."""

from sqlalchemy import Column, DateTime, String, Text, Uuid

from domain.entities.common import utcnow
from infrastructure.models.base import Base


class ProfileORM(Base):
    """SQLAlchemy ORM model for the ``profiles`` table.

    Rows are created by the data backend when a user signs up; the id is the
    auth user id.
    """

    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, comment="Auth user UUID")

    email = Column(String(255), nullable=False, index=True)

    full_name = Column(String(255), nullable=True)

    avatar_url = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<ProfileORM(id={self.id}, email='{self.email}')>"
