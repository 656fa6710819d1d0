"""SQLAlchemy implementation of the tag repository.

This module contains the concrete implementation of TagRepositoryInterface
using SQLAlchemy for database operations and entity mapping.
"""

from typing import Iterable, List, Optional
from uuid import UUID

from domain.entities.tag import TagEntity
from domain.repositories.tag_repository import TagRepositoryInterface
from sqlalchemy.orm import Session

from infrastructure.models.tag_orm import TagORM


class SqlAlchemyTagRepository(TagRepositoryInterface):
    """SQLAlchemy implementation of the tag repository.

    This class implements the TagRepositoryInterface using SQLAlchemy
    for database operations. It handles the conversion between domain
    entities and SQLAlchemy models.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session to ensure proper transaction management
    and avoid session leaks.

    Example:
        >>> repository = SqlAlchemyTagRepository()
        >>> with get_db_session() as db:
        ...     tags = await repository.get_all(db)
        ...     print(len(tags))
        5
    """

    async def get_all(self, db_session: Session) -> List[TagEntity]:
        """Retrieve all tags from the database, ordered by name.

        Args:
            db_session (Session): Fresh SQLAlchemy database session for this operation.

        Returns:
            List[TagEntity]: List of all available tag entities.
        """
        tag_models = db_session.query(TagORM).order_by(TagORM.name.asc()).all()
        return [self.model_to_entity(model) for model in tag_models]

    async def get_by_id(self, db_session: Session, tag_id: UUID) -> Optional[TagEntity]:
        """Retrieve a tag by its unique identifier.

        Args:
            db_session (Session): Fresh SQLAlchemy database session for this operation.
            tag_id (UUID): The unique identifier of the tag to retrieve.

        Returns:
            Optional[TagEntity]: The tag entity if found, None otherwise.
        """
        tag_model = db_session.query(TagORM).filter(TagORM.id == tag_id).first()
        return self.model_to_entity(tag_model) if tag_model else None

    async def get_by_ids(
        self, db_session: Session, tag_ids: Iterable[UUID]
    ) -> List[TagEntity]:
        ids = list(tag_ids)
        if not ids:
            return []
        tag_models = db_session.query(TagORM).filter(TagORM.id.in_(ids)).all()
        return [self.model_to_entity(model) for model in tag_models]

    @staticmethod
    def model_to_entity(tag_model: TagORM) -> TagEntity:
        """Convert SQLAlchemy model to domain entity.

        Args:
            tag_model (TagORM): SQLAlchemy tag model.

        Returns:
            TagEntity: Domain tag entity.
        """
        return TagEntity(
            id=tag_model.id,
            name=tag_model.name,
            icon=tag_model.icon,
            color=tag_model.color,
        )
