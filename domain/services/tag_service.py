"""Tag domain service.

This module contains the TagService that implements business logic
for tag operations, and the single-tag assignment rule applied to notes
and tasks on top of the many-to-many tag store.
"""

import logging
from typing import List, Optional
from uuid import UUID

from domain.entities.tag import TagEntity
from domain.repositories.tag_repository import TagRepositoryInterface
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class TagNotFoundError(Exception):
    """Exception raised when a tag is not found."""

    pass


class TagAssignmentPolicy:
    """Validation layer limiting how many tags an item may carry.

    The storage links notes and tasks to tags through join tables that
    allow any number of rows; the application only ever assigns one.

    Example:
        >>> TagAssignmentPolicy().validate([work_id, work_id])
        [work_id]
        >>> TagAssignmentPolicy().validate([work_id, home_id])
        Traceback (most recent call last):
        ValueError: Only one tag can be assigned
    """

    MAX_TAGS = 1

    def __init__(self, max_tags: int = MAX_TAGS) -> None:
        self.max_tags = max_tags

    def validate(self, tag_ids: Optional[List[UUID]]) -> List[UUID]:
        """Collapse duplicate ids and enforce the maximum.

        Args:
            tag_ids (Optional[List[UUID]]): Requested tag ids, in order.

        Returns:
            List[UUID]: Distinct ids in submission order.

        Raises:
            ValueError: If more distinct ids than allowed are requested.
        """
        unique_ids = list(dict.fromkeys(tag_ids or []))
        if len(unique_ids) > self.max_tags:
            raise ValueError("Only one tag can be assigned")
        return unique_ids


class TagService:
    """Domain service for tag business operations.

    This service contains the business logic for tag operations,
    coordinating between domain entities and repository interfaces.

    Attributes:
        _tag_repository (TagRepositoryInterface): Repository for tag data access.
        _policy (TagAssignmentPolicy): Rule applied when tags are assigned.

    Example:
        >>> service = TagService(tag_repository)
        >>> with get_db_session() as db:
        ...     tags = await service.get_all_tags(db)
        ...     print(len(tags))
        5
    """

    def __init__(
        self,
        tag_repository: TagRepositoryInterface,
        policy: Optional[TagAssignmentPolicy] = None,
    ) -> None:
        """Initialize the tag service with required dependencies.

        Args:
            tag_repository (TagRepositoryInterface): Repository implementation for tag data access.
            policy (Optional[TagAssignmentPolicy]): Assignment rule, single tag by default.
        """
        self._tag_repository = tag_repository
        self._policy = policy or TagAssignmentPolicy()

    async def get_all_tags(self, db_session: Session) -> List[TagEntity]:
        """Retrieve the whole tag catalog.

        Args:
            db_session (Session): Fresh database session for this operation.

        Returns:
            List[TagEntity]: List of all available tag entities sorted by name.
        """
        tags = await self._tag_repository.get_all(db_session)

        # Business rule: Return tags sorted by name for consistent ordering
        return sorted(tags, key=lambda tag: tag.name.lower())

    async def get_tag_by_id(self, db_session: Session, tag_id: UUID) -> TagEntity:
        """Retrieve a tag by its unique identifier.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag_id (UUID): The unique identifier of the tag to retrieve.

        Returns:
            TagEntity: The requested tag entity.

        Raises:
            TagNotFoundError: If the tag with the specified ID does not exist.
        """
        tag = await self._tag_repository.get_by_id(db_session, tag_id)
        if not tag:
            raise TagNotFoundError(f"Tag with ID {tag_id} not found")
        return tag

    async def resolve_assignment(
        self, db_session: Session, tag_ids: Optional[List[UUID]]
    ) -> List[TagEntity]:
        """Validate requested tag ids and load the matching tags.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag_ids (Optional[List[UUID]]): Ids submitted by the client.

        Returns:
            List[TagEntity]: Zero or one tag entity.

        Raises:
            ValueError: If more than one distinct tag is requested.
            TagNotFoundError: If a requested tag does not exist.
        """
        unique_ids = self._policy.validate(tag_ids)
        if not unique_ids:
            return []

        tags = await self._tag_repository.get_by_ids(db_session, unique_ids)
        found_ids = {tag.id for tag in tags}
        for tag_id in unique_ids:
            if tag_id not in found_ids:
                logger.warning(f"Tag {tag_id} requested but not in catalog")
                raise TagNotFoundError(f"Tag with ID {tag_id} not found")

        return sorted(tags, key=lambda tag: unique_ids.index(tag.id))
