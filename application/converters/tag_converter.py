"""Tag converters for transforming domain entities into API schemas.

This module contains converter functions for transforming tag objects
from the domain layer (entities) to the API layer (Pydantic).
"""

from typing import List, Optional

from domain.entities.tag import TagEntity

from application.rest.schemas.output.tag_output import TagResponse


class TagConverter:
    """Converter class for tag transformations between layers.

    Example:
        >>> tag_response = TagConverter.entity_to_response(tag_entity)
    """

    @staticmethod
    def entity_to_response(tag_entity: TagEntity) -> TagResponse:
        """Convert TagEntity domain object to TagResponse Pydantic schema.

        Args:
            tag_entity (TagEntity): Domain entity representing a tag.

        Returns:
            TagResponse: Pydantic schema for API response.

        Example:
            >>> tag_entity = TagEntity(id=UUID("123e4567-e89b-12d3-a456-426614174000"), name="Work")
            >>> TagConverter.entity_to_response(tag_entity).icon
            "Tag"
        """
        return TagResponse(
            id=str(tag_entity.id),
            name=tag_entity.name,
            icon=tag_entity.icon,
            color=tag_entity.color,
        )

    @staticmethod
    def optional_entity_to_response(
        tag_entity: Optional[TagEntity],
    ) -> Optional[TagResponse]:
        if tag_entity is None:
            return None
        return TagConverter.entity_to_response(tag_entity)

    @staticmethod
    def entities_to_responses(tag_entities: List[TagEntity]) -> List[TagResponse]:
        """Convert list of TagEntity domain objects to list of TagResponse schemas.

        Args:
            tag_entities (List[TagEntity]): List of domain entities.

        Returns:
            List[TagResponse]: List of Pydantic schemas for API response.
        """
        return [TagConverter.entity_to_response(entity) for entity in tag_entities]
