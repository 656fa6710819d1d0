"""Tag domain entity.

This module contains the Tag domain entity that represents
an entry of the global tag catalog.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

DEFAULT_TAG_ICON = "Tag"


@dataclass(frozen=True)
class TagEntity:
    """Domain entity representing a catalog tag.

    Tags are predefined categories shared by every user. They are attached
    to notes and tasks but never created or modified by the application.

    Attributes:
        id (UUID): Unique identifier for the tag.
        name (str): The display name of the tag.
        icon (str): Name of the icon rendered next to the tag.
        color (Optional[str]): Display color, if the catalog defines one.

    Example:
        >>> tag = TagEntity(id=uuid4(), name="Work", icon="Code")
        >>> print(tag.name)
        "Work"

    Business Rules:
        - Tag name must be non-empty and stripped of whitespace
        - A missing icon falls back to the generic tag icon
    """

    id: UUID
    name: str
    icon: str = DEFAULT_TAG_ICON
    color: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate tag entity after initialization.

        Raises:
            ValueError: If tag name is empty or contains only whitespace.
        """
        if not self.name or not self.name.strip():
            raise ValueError("Tag name cannot be empty or whitespace")

        object.__setattr__(self, "name", self.name.strip())
        if not self.icon:
            object.__setattr__(self, "icon", DEFAULT_TAG_ICON)
