"""Tag output schemas for API responses."""

from typing import Optional

from pydantic import BaseModel


class TagResponse(BaseModel):
    """Schema for tag data in API responses.

    Attributes:
        id (str): UUID string identifier of the tag.
        name (str): Display name of the tag.
        icon (str): Icon name shown with the tag.
        color (str, optional): Display color.

    Example:
        >>> TagResponse(id="tag-uuid", name="Work", icon="Code", color="#3b82f6")
    """

    id: str  # UUID as string
    name: str
    icon: str
    color: Optional[str] = None
