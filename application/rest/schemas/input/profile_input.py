"""Profile input schemas for API requests."""

from typing import Optional

from pydantic import BaseModel


class ProfileUpdate(BaseModel):
    """Schema for editing the caller's profile.

    Example:
        >>> ProfileUpdate(full_name="Ada Lovelace", avatar_url=None)
    """

    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
