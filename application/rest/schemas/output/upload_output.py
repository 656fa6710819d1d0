"""Upload gateway output schemas."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Public HTTPS URL of a stored image.

    Example:
        >>> UploadResponse(url="https://res.cloudinary.com/demo/image/upload/v1/noty-app/a.png")
    """

    url: str


class DeleteImageResponse(BaseModel):
    """Result string returned by the image store, e.g. ``"ok"``."""

    result: str
