"""Image upload value objects.

This module contains the values exchanged between the upload gateway and
the image store: the file received from the browser and the stored asset
returned by the provider.
"""

import base64
from dataclasses import dataclass
from typing import Optional

DEFAULT_IMAGE_TYPE = "image/jpeg"


@dataclass(frozen=True)
class ImageUpload:
    """A single file received under the ``file`` form field.

    Attributes:
        filename (str): Client-side file name, possibly empty.
        content_type (str): Media type declared by the client.
        data (bytes): Raw file content.

    Example:
        >>> upload = ImageUpload("cover.png", "image/png", b"...")
        >>> upload.is_image()
        True
    """

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def is_image(self) -> bool:
        """Check the declared media type, not the file content."""
        return (self.content_type or "").lower().startswith("image/")

    def to_data_uri(self) -> str:
        """Encode the file as a base64 data URI.

        The declared media type is used, falling back to ``image/jpeg``.
        """
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type or DEFAULT_IMAGE_TYPE};base64,{encoded}"


@dataclass(frozen=True)
class StoredImage:
    """Metadata of an asset persisted by the image store."""

    url: str
    public_id: Optional[str] = None
