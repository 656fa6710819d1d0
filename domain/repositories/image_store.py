"""Image store interface.

This module defines the contract of the external image store used by the
upload gateway, and the failures a store implementation may report.
"""

from abc import ABC, abstractmethod
from typing import List

from domain.entities.upload import ImageUpload, StoredImage


class ImageStoreError(Exception):
    """Base exception for image store failures."""

    pass


class ImageStoreRejectedError(ImageStoreError):
    """The provider answered with a non-success status.

    Attributes:
        status_code (int): HTTP status returned by the provider.
    """

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ImageStoreNoURLError(ImageStoreError):
    """The provider accepted the upload but returned no public URL."""

    pass


class ImageStore(ABC):
    """Abstract interface for persisting images to an external CDN."""

    @abstractmethod
    def missing_configuration(self) -> List[str]:
        """Return the names of the settings the store still needs."""
        pass

    @abstractmethod
    async def upload_image(self, upload: ImageUpload) -> StoredImage:
        """Persist one image and return its public location.

        Raises:
            ImageStoreRejectedError: If the provider rejects the upload.
            ImageStoreNoURLError: If the provider returns no URL.
        """
        pass

    @abstractmethod
    async def delete_image(self, public_id: str) -> str:
        """Delete an asset and return the provider's result string.

        Raises:
            ImageStoreRejectedError: If the provider rejects the request.
        """
        pass
