"""Upload gateway domain service.

This module contains the UploadService, which validates one image received
from an authenticated browser and persists it to the external image store,
and the failure taxonomy the gateway reports back as a JSON envelope.

Preconditions are checked in a fixed order before any network call:
configuration, file presence, media type, then size.
"""

import logging
from typing import List, Optional

from domain.entities.upload import ImageUpload, StoredImage
from domain.repositories.image_store import (
    ImageStore,
    ImageStoreNoURLError,
    ImageStoreRejectedError,
)

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024

GENERIC_UPLOAD_ERROR = "Upload failed. Please try again."


class UploadError(Exception):
    """Base exception for upload gateway failures.

    Attributes:
        status_code (int): HTTP status the gateway answers with.
        message (str): Text placed under ``error`` in the envelope.
        details (Optional[str]): Extra text placed under ``details``.
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class MissingConfigurationError(UploadError):
    status_code = 500

    def __init__(self, missing: List[str]):
        super().__init__(
            "Cloudinary configuration is missing. Please check environment variables.",
            details=f"Make sure {', '.join(missing)} are set.",
        )
        self.missing = missing


class NoFileProvidedError(UploadError):
    status_code = 400

    def __init__(self):
        super().__init__("No file provided")


class InvalidMediaTypeError(UploadError):
    status_code = 400

    def __init__(self):
        super().__init__("File must be an image")


class FileTooLargeError(UploadError):
    status_code = 400

    def __init__(self):
        super().__init__("File size must be less than 10MB")


class MissingPublicIdError(UploadError):
    status_code = 400

    def __init__(self):
        super().__init__("No public_id provided")


class ProviderRejectedError(UploadError):
    """The image store answered with a non-success status."""

    status_code = 500


class ProviderReturnedNoURLError(UploadError):
    status_code = 500

    def __init__(self):
        super().__init__("No URL returned from Cloudinary")


class UnexpectedUploadError(UploadError):
    """Any failure not covered by the other upload errors."""

    status_code = 500


class UploadService:
    """Domain service for the image upload gateway.

    Attributes:
        _image_store (ImageStore): Store receiving the validated images.
        _max_file_size (int): Largest accepted file, in bytes.
        _debug (bool): Whether unexpected failures expose their representation.

    Example:
        >>> service = UploadService(CloudinaryImageStore(credentials))
        >>> stored = await service.upload(ImageUpload("a.png", "image/png", data))
        >>> stored.url
        'https://res.cloudinary.com/...'
    """

    def __init__(
        self,
        image_store: ImageStore,
        max_file_size: int = MAX_FILE_SIZE,
        debug: bool = False,
    ):
        self._image_store = image_store
        self._max_file_size = max_file_size
        self._debug = debug

    def check_configuration(self) -> None:
        """Raise when the image store lacks credentials.

        Raises:
            MissingConfigurationError: If any credential is missing.
        """
        missing = self._image_store.missing_configuration()
        if missing:
            logger.error(f"Image store credentials missing: {missing}")
            raise MissingConfigurationError(missing)

    def validate(self, upload: Optional[ImageUpload]) -> ImageUpload:
        """Check presence, media type and size of the received file.

        Raises:
            NoFileProvidedError: If no file was received.
            InvalidMediaTypeError: If the declared type is not ``image/*``.
            FileTooLargeError: If the file exceeds the size limit.
        """
        if upload is None:
            raise NoFileProvidedError()
        if not upload.is_image():
            logger.warning(f"Rejected upload with type {upload.content_type!r}")
            raise InvalidMediaTypeError()
        if upload.size > self._max_file_size:
            logger.warning(f"Rejected upload of {upload.size} bytes")
            raise FileTooLargeError()
        return upload

    async def upload(self, upload: Optional[ImageUpload]) -> StoredImage:
        """Validate one image and persist it to the image store.

        Every call creates a new asset; identical files are not de-duplicated.

        Args:
            upload (Optional[ImageUpload]): File received under ``file``.

        Returns:
            StoredImage: Public URL and id of the stored asset.

        Raises:
            UploadError: For every failure, with the status to answer with.
        """
        self.check_configuration()
        upload = self.validate(upload)

        try:
            stored = await self._image_store.upload_image(upload)
        except ImageStoreRejectedError as e:
            logger.error(f"Image store rejected upload: {e}")
            raise ProviderRejectedError(str(e)) from e
        except ImageStoreNoURLError as e:
            logger.error("Image store returned no URL")
            raise ProviderReturnedNoURLError() from e
        except Exception as e:
            raise self._unexpected(e) from e

        logger.info(f"Uploaded image {stored.public_id} ({upload.size} bytes)")
        return stored

    async def delete(self, public_id: Optional[str]) -> str:
        """Delete an asset from the image store.

        Returns:
            str: The provider's result string, e.g. ``"ok"``.

        Raises:
            UploadError: For every failure, with the status to answer with.
        """
        self.check_configuration()
        if not public_id or not public_id.strip():
            raise MissingPublicIdError()

        try:
            result = await self._image_store.delete_image(public_id.strip())
        except ImageStoreRejectedError as e:
            logger.error(f"Image store rejected deletion of {public_id}: {e}")
            raise ProviderRejectedError(str(e)) from e
        except Exception as e:
            raise self._unexpected(e) from e

        logger.info(f"Deleted image {public_id}: {result}")
        return result

    def _unexpected(self, error: Exception) -> UnexpectedUploadError:
        logger.exception(f"Unexpected image store failure: {error}")
        return UnexpectedUploadError(
            str(error) or GENERIC_UPLOAD_ERROR,
            details=repr(error) if self._debug else None,
        )
