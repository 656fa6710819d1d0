"""Cloudinary implementation of the image store.

This module talks to Cloudinary's signed REST endpoints with httpx. No SDK
is involved: every request carries the API key, a Unix timestamp and a
SHA-1 signature of the sorted parameters followed by the API secret.

Architecture:
    Credentials are injected at construction time. The client never reads
    the environment; a missing credential is reported through
    ``missing_configuration`` so the upload gateway can answer per request.
"""

import hashlib
import logging
import time
from typing import Callable, Dict, List, Optional

import httpx

from domain.entities.upload import ImageUpload, StoredImage
from domain.repositories.image_store import (
    ImageStore,
    ImageStoreNoURLError,
    ImageStoreRejectedError,
)
from utils.config import HTTP_TIMEOUT, UPLOAD_FOLDER, ImageStoreCredentials

logger = logging.getLogger(__name__)

CLOUDINARY_API_URL = "https://api.cloudinary.com/v1_1"


class CloudinaryImageStore(ImageStore):
    """Image store backed by Cloudinary's signed upload API.

    Attributes:
        credentials (ImageStoreCredentials): Cloud name, API key and secret.
        folder (str): Folder every asset is uploaded to.

    Example:
        >>> store = CloudinaryImageStore(ImageStoreCredentials.from_env())
        >>> stored = await store.upload_image(upload)
        >>> stored.url
        'https://res.cloudinary.com/demo/image/upload/v1/noty-app/abc.png'
    """

    def __init__(
        self,
        credentials: ImageStoreCredentials,
        folder: str = UPLOAD_FOLDER,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = HTTP_TIMEOUT,
        clock: Callable[[], float] = time.time,
    ):
        self.credentials = credentials
        self.folder = folder
        self._http_client = http_client
        self._timeout = timeout
        self._clock = clock

    @staticmethod
    def sign(params: Dict[str, str], api_secret: str) -> str:
        """Compute the request signature.

        Args:
            params (Dict[str, str]): Signed parameters, without ``api_key``
                and ``file``.
            api_secret (str): Cloudinary API secret.

        Returns:
            str: Hex SHA-1 digest of ``k1=v1&k2=v2`` (sorted keys) + secret.

        Example:
            >>> CloudinaryImageStore.sign({"timestamp": "1", "folder": "f"}, "s")
            # sha1("folder=f&timestamp=1s")
        """
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1((to_sign + api_secret).encode("utf-8")).hexdigest()

    def missing_configuration(self) -> List[str]:
        return self.credentials.missing()

    async def upload_image(self, upload: ImageUpload) -> StoredImage:
        """Upload one image as a base64 data URI.

        Raises:
            ImageStoreRejectedError: If Cloudinary answers with a non-2xx status.
            ImageStoreNoURLError: If the answer carries no ``secure_url``.
        """
        params = {"folder": self.folder, "timestamp": self._timestamp()}
        data = {
            "file": upload.to_data_uri(),
            "api_key": self.credentials.api_key,
            "timestamp": params["timestamp"],
            "signature": self.sign(params, self.credentials.api_secret),
            "folder": self.folder,
        }

        logger.info(f"Uploading {upload.size} bytes to Cloudinary folder {self.folder}")
        response = await self._post("upload", data)

        if not response.is_success:
            message = self._error_message(response, "upload")
            logger.error(f"Cloudinary API error: {response.text}")
            raise ImageStoreRejectedError(message, response.status_code)

        result = response.json()
        secure_url = result.get("secure_url")
        if not secure_url:
            raise ImageStoreNoURLError("No URL returned from Cloudinary")

        return StoredImage(url=secure_url, public_id=result.get("public_id"))

    async def delete_image(self, public_id: str) -> str:
        """Destroy an asset by public id.

        Returns:
            str: Cloudinary's ``result`` field, ``"ok"`` or ``"not found"``.
        """
        params = {"public_id": public_id, "timestamp": self._timestamp()}
        data = {
            "public_id": public_id,
            "api_key": self.credentials.api_key,
            "timestamp": params["timestamp"],
            "signature": self.sign(params, self.credentials.api_secret),
        }

        response = await self._post("destroy", data)
        if not response.is_success:
            logger.error(f"Cloudinary API error: {response.text}")
            raise ImageStoreRejectedError(
                self._error_message(response, "destroy"), response.status_code
            )

        return response.json().get("result", "")

    def _timestamp(self) -> str:
        return str(int(round(self._clock())))

    def _endpoint(self, action: str) -> str:
        return f"{CLOUDINARY_API_URL}/{self.credentials.cloud_name}/image/{action}"

    async def _post(self, action: str, data: Dict[str, str]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(self._endpoint(action), data=data)

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(self._endpoint(action), data=data)

    @staticmethod
    def _error_message(response: httpx.Response, action: str) -> str:
        """Extract ``error.message`` from a failed answer.

        Falls back to ``Cloudinary <action> failed: <status> <reason>`` when
        the body is not JSON or carries no message.
        """
        fallback = (
            f"Cloudinary {action} failed: {response.status_code} {response.reason_phrase}"
        )
        try:
            body = response.json()
        except ValueError:
            return fallback

        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return fallback
