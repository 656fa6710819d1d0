"""Upload gateway routes.

The gateway always answers with a JSON envelope: ``{url}`` on success and
``{error[, details]}`` on failure. No exception is allowed to escape.
"""

import logging
from typing import Optional

from application.rest.schemas.output.common_output import UploadErrorResponse
from application.rest.schemas.output.upload_output import (
    DeleteImageResponse,
    UploadResponse,
)
from domain.entities.upload import ImageUpload
from domain.services.upload_service import (
    GENERIC_UPLOAD_ERROR,
    NoFileProvidedError,
    UploadError,
    UploadService,
)
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials
from starlette.datastructures import UploadFile
from utils.config import DEBUG
from utils.dependencies import (
    bearer_scheme,
    get_auth_client,
    get_upload_service,
    resolve_session,
)
from utils.supabase_auth import AuthError, SupabaseAuthClient

logger = logging.getLogger(__name__)
router = APIRouter()

AUTHENTICATION_REQUIRED = "Authentication required"


def error_envelope(error: UploadError) -> JSONResponse:
    content = {"error": error.message}
    if error.details:
        content["details"] = error.details
    return JSONResponse(status_code=error.status_code, content=content)


def unauthenticated_envelope() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": AUTHENTICATION_REQUIRED},
    )


def auth_failure_envelope(error: AuthError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": str(error)})


def unexpected_envelope(error: Exception) -> JSONResponse:
    content = {"error": str(error) or GENERIC_UPLOAD_ERROR}
    if DEBUG:
        content["details"] = repr(error)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


async def read_image_upload(request: Request) -> Optional[ImageUpload]:
    """Read the ``file`` field of a multipart form.

    Returns:
        Optional[ImageUpload]: The received file, or None when the field is
        missing, is not a file, or is an empty file input.

    Raises:
        NoFileProvidedError: If the body is not a readable form.
    """
    try:
        form = await request.form()
    except Exception as e:
        logger.warning(f"Could not parse upload form: {e}")
        raise NoFileProvidedError() from e

    file = form.get("file")
    if not isinstance(file, UploadFile):
        return None

    data = await file.read()
    if not file.filename and not data:
        return None

    return ImageUpload(
        filename=file.filename or "",
        content_type=file.content_type or "",
        data=data,
    )


@router.post(
    path="/upload",
    description="Upload one image to the image store and return its public URL.",
    response_model=UploadResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": UploadResponse,
            "description": "Image stored.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": UploadErrorResponse,
            "description": "Missing file, wrong media type or file too large.",
            "content": {
                "application/json": {"example": {"error": "File must be an image"}}
            },
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": UploadErrorResponse,
            "description": "User authentication required.",
            "content": {
                "application/json": {"example": {"error": AUTHENTICATION_REQUIRED}}
            },
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": UploadErrorResponse,
            "description": "Missing configuration or image store failure.",
            "content": {
                "application/json": {
                    "example": {"error": "No URL returned from Cloudinary"}
                }
            },
        },
        status.HTTP_503_SERVICE_UNAVAILABLE: {
            "model": UploadErrorResponse,
            "description": "The auth backend could not be reached.",
            "content": {
                "application/json": {
                    "example": {"error": "Authentication service unavailable"}
                }
            },
        },
    },
)
async def upload_image(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
    upload_service: UploadService = Depends(get_upload_service),
):
    """Validate and store one image received under the ``file`` field.

    Preconditions are checked in order: authenticated session, image store
    configuration, file presence, media type, size.

    Args:
        request (Request): Request carrying the multipart form.
        credentials (Optional[HTTPAuthorizationCredentials]): Bearer token, if any.
        auth_client (SupabaseAuthClient): Client resolving the session.
        upload_service (UploadService): Service created at start-up.

    Returns:
        UploadResponse | JSONResponse: ``{url}`` or the error envelope.
    """
    try:
        user = await resolve_session(credentials, auth_client)
    except AuthError as e:
        logger.error(f"Could not resolve upload session: {e}")
        return auth_failure_envelope(e)

    if user is None:
        return unauthenticated_envelope()

    try:
        upload_service.check_configuration()
        upload = await read_image_upload(request)
        stored = await upload_service.upload(upload)
    except UploadError as e:
        return error_envelope(e)
    except Exception as e:
        logger.exception(f"Upload error: {e}")
        return unexpected_envelope(e)

    logger.info(f"User {user.id} uploaded {stored.url}")
    return UploadResponse(url=stored.url)


@router.delete(
    path="/upload",
    description="Delete an image from the image store by public id.",
    response_model=DeleteImageResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": DeleteImageResponse,
            "description": "Image store answered the deletion.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": UploadErrorResponse,
            "description": "Missing public_id.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": UploadErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": UploadErrorResponse,
            "description": "Missing configuration or image store failure.",
        },
    },
)
async def delete_image(
    public_id: Optional[str] = None,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
    upload_service: UploadService = Depends(get_upload_service),
):
    try:
        user = await resolve_session(credentials, auth_client)
    except AuthError as e:
        logger.error(f"Could not resolve upload session: {e}")
        return auth_failure_envelope(e)

    if user is None:
        return unauthenticated_envelope()

    try:
        result = await upload_service.delete(public_id)
    except UploadError as e:
        return error_envelope(e)
    except Exception as e:
        logger.exception(f"Image deletion error: {e}")
        return unexpected_envelope(e)

    return DeleteImageResponse(result=result)
