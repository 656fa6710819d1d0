"""NotyApp API entry point.

Builds the FastAPI application: long-lived collaborators (auth client,
upload service) are created once and stored on ``app.state``; routers are
mounted under ``/api`` except for the health check.
"""

import logging
from typing import Optional

from application.rest.routers import (
    router_auth,
    router_health,
    router_notes,
    router_profiles,
    router_shares,
    router_tags,
    router_tasks,
    router_upload,
)
from domain.repositories.image_store import ImageStore
from domain.services.upload_service import UploadService
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from infrastructure.image_store.cloudinary_client import CloudinaryImageStore
from utils.config import CORS_ORIGINS, DEBUG, ImageStoreCredentials
from utils.supabase_auth import SupabaseAuthClient

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_app(
    image_store: Optional[ImageStore] = None,
    auth_client: Optional[SupabaseAuthClient] = None,
) -> FastAPI:
    """Create the NotyApp API.

    Args:
        image_store (ImageStore, optional): Store for uploaded images.
            Defaults to Cloudinary with credentials read from the environment.
        auth_client (SupabaseAuthClient, optional): Session resolver.
            Defaults to the configured data backend.

    Returns:
        FastAPI: The configured application.

    Example:
        >>> app = create_app()
        >>> uvicorn.run(app, host="0.0.0.0", port=8000)
    """
    app = FastAPI(
        title="NotyApp API",
        description="Notes, tasks, sharing and image uploads for NotyApp",
        version="1.0.0",
    )

    app.state.upload_service = UploadService(
        image_store or CloudinaryImageStore(ImageStoreCredentials.from_env()),
        debug=DEBUG,
    )
    app.state.auth_client = auth_client or SupabaseAuthClient()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    app.include_router(router_health.router)
    app.include_router(router_upload.router, prefix=API_PREFIX, tags=["upload"])
    app.include_router(router_auth.router, prefix=API_PREFIX, tags=["auth"])
    app.include_router(router_notes.router, prefix=API_PREFIX, tags=["notes"])
    app.include_router(router_shares.router, prefix=API_PREFIX, tags=["shares"])
    app.include_router(router_tasks.router, prefix=API_PREFIX, tags=["tasks"])
    app.include_router(router_tags.router, prefix=API_PREFIX, tags=["tags"])
    app.include_router(router_profiles.router, prefix=API_PREFIX, tags=["profiles"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
