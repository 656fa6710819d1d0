"""Common output schemas for API responses.

This module contains shared Pydantic models for common API responses
like error messages and status information.
"""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Schema for error responses across the resource endpoints.

    Attributes:
        detail (str): Detailed error message.

    Example:
        >>> error_response = ErrorResponse(detail="Note not found")
    """

    detail: str


class UploadErrorResponse(BaseModel):
    """Schema of the upload gateway's error envelope.

    Attributes:
        error (str): Human readable error message.
        details (str, optional): Extra context, e.g. missing settings.

    Example:
        >>> UploadErrorResponse(error="File must be an image")
    """

    error: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    """Schema for health check responses.

    Attributes:
        status (str): Service health status.
        service (str): Service name identifier.

    Example:
        >>> health_response = HealthResponse(
        ...     status="healthy",
        ...     service="noty-app"
        ... )
    """

    status: str
    service: str
