from application.rest.schemas.output.common_output import ErrorResponse, HealthResponse
from fastapi import APIRouter, status

router = APIRouter()

SERVICE_NAME = "noty-app"


@router.get(
    path="/health",
    description="Liveness probe for deployments and uptime monitors.",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": HealthResponse,
            "description": "The API process is up.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error.",
            "content": {
                "application/json": {"example": {"detail": "Internal server error"}}
            },
        },
    },
)
async def health_check() -> HealthResponse:
    """Report that the API is running.

    Database and external services are not probed.

    Example:
        >>> await health_check()
        HealthResponse(status="healthy", service="noty-app")
    """
    return HealthResponse(status="healthy", service=SERVICE_NAME)
