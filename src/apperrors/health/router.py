"""Health router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from apperrors.dependencies import get_recent_errors_health_check

from .recent_errors import RecentErrorsHealthCheck

__all__ = ["recent_errors_router", "router"]


router = APIRouter(tags=["Health"])

recent_errors_router = APIRouter(tags=["Health"])


@router.get("/", include_in_schema=False, summary="Root endpoint")
async def root() -> Response:
    """Root endpoint."""
    return Response("OK")


@router.get("/health", include_in_schema=False, summary="Liveness probe")
async def health() -> Response:
    """Liveness probe."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@recent_errors_router.get(
    "/health/recent-errors", summary="Recent unresolved errors on this host"
)
async def recent_errors(
    health_check: Annotated[
        RecentErrorsHealthCheck, Depends(get_recent_errors_health_check)
    ],
) -> JSONResponse:
    """Run the recent errors health check.

    Returns:
        JSONResponse: The health result, with status 200 when healthy and 503
        otherwise.
    """
    result = await health_check.check()
    return JSONResponse(
        content=result.model_dump(mode="json"),
        status_code=(
            status.HTTP_200_OK
            if result.healthy
            else status.HTTP_503_SERVICE_UNAVAILABLE
        ),
    )
