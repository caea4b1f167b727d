"""Router Initializer."""

from fastapi import FastAPI

from apperrors.context import ErrorContextOptions
from apperrors.error_record.router import got_errors_router
from apperrors.error_record.router import router as errors_router
from apperrors.health.router import recent_errors_router
from apperrors.health.router import router as health_router

__all__ = ["register_routers"]


def register_routers(app: FastAPI, options: ErrorContextOptions) -> None:
    """Register the API routers the options enable.

    Args:
        app: FastAPI application instance.
        options: Feature flags deciding which endpoints are exposed.
    """
    app.include_router(health_router)
    if options.add_health_check:
        app.include_router(recent_errors_router)
    if options.add_errors_resource:
        app.include_router(errors_router, prefix="/application-errors")
    if options.add_got_errors_resource:
        app.include_router(got_errors_router, prefix="/got-errors")
