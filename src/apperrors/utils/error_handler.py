"""Global exception handlers for the application."""

from asyncio import CancelledError

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from apperrors.common.app_error import AppError
from apperrors.config.config import settings
from apperrors.config.errors import ErrorCode, ErrorNames

from .error_path import get_error_path

__all__ = ["register_exception_handlers"]


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the global exception handlers to the FastAPI application.

    Application errors become their own status code and error code, anything
    else a 500 ``SERVER_ERROR`` response.

    Args:
        app: The FastAPI application instance to register handlers with.
    """

    @app.exception_handler(AppError)
    def _handle_app_error(_request: Request, exc: AppError) -> JSONResponse:
        logger.debug(
            "{code}: {message}",
            code=exc.error_code,
            message=exc.message,
            path=get_error_path(exc),
        )
        return _make_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(Exception)
    def _handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Handle any uncaught exception as a 500 server error.

        Raises:
            CancelledError: Re-raised outside development.
        """
        if isinstance(exc, CancelledError) and settings.app_env != "development":
            raise exc

        logger.opt(exception=exc).error(
            "Unhandled {error_type}",
            error_type=type(exc).__name__,
            path=get_error_path(exc),
        )
        return _make_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorCode.SERVER_ERROR,
            ErrorNames.INTERNAL_SERVER_ERROR,
        )


def _make_response(status_code: int, code: ErrorCode, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"code": code, "message": message}
    )
