"""Main application module for the application errors service."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Final

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from prometheus_fastapi_instrumentator import Instrumentator
from sqlmodel import SQLModel

from apperrors.config import config_logger, engine, settings
from apperrors.context import ErrorContextOptions, build_error_context
from apperrors.utils.banner import create_banner
from apperrors.utils.error_handler import register_exception_handlers
from apperrors.utils.prometheus import add_prometheus_metrics
from apperrors.utils.routers import register_routers

config_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Create the schema and the error context, and run the cleanup job."""
    async with engine.begin() as conn:
        if settings.clear_db_on_restart:
            await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    context = build_error_context(engine, settings)
    app.state.error_context = context
    create_banner(settings, context)

    context.start()
    logger.info("Application errors service started")

    yield

    await context.stop()
    await engine.dispose()


app: Final = FastAPI(
    title="Application Errors",
    description="Service recording, resolving and expiring application errors",
    root_path=settings.root_path,
    version=settings.version,
    lifespan=lifespan,
)


# --------------------------------------------------------
# P R O M E T H E U S
# --------------------------------------------------------
Instrumentator().instrument(app).expose(app, include_in_schema=False)
add_prometheus_metrics(app)


# --------------------------------------------------------
# C O R S
# --------------------------------------------------------
if settings.app_env != "production":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origin_in_dev,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# --------------------------------------------------------
# R O U T E R S
# --------------------------------------------------------
register_routers(app, ErrorContextOptions.from_settings(settings))


# --------------------------------------------------------
# E X C E P T I O N S
# --------------------------------------------------------
register_exception_handlers(app)
