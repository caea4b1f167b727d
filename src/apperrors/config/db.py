"""Database connection and session management."""

from typing import Any, Final

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from .config import Settings, settings

__all__ = ["create_engine_from_settings", "engine"]


def create_engine_from_settings(config: Settings) -> AsyncEngine:
    """Create the async engine described by the given settings.

    SQLite connections get the thread and busy-timeout arguments aiosqlite
    needs; pool sizing only applies to networked databases.

    Args:
        config: Settings holding the database URL and pool options.

    Returns:
        A configured async SQLAlchemy engine.
    """
    url = make_url(config.db_url)
    kwargs: dict[str, Any] = {
        "echo": config.db_logging,
        "future": config.db_future,
        "pool_pre_ping": config.db_pool_pre_ping,
    }

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": config.db_timeout,
        }
    else:
        kwargs.update(
            pool_timeout=config.db_pool_timeout,
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_recycle=config.db_pool_recycle,
        )

    return create_async_engine(url, **kwargs)


engine: Final = create_engine_from_settings(settings)
