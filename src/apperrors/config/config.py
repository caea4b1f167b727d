"""Define configuration for the project."""

import socket
import tomllib
from datetime import timedelta
from pathlib import Path
from typing import Literal

from pydantic import Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings"]


_app_config_path = Path(__file__).parent / "resources" / "app.toml"

with Path.open(_app_config_path, "rb") as f:
    _config = tomllib.load(f)
    _app_config = _config.get("app", {})
    _server_config = _app_config.get("server", {})
    _db_config = _app_config.get("db", {})
    _log_config = _app_config.get("logging", {})
    _errors_config = _app_config.get("errors", {})
    _cleanup_config = _errors_config.get("cleanup", {})


def _local_host_name() -> str:
    return socket.gethostname() or "localhost"


def _local_ip_address() -> str:
    try:
        return socket.gethostbyname(_local_host_name())
    except OSError:
        return "127.0.0.1"


class Settings(BaseSettings):
    """Application configuration settings."""

    # Environment configuration
    app_env: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Current application environment determining behavior.",
        validation_alias="ENV",
    )

    # Server configuration
    host_binding: str = Field(
        default=_server_config.get("host_binding", "127.0.0.1"),
        description="Host address the server binds to.",
    )

    port: int = Field(
        default=_server_config.get("port", 8000),
        description="Network port the server listens on.",
    )

    version: str = Field(
        default=_server_config.get("version", "0.1.0"),
        description="Version of the application.",
    )

    root_path: str = Field(
        default="",
        description="Path prefix when running behind a proxy.",
        validation_alias="ROOT_PATH",
    )

    allow_origin_in_dev: list[str] = Field(
        default=_server_config.get("allow_origin", ["http://localhost:3000"]),
        description="CORS allowed origins for cross-origin requests.",
    )

    # Service identity
    host_name: str = Field(
        default_factory=_local_host_name,
        description="Host name recorded on every error created by this process.",
        validation_alias="HOST_NAME",
    )

    ip_address: str = Field(
        default_factory=_local_ip_address,
        description="IP address recorded on every error created by this process.",
        validation_alias="IP_ADDRESS",
    )

    # Database configuration
    db_url: str = Field(
        default="sqlite+aiosqlite:///app_errors.db",
        description="Database connection URL.",
        validation_alias="DATABASE_URL",
    )

    db_logging: bool = Field(
        default=_db_config.get("logging", False),
        description="Whether to enable SQL query logging.",
    )

    db_future: bool = Field(
        default=_db_config.get("future", True),
        description="Whether to use future SQLAlchemy features.",
    )

    db_timeout: int = Field(
        default=_db_config.get("timeout", 30),
        description="Timeout for database operations in seconds.",
    )

    db_pool_size: int = Field(
        default=_db_config.get("pool_size", 5),
        description="Size of the database connection pool.",
    )

    db_max_overflow: int = Field(
        default=_db_config.get("max_overflow", 10),
        description="Maximum number of connections to create beyond the pool size.",
    )

    db_pool_timeout: int = Field(
        default=_db_config.get("pool_timeout", 30),
        description="Timeout for acquiring a connection from the pool.",
    )

    db_pool_recycle: int = Field(
        default=_db_config.get("pool_recycle", 300),
        description="Time in seconds to recycle a connection.",
    )

    db_pool_pre_ping: bool = Field(
        default=_db_config.get("pool_pre_ping", True),
        description="Whether to check if a connection is alive before using it.",
    )

    clear_db_on_restart: bool = Field(
        default=False,
        validation_alias="CLEAR_DB_ON_RESTART",
        description="Whether to clear the database on application restart.",
    )

    data_store_type: Literal["SHARED", "NOT_SHARED"] | None = Field(
        default=None,
        validation_alias="DATA_STORE_TYPE",
        description="Override for the detected data store type.",
    )

    # Log configuration
    log_dir: str = Field(
        default=_log_config.get("log_dir", "log"),
        description="Directory for storing log files.",
    )

    log_file: str = Field(
        default=_log_config.get("log_file", "app.log"),
        description="Name of the log file.",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (e.g., DEBUG, INFO, WARNING, ERROR).",
    )

    rotation: str = Field(
        default=_log_config.get("rotation", "10 MB"),
        description="Log rotation strategy (time or size-based).",
    )

    # Application error configuration
    add_errors_resource: bool = Field(
        default=_errors_config.get("add_errors_resource", True),
        description="Whether to expose the application errors endpoints.",
    )

    add_got_errors_resource: bool = Field(
        default=_errors_config.get("add_got_errors_resource", True),
        description="Whether to expose the got-errors endpoint.",
    )

    add_health_check: bool = Field(
        default=_errors_config.get("add_health_check", True),
        description="Whether to register the recent errors health check.",
    )

    add_cleanup_job: bool = Field(
        default=_errors_config.get("add_cleanup_job", True),
        description="Whether to schedule the error cleanup job.",
    )

    time_window_minutes: int = Field(
        default=_errors_config.get("time_window_minutes", 15),
        ge=1,
        description="Window in minutes checked by the recent errors health check.",
    )

    cleanup_strategy: Literal["ALL_ERRORS", "RESOLVED_ONLY"] = Field(
        default=_cleanup_config.get("strategy", "ALL_ERRORS"),
        description="Which errors the cleanup job deletes.",
    )

    resolved_error_expiration_days: int = Field(
        default=_cleanup_config.get("resolved_error_expiration_days", 14),
        ge=1,
        description="Days a resolved error is kept before deletion.",
    )

    unresolved_error_expiration_days: int = Field(
        default=_cleanup_config.get("unresolved_error_expiration_days", 60),
        ge=1,
        description="Days an unresolved error is kept before deletion.",
    )

    initial_job_delay_minutes: int = Field(
        default=_cleanup_config.get("initial_job_delay_minutes", 1),
        ge=1,
        description="Minutes to wait before the first cleanup run.",
    )

    job_interval_minutes: int = Field(
        default=_cleanup_config.get("job_interval_minutes", 1440),
        ge=1,
        description="Minutes between cleanup runs.",
    )

    @computed_field
    @property
    def log_path(self) -> Path:
        """Path where application logs are stored."""
        return Path(self.log_dir) / self.log_file

    @computed_field
    @property
    def reload(self) -> bool:
        """Whether to enable auto-reload on code changes."""
        return bool(_server_config.get("reload")) and self.app_env == "development"

    @property
    def time_window(self) -> timedelta:
        """Window checked by the recent errors health check."""
        return timedelta(minutes=self.time_window_minutes)

    @model_validator(mode="after")
    def validate_log_level(self) -> "Settings":
        """Adjust log level based on environment."""
        if self.app_env == "production" and self.log_level == "DEBUG":
            self.log_level = "INFO"
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


# Create a single instance of Settings to use throughout the application
settings = Settings()
