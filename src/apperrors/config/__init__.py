"""Configuration module for the application errors service.

This module provides centralized configuration management for the service,
including database connections, logging setup, error codes, and settings.

Key Components:
- settings: Application configuration loaded from environment variables and TOML files
- Database: SQLAlchemy async engine and session management
- Logging: Loguru-based logging configuration with development/production modes
- Error handling: Centralized error codes and error message templates
"""

from apperrors.config.config import Settings, settings
from apperrors.config.db import create_engine_from_settings, engine
from apperrors.config.errors import ErrorCode, ErrorNames
from apperrors.config.logger import config_logger

__all__ = [
    "ErrorCode",
    "ErrorNames",
    "Settings",
    "config_logger",
    "create_engine_from_settings",
    "engine",
    "settings",
]
