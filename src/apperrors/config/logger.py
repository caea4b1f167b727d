"""Logger configuration."""

import logging
import sys
from collections.abc import Mapping
from typing import Any

from loguru import logger
from loki_logger_handler.formatters.loguru_formatter import LoguruFormatter
from loki_logger_handler.loki_logger_handler import LokiLoggerHandler

from .config import Settings, settings

__all__ = ["InterceptHandler", "config_logger"]

_LOKI_URL = "http://alloy:9999/loki/api/v1/push"  # NOSONAR


def config_logger(config: Settings = settings) -> None:
    """Route all application and library logging through loguru.

    Development writes colored records to stdout and a rotating file, testing
    writes to stdout only, and production writes plain records to stderr and
    ships them to Loki.

    Args:
        config: Settings providing environment, level and log file location.
    """
    is_production = config.app_env == "production"

    _intercept_stdlib_logging(config.log_level)

    logger.remove()

    if config.app_env == "development":
        logger.add(
            config.log_path,
            rotation=config.rotation,
            format=_development_format,
            enqueue=True,
            backtrace=False,
            diagnose=False,
            compression="zip",
            colorize=False,
            level=logging.DEBUG,
        )

    logger.add(
        sys.stderr if is_production else sys.stdout,
        format=_production_format if is_production else _development_format,
        level=config.log_level,
        colorize=not is_production,
        enqueue=config.app_env != "testing",
        backtrace=not is_production,
        diagnose=not is_production,
        catch=not is_production,
    )

    if is_production:
        logger.add(
            LokiLoggerHandler(
                url=_LOKI_URL,
                labels={
                    "application": "app-errors",
                    "environment": config.app_env,
                    "version": config.version,
                    "host": config.host_name,
                },
                timeout=5,
                enable_structured_loki_metadata=True,
                default_formatter=LoguruFormatter(),  # type: ignore[arg-type]
            ),
            serialize=True,
            enqueue=True,
            level=config.log_level,
        )


def _intercept_stdlib_logging(level: str) -> None:
    """Send records of uvicorn, SQLAlchemy and friends to loguru."""
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(level)

    for name in list(logging.root.manager.loggerDict):
        std_logger = logging.getLogger(name)
        std_logger.handlers = []
        std_logger.propagate = True


class InterceptHandler(logging.Handler):
    """Forward standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Intercepts standard logging and sends it to Loguru."""
        if not self.filter(record):
            return

        # Liveness probes would drown everything else
        if "GET /health " in record.getMessage():
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_back and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _format_extras(extra: Mapping[str, Any], *, colored: bool) -> str:
    # Extras are spliced into the format string, so braces must be doubled
    pairs = [
        (str(k), str(v).replace("{", "{{").replace("}", "}}")) for k, v in extra.items()
    ]
    if colored:
        return " | ".join(
            f"<yellow>{k}</yellow>=<cyan>{_escape_tags(v)}</cyan>" for k, v in pairs
        )
    return " | ".join(f"{k}={v}" for k, v in pairs)


def _escape_tags(value: str) -> str:
    return value.replace("<", r"\<")


def _production_format(record: Mapping[str, Any]) -> str:
    """Optimized format for production - structured and minimal."""
    line = (
        f"{record['time'].strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]} | "
        f"{record['level']:<8} | "
        f"{record['name']}:{record['line']} - "
        "{message}"
    )

    if record["extra"]:
        line += " | " + _format_extras(record["extra"], colored=False)

    return line + "\n{exception}"


def _development_format(record: Mapping[str, Any]) -> str:
    """Detailed format for development with colors and extras."""
    ts = record["time"].strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

    line = (
        f"<green>{ts}</green> | "
        f"<level>{record['level']:<8}</level> | "
        f"<cyan>{record['name']}:{record['function']}:{record['line']}</cyan> - "
        "{message}"
    )

    if record["extra"]:
        line += " | " + _format_extras(record["extra"], colored=True)

    return line + "\n{exception}"
