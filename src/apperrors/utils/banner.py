"""Banner generation for application."""

import platform
import sys
from datetime import UTC, datetime

from pyfiglet import figlet_format
from sqlalchemy.engine import make_url

from apperrors.config.config import Settings
from apperrors.context import ErrorContext

__all__ = ["create_banner"]

_RESET = "\033[0m"
_HEADING = "\033[1;33m"


def _flag(value: bool) -> str:
    return "✅" if value else "❌"


def create_banner(
    settings: Settings, context: ErrorContext, silent: bool = False
) -> str:
    """Generate and optionally print a startup banner.

    Args:
        settings: Application configuration settings.
        context: The error context the application runs with.
        silent: If True, suppress console output and only return the banner.

    Returns:
        The complete banner as a string.
    """
    options = context.options
    database = make_url(settings.db_url).render_as_string(hide_password=True)
    log_path = settings.log_path if settings.app_env == "development" else "console"
    cleanup = options.cleanup_config
    env_color = "\033[1;31m" if settings.app_env == "production" else "\033[1;32m"

    lines = [
        "\033[1;36m" + figlet_format("APP ERRORS", font="slant") + _RESET,
        f"{_HEADING}Application Errors Service v{settings.version}{_RESET}",
        f"\033[0;37m{'-' * 60}{_RESET}",
        f"🌍 Environment: {env_color}{settings.app_env}{_RESET}",
        f"🔌 API: http://{settings.host_binding}:{settings.port}{settings.root_path}",
        f"📋 Docs: http://localhost:{settings.port}/docs",
        f"📊 Metrics: http://localhost:{settings.port}/metrics",
        f"\n{_HEADING}💾 Error Store{_RESET}",
        f"  • Store: {type(context.store).__name__}",
        f"  • Database: {database}",
        f"  • Data Store Type: {context.data_store_type}",
        f"  • Clear on Restart: {_flag(settings.clear_db_on_restart)}",
        f"\n{_HEADING}🩺 Error Handling{_RESET}",
        f"  • Service: {context.service_details}",
        f"  • Errors Resource: {_flag(options.add_errors_resource)}",
        f"  • Got Errors Resource: {_flag(options.add_got_errors_resource)}",
        f"  • Health Check Window: {options.time_window.human_readable}"
        if options.add_health_check
        else f"  • Health Check: {_flag(False)}",
        f"  • Cleanup: {cleanup.cleanup_strategy} every {cleanup.job_interval}"
        if options.add_cleanup_job
        else f"  • Cleanup: {_flag(False)}",
        f"\n{_HEADING}📝 Logging{_RESET}",
        f"  • Log Level: {settings.log_level}",
        f"  • Log Path: {log_path}",
        f"\n{_HEADING}⚙️ System Information{_RESET}",
        f"  • OS: {platform.system()} {platform.release()}",
        f"  • Python: {sys.version.split()[0]}",
        f"  • Started at: {datetime.now(UTC).strftime('%Y-%m-%d %H:%M:%S')} UTC",
        f"\033[0;37m{'-' * 60}{_RESET}",
    ]

    banner_text = "\n".join(lines)
    if not silent:
        print(banner_text)  # noqa: T201
    return banner_text
