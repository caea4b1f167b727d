"""Application errors service: record, page, resolve and expire errors."""

from apperrors.app import app
from apperrors.server import run

__all__ = ["app", "main"]


def main() -> None:
    """Run the application server."""
    run()
