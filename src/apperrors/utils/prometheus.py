"""Prometheus metrics of the service."""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from prometheus_client import Counter, Gauge

__all__ = ["ERRORS_REPORTED", "REQUESTS_IN_PROGRESS", "add_prometheus_metrics"]

REQUESTS_IN_PROGRESS = Gauge(
    "http_requests_in_progress_total",
    "Active HTTP requests",
    ["method", "path"],
)

ERRORS_REPORTED = Counter(
    "application_errors_reported_total",
    "Application errors reported, by whether saving them succeeded",
    ["saved"],
)


def add_prometheus_metrics(app: FastAPI) -> None:
    """Track in-flight HTTP requests of the application.

    Args:
        app: The FastAPI application instance where the middleware will be added.
    """

    @app.middleware("http")
    async def track_in_flight(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        gauge = REQUESTS_IN_PROGRESS.labels(request.method, request.url.path)
        gauge.inc()
        try:
            return await call_next(request)
        finally:
            gauge.dec()
