"""Per-request access log lines.

Every request produces one line on the `peopledir.request` logger with the
method, path, status and duration. Server errors are logged at ERROR and
client errors at WARNING. Successful health probes and uploaded-picture
fetches drop to DEBUG so polling does not drown out directory traffic.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from peopledir.core.constants import Routes
from peopledir.core.logging import env_bool
from peopledir.core.settings import get_settings


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, quiet_prefixes: Iterable[str] = ()) -> None:
        super().__init__(app)
        self.logger = logging.getLogger("peopledir.request")
        self.quiet_prefixes = tuple(quiet_prefixes)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        status_code: int | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            self._log(request, status_code, (time.perf_counter() - start) * 1000.0)

    def level_for(self, path: str, status_code: int | None) -> int:
        if status_code is None or status_code >= 500:
            return logging.ERROR
        if status_code >= 400:
            return logging.WARNING
        if self.quiet_prefixes and path.startswith(self.quiet_prefixes):
            return logging.DEBUG
        return logging.INFO

    def _log(
        self, request: Request, status_code: int | None, duration_ms: float
    ) -> None:
        path = request.url.path
        self.logger.log(
            self.level_for(path, status_code),
            "%s %s -> %s (%.2fms)",
            request.method,
            path,
            status_code,
            duration_ms,
            extra={
                "method": request.method,
                "path": path,
                "query": request.url.query,
                "status_code": status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent"),
            },
        )


def add_request_logging_middleware(app: FastAPI) -> None:
    """Attach the access log unless LOG_REQUESTS is off."""
    if not env_bool("LOG_REQUESTS", default=True):
        return
    app.add_middleware(
        RequestLoggingMiddleware,
        quiet_prefixes=(Routes.HEALTH.prefix, get_settings().uploads_url_prefix),
    )
