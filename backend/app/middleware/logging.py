"""
CustomerBook Backend — Request Logging Middleware
===================================================

What:  One access log line per HTTP request with status and duration.
How:   Times call_next and picks the level from the status class.

Each line is tagged with the surface it served:
    api   /customers...   JSON API
    ui    /customer...    HTML pages (their in-process API calls log as `api`)
    other anything else (docs, redirects)

Request bodies are never logged: customer names and birth dates are personal data.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("customerbook.access")

# Probed every few seconds by orchestrators
UNLOGGED_PATHS = frozenset({"/health"})


def surface_for(path: str) -> str:
    if path == "/customers" or path.startswith("/customers/"):
        return "api"
    if path == "/customer" or path.startswith("/customer/"):
        return "ui"
    return "other"


def level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        surface = surface_for(path)
        logger.log(
            level_for(response.status_code),
            "[%s] %s %s %s -> %d (%.1fms)",
            rid,
            surface,
            request.method,
            path,
            response.status_code,
            elapsed_ms,
            extra={
                "request_id": rid,
                "surface": surface,
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        return response
