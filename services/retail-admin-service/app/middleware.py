"""
Middleware for request context, logging and metrics.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .logging_config import clear_request_context, get_logger, set_request_context

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds request ID and actor to the logging context and logs each request.

    The request ID is taken from ``X-Request-ID`` or generated, and echoed
    back in the response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(
            request.headers.get("X-Request-ID"),
            request.headers.get("X-Actor"),
        )
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.url.path} ({duration_ms:.2f}ms)",
                extra={"extra_fields": {"error": str(exc)}},
            )
            raise
        else:
            duration_ms = (time.perf_counter() - start_time) * 1000
            response.headers["X-Request-ID"] = request_id
            logger.info(
                f"Request completed: {request.method} {request.url.path} "
                f"[{response.status_code}] ({duration_ms:.2f}ms)",
                extra={
                    "extra_fields": {
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": response.status_code,
                        "duration_ms": duration_ms,
                    }
                },
            )
            return response
        finally:
            clear_request_context()


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records request count and duration for every HTTP request."""

    def __init__(self, app: ASGIApp, track_func: Callable):
        super().__init__(app)
        self.track_func = track_func

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        self.track_func(
            method=request.method,
            endpoint=request.url.path,
            status_code=response.status_code,
            duration=time.perf_counter() - start_time,
        )
        return response
