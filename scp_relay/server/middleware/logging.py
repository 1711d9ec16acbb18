"""Request logging middleware."""
import logging
import time
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger("scp_relay.http")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs control-plane requests with their status and duration."""

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        start_time = time.perf_counter()
        client_host = request.client.host if request.client else "unknown"
        logger.info("Request: %s %s client=%s", request.method, request.url.path, client_host)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info("Response: %s %s status=%d duration=%.2fms", request.method, request.url.path, response.status_code, duration_ms)
        return response
