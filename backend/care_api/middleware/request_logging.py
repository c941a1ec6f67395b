"""Access logging for every HTTP request."""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from care_api.logging_config import get_logger

logger = get_logger("care_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of each request."""
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return response
