"""
Request logging middleware
Logs method, path, status and duration of every API call
"""
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("acaia.requests")


class RequestLogMiddleware(BaseHTTPMiddleware):
    """One log line per request"""

    # Paths that are not logged
    EXCLUDED_PATHS = [
        "/",
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
    ]

    async def dispatch(self, request: Request, call_next):
        # CORS pre-flight requests
        if request.method == "OPTIONS":
            return await call_next(request)

        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        start_time = time.time()
        client_host = request.client.host if request.client else "-"
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = int((time.time() - start_time) * 1000)
            # The traceback is logged by the global exception handler
            logger.warning("%s %s -> error in %dms (%s)", request.method, request.url.path, elapsed_ms, client_host)
            raise

        elapsed_ms = int((time.time() - start_time) * 1000)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s -> %d in %dms (%s)",
            request.method, request.url.path, response.status_code, elapsed_ms, client_host,
        )
        return response
