"""
EarthSafe API - HTTP Middleware

- Request logging (method, path, status, duration)
- Security headers
"""

import logging
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


# ============================================================================
# REQUEST LOGGING MIDDLEWARE
# ============================================================================

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access log for every request.

    Client errors and server errors are logged at WARNING, the rest at INFO.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        client_ip = request.client.host if request.client else "unknown"
        path = request.url.path
        method = request.method

        response = await call_next(request)

        duration = time.time() - start_time
        log_level = logging.WARNING if response.status_code >= 400 else logging.INFO

        logger.log(
            log_level,
            f"{method} {path} - {response.status_code} - {duration:.3f}s - {client_ip}",
            extra={
                "method": method,
                "path": path,
                "status": response.status_code,
                "duration": duration,
                "client_ip": client_ip,
            },
        )

        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response


# ============================================================================
# SECURITY HEADERS MIDDLEWARE
# ============================================================================

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to API responses. Uploaded files are left alone."""

    def __init__(self, app: FastAPI, development_mode: bool = False, uploads_prefix: str = "/uploads"):
        super().__init__(app)
        self.development_mode = development_mode
        self.uploads_prefix = uploads_prefix

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        if request.url.path.startswith(self.uploads_prefix):
            return response

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # HSTS only outside development
        if not self.development_mode:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


def setup_http_middleware(app: FastAPI, development_mode: bool = False, uploads_prefix: str = "/uploads"):
    """
    Register the HTTP middleware.

    Later middleware wraps earlier ones, so request logging is added last
    and sees the final status of every response.
    """
    app.add_middleware(
        SecurityHeadersMiddleware,
        development_mode=development_mode,
        uploads_prefix=uploads_prefix,
    )
    app.add_middleware(RequestLoggingMiddleware)

    logger.info(f"HTTP middleware configured: development_mode={development_mode}")
