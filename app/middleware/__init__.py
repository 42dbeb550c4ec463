"""
EarthSafe API - Middleware Package
"""

from app.middleware.request_logging import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    setup_http_middleware,
)

__all__ = [
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "setup_http_middleware",
]
