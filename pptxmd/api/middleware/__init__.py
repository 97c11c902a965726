"""API middleware for pptxmd."""

from pptxmd.api.middleware.logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
]
