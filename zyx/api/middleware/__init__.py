"""
Zyx Dashboard - API Middleware
==============================
"""

from .logging import LoggingMiddleware, REQUEST_ID_HEADER

__all__ = ["LoggingMiddleware", "REQUEST_ID_HEADER"]
