"""
ASGI middleware.
"""

from techtales.api.middleware.request_id import RequestIdMiddleware

__all__ = ["RequestIdMiddleware"]
