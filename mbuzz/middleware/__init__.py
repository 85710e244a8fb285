"""ASGI middleware for visitor/session identity."""

from .cookies import (
    SESSION_COOKIE,
    SESSION_MAX_AGE,
    VISITOR_COOKIE,
    VISITOR_MAX_AGE,
    set_tracking_cookies,
)
from .tracking import TrackingMiddleware

__all__ = [
    "TrackingMiddleware",
    "VISITOR_COOKIE",
    "SESSION_COOKIE",
    "VISITOR_MAX_AGE",
    "SESSION_MAX_AGE",
    "set_tracking_cookies",
]
