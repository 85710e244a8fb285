"""Tracking API client: transport, payloads and request operations."""

from .api import USER_AGENT, ApiClient
from .endpoints import Endpoints
from .operations import conversion, create_session, identify, track

__all__ = [
    "ApiClient",
    "Endpoints",
    "USER_AGENT",
    "track",
    "conversion",
    "identify",
    "create_session",
]
