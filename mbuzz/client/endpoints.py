"""
Tracking API Endpoints

Centralized endpoint paths, relative to the configured API URL.
"""


class Endpoints:
    """Centralized tracking API paths."""

    IDENTIFY = "/identify"
    EVENTS = "/events"
    CONVERSIONS = "/conversions"
    SESSIONS = "/sessions"
