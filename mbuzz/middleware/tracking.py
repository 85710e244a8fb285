"""
Tracking Middleware for FastAPI/Starlette

Resolves visitor and session identity for every tracked request, exposes it
to downstream code, refreshes the identity cookies and registers new
sessions with the tracking API in the background.
"""

import logging
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ..context import RequestContext, use_context
from ..core import generate_deterministic, generate_from_fingerprint, generate_id, generate_random
from ..models import TrackingIdentity
from ..tracker import Tracker
from .cookies import SESSION_COOKIE, VISITOR_COOKIE, set_tracking_cookies

logger = logging.getLogger(__name__)


class TrackingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for visitor/session identity and session tracking.

    For each request that is not filtered out:
    - Reads the visitor ID cookie or generates a new visitor ID
    - Reads the session ID cookie or derives a new session ID
    - Sets request.state.mbuzz (TrackingIdentity) and the request context
    - Sets/refreshes both cookies on the response
    - Schedules session creation when the session is new (never awaited)

    Usage:
        app.add_middleware(TrackingMiddleware, tracker=tracker)
    """

    def __init__(self, app: ASGIApp, tracker: Tracker):
        super().__init__(app)
        self.tracker = tracker

    def _client_ip(self, request: Request) -> str | None:
        if self.tracker.config.trust_forwarded_for:
            forwarded = request.headers.get("x-forwarded-for")
            if forwarded:
                return forwarded.split(",")[0].strip()
        return request.client.host if request.client else None

    def _resolve_visitor_id(self, request: Request) -> tuple[str, bool]:
        existing = request.cookies.get(VISITOR_COOKIE)
        if existing:
            return existing, False
        return generate_id(), True

    def _resolve_session_id(
        self, request: Request, visitor_id: str, visitor_is_new: bool
    ) -> tuple[str, bool]:
        existing = request.cookies.get(SESSION_COOKIE)
        if existing:
            return existing, False

        # Returning visitor: derive from the visitor ID resolved for this request
        if not visitor_is_new:
            return generate_deterministic(visitor_id), True

        # New visitor: derive from IP + user agent so a burst of first requests agrees
        client_ip = self._client_ip(request)
        user_agent = request.headers.get("user-agent")
        if client_ip or user_agent:
            return generate_from_fingerprint(client_ip or "", user_agent or ""), True

        return generate_random(), True

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Resolve identity, run the request in its context and set cookies."""
        if not self.tracker.enabled or self.tracker.path_filter.should_skip(request.url.path):
            return await call_next(request)

        visitor_id, visitor_is_new = self._resolve_visitor_id(request)
        session_id, session_is_new = self._resolve_session_id(request, visitor_id, visitor_is_new)

        # Set by an upstream auth middleware, if any
        user_id = getattr(request.state, "user_id", None)
        user_id = str(user_id) if user_id is not None else None

        url = str(request.url)
        referrer = request.headers.get("referer")

        # Store in request state for downstream access
        request.state.mbuzz = TrackingIdentity(
            visitor_id=visitor_id,
            session_id=session_id,
            user_id=user_id,
        )

        if session_is_new:
            logger.debug(f"[mbuzz] New session for {request.url.path}")
            self.tracker.schedule(
                self.tracker.create_session(
                    visitor_id=visitor_id,
                    session_id=session_id,
                    url=url,
                    referrer=referrer,
                )
            )

        context = RequestContext(
            visitor_id=visitor_id,
            session_id=session_id,
            user_id=user_id,
            url=url,
            referrer=referrer,
        )
        with use_context(context):
            response = await call_next(request)

        set_tracking_cookies(
            response,
            visitor_id,
            session_id,
            secure=request.url.scheme == "https",
        )
        return response
