"""Visitor/session cookie names and attributes."""

from starlette.responses import Response

VISITOR_COOKIE = "_mbuzz_vid"
SESSION_COOKIE = "_mbuzz_sid"

VISITOR_MAX_AGE = 63_072_000  # 2 years, seconds
SESSION_MAX_AGE = 1_800  # 30 minutes, seconds


def set_tracking_cookies(
    response: Response, visitor_id: str, session_id: str, secure: bool
) -> None:
    """Set or refresh both identity cookies on the response."""
    response.set_cookie(
        VISITOR_COOKIE,
        visitor_id,
        max_age=VISITOR_MAX_AGE,
        path="/",
        secure=secure,
        httponly=True,
        samesite="lax",
    )
    response.set_cookie(
        SESSION_COOKIE,
        session_id,
        max_age=SESSION_MAX_AGE,
        path="/",
        secure=secure,
        httponly=True,
        samesite="lax",
    )
