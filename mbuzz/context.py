"""
Request Context

Manages request-scoped visitor/session identity using contextvars.
A context set with ``use_context``/``with_context`` is visible to all code
running inside that scope, including tasks spawned from it, and never to
concurrently running requests. Outside any scope the current context is None.
"""

import inspect
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class RequestContext(BaseModel):
    """Visitor/session/user identity and request metadata for one request."""

    model_config = ConfigDict(frozen=True)

    visitor_id: str
    session_id: str
    user_id: str | None = None
    url: str | None = None
    referrer: str | None = None

    def enrich_properties(self, custom: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Merge url and referrer from the context into custom event properties.

        Custom properties win over context values. Missing context values
        are left out rather than set to None.
        """
        base: dict[str, Any] = {}
        if self.url:
            base["url"] = self.url
        if self.referrer:
            base["referrer"] = self.referrer
        return {**base, **(custom or {})}


# Scoped request context storage (isolated per task and per thread)
_request_context: ContextVar[RequestContext | None] = ContextVar(
    "mbuzz_request_context", default=None
)


@contextmanager
def use_context(context: RequestContext) -> Iterator[RequestContext]:
    """Make ``context`` current for the duration of the ``with`` block."""
    token = _request_context.set(context)
    try:
        yield context
    finally:
        _request_context.reset(token)


async def with_context(
    context: RequestContext, callback: Callable[..., Any], *args: Any, **kwargs: Any
) -> Any:
    """
    Run ``callback`` with ``context`` as the current request context.

    The callback may be a coroutine function or a plain callable. Exceptions
    propagate unchanged and the context is removed afterwards.

    Returns:
        Whatever the callback returns (awaited if awaitable)
    """
    with use_context(context):
        result = callback(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result


def run_with_context(context: RequestContext, callback: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Synchronous variant of ``with_context`` for plain callables."""
    with use_context(context):
        return callback(*args, **kwargs)


def get_context() -> RequestContext | None:
    """Get the current request context, or None outside any request scope."""
    return _request_context.get()


def get_visitor_id() -> str | None:
    context = get_context()
    return context.visitor_id if context else None


def get_session_id() -> str | None:
    context = get_context()
    return context.session_id if context else None


def get_user_id() -> str | None:
    context = get_context()
    return context.user_id if context else None
