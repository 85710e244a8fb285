"""
Tracker

Entry point for host applications. A ``Tracker`` is built from an explicit
``TrackingConfig`` and provides event, conversion, identify and session
calls that pick up visitor/session/user IDs from the current request context.
All calls are best effort and never raise.
"""

import asyncio
import logging
from collections.abc import Coroutine
from datetime import datetime
from typing import Any

import httpx
from pydantic import ValidationError

from .client import ApiClient, operations
from .config import TrackingConfig
from .context import get_context
from .core import PathFilter
from .errors import ConfigurationError
from .models import (
    ConversionOptions,
    ConversionResult,
    IdentifyOptions,
    SessionOptions,
    TrackOptions,
    TrackResult,
)

logger = logging.getLogger(__name__)


class Tracker:
    """Configured tracking client.

    Args:
        config: Immutable tracking configuration
        transport: Optional httpx transport for the API client
    """

    def __init__(
        self,
        config: TrackingConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.path_filter = PathFilter.from_config(config)
        self.api = ApiClient(config, transport=transport)
        # Fire-and-forget tasks, referenced until they finish
        self._pending: set[asyncio.Task] = set()

    @classmethod
    def from_env(cls, **overrides: Any) -> "Tracker":
        """
        Build a tracker from ``MBUZZ_*`` environment variables.

        Raises:
            ConfigurationError: If the API key is missing or a value is invalid
        """
        try:
            config = TrackingConfig(**overrides)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid tracking configuration: {e}") from e
        return cls(config)

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    async def event(
        self,
        event_type: str,
        properties: dict[str, Any] | None = None,
        *,
        visitor_id: str | None = None,
        session_id: str | None = None,
        user_id: str | None = None,
    ) -> TrackResult | None:
        """
        Track a custom event.

        IDs default to the current request context, and the context's url
        and referrer are merged into the properties.

        Returns:
            TrackResult on success, None on any failure
        """
        context = get_context()
        if context is not None:
            properties = context.enrich_properties(properties)
            visitor_id = visitor_id or context.visitor_id
            session_id = session_id or context.session_id
            user_id = user_id or context.user_id

        options = TrackOptions(
            event_type=event_type,
            visitor_id=visitor_id,
            session_id=session_id,
            user_id=user_id,
            properties=properties or {},
        )
        return await operations.track(self.api, options)

    async def conversion(
        self,
        conversion_type: str,
        *,
        event_id: str | None = None,
        visitor_id: str | None = None,
        user_id: str | None = None,
        revenue: float | None = None,
        currency: str | None = None,
        is_acquisition: bool | None = None,
        inherit_acquisition: bool | None = None,
        properties: dict[str, Any] | None = None,
    ) -> ConversionResult | None:
        """Track a conversion. Returns ConversionResult on success, None otherwise."""
        context = get_context()
        if context is not None:
            visitor_id = visitor_id or context.visitor_id
            user_id = user_id or context.user_id

        options = ConversionOptions(
            conversion_type=conversion_type,
            event_id=event_id,
            visitor_id=visitor_id,
            user_id=user_id,
            revenue=revenue,
            currency=currency,
            is_acquisition=is_acquisition,
            inherit_acquisition=inherit_acquisition,
            properties=properties or {},
        )
        return await operations.conversion(self.api, options)

    async def identify(
        self,
        user_id: str | int,
        *,
        visitor_id: str | None = None,
        traits: dict[str, Any] | None = None,
    ) -> bool:
        """Associate a user with the current (or given) visitor."""
        if visitor_id is None:
            context = get_context()
            visitor_id = context.visitor_id if context else None

        options = IdentifyOptions(user_id=user_id, visitor_id=visitor_id, traits=traits or {})
        return await operations.identify(self.api, options)

    async def create_session(
        self,
        visitor_id: str,
        session_id: str,
        url: str,
        referrer: str | None = None,
        started_at: datetime | None = None,
    ) -> bool:
        """Register a new session with the tracking API."""
        options = SessionOptions(
            visitor_id=visitor_id,
            session_id=session_id,
            url=url,
            referrer=referrer,
            started_at=started_at,
        )
        return await operations.create_session(self.api, options)

    def schedule(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """
        Run ``coro`` in the background without awaiting it.

        The task starts once the caller yields to the event loop. Its result
        is discarded and failures are only logged.
        """
        task = asyncio.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(f"[mbuzz] Background delivery failed: {exc}")

    @property
    def pending(self) -> int:
        """Number of background deliveries still running."""
        return len(self._pending)

    async def flush(self) -> None:
        """Wait for all background deliveries (use before application shutdown)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self) -> None:
        """Flush background deliveries, then release the HTTP client."""
        await self.flush()
        await self.api.aclose()
