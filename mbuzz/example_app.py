"""Example FastAPI application instrumented with mbuzz.

Run with ``MBUZZ_API_KEY=... mbuzz-example`` or
``MBUZZ_API_KEY=... uvicorn --factory mbuzz.example_app:create_app_from_env``.
"""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request

from . import __version__, get_session_id, get_visitor_id
from .middleware import TrackingMiddleware
from .tracker import Tracker

logger = logging.getLogger(__name__)


def create_app(tracker: Tracker) -> FastAPI:
    """Build the example application around a configured tracker."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Lifespan context manager for startup and shutdown."""
        logger.info(f"Tracking enabled: {tracker.enabled} (api_url={tracker.config.api_url})")

        yield

        # Deliver pending session registrations before shutdown
        await tracker.aclose()
        logger.info("Tracking flushed")

    app = FastAPI(title="mbuzz example", version=__version__, lifespan=lifespan)
    app.add_middleware(TrackingMiddleware, tracker=tracker)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Health check (not tracked)."""
        return {"status": "healthy", "version": __version__}

    @app.get("/dashboard")
    async def dashboard(request: Request) -> dict[str, Any]:
        """Page that records a page view for the current visitor."""
        result = await tracker.event("page_view", {"page": "dashboard"})
        identity = getattr(request.state, "mbuzz", None)
        return {
            "visitor_id": get_visitor_id(),
            "session_id": get_session_id(),
            "tracked": result is not None,
            "identity": identity.model_dump() if identity else None,
        }

    return app


def create_app_from_env() -> FastAPI:
    """App factory reading ``MBUZZ_*`` environment variables."""
    return create_app(Tracker.from_env())


def main() -> None:
    """Main entry point for running the example."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    uvicorn.run(create_app_from_env(), host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
