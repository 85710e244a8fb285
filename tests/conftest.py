"""Pytest configuration and fixtures."""

import json
from typing import Any

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mbuzz import Tracker, TrackingConfig

TEST_API_KEY = "sk_test_abc123"
TEST_API_URL = "https://api.mbuzz.test/api/v1"


class RecordingApi:
    """Fake tracking API: records every request and answers per endpoint."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.responses: dict[str, Any] = {
            "/events": {"events": [{"id": "evt_1"}]},
            "/conversions": {
                "conversion": {"id": "conv_1"},
                "attribution": {"model": "first_touch"},
            },
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = "/" + request.url.path.rsplit("/", 1)[-1]
        body = self.responses.get(path, {"success": True})
        return httpx.Response(self.status_code, json=body)

    def calls_to(self, path: str) -> list[dict[str, Any]]:
        """Decoded JSON bodies of the requests sent to ``path``."""
        return [json.loads(r.content) for r in self.requests if r.url.path.endswith(path)]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def config() -> TrackingConfig:
    """Tracking configuration used across tests."""
    return TrackingConfig(api_key=TEST_API_KEY, api_url=TEST_API_URL)


@pytest.fixture
def fake_api() -> RecordingApi:
    return RecordingApi()


@pytest_asyncio.fixture(scope="function")
async def tracker(config, fake_api):
    """Tracker wired to the recording fake API."""
    tracker = Tracker(config, transport=fake_api.transport)
    yield tracker
    await tracker.aclose()


@pytest_asyncio.fixture(scope="function")
async def client(tracker):
    """Test client for the example app, with tracking middleware installed."""
    from mbuzz.example_app import create_app

    app = create_app(tracker)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="https://example.com",
        timeout=5.0,
    ) as test_client:
        yield test_client

    await tracker.flush()

