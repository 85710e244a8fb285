"""
Tracking API Transport

Best-effort HTTP delivery to the tracking API. Every call resolves to a
boolean or an optional parsed body: connection errors, timeouts, non-2xx
responses, malformed bodies and a disabled/unconfigured client are all
reported as the negative outcome. No retries.
"""

import asyncio
import logging
from typing import Any

import httpx

from .. import __version__
from ..config import TrackingConfig

logger = logging.getLogger(__name__)

USER_AGENT = f"mbuzz-python/{__version__}"


class ApiClient:
    """Non-throwing POST client for the tracking API.

    Args:
        config: Tracking configuration, or None when the library is not configured
        transport: Optional httpx transport (tests use ``httpx.MockTransport``)
    """

    def __init__(
        self,
        config: TrackingConfig | None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Shared HTTP client, created on first use so connections are pooled."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                transport=self._transport,
                timeout=httpx.Timeout(self.config.timeout_seconds),
            )
        return self._client

    async def aclose(self) -> None:
        """
        Release the shared HTTP client.

        A transport passed in by the caller stays open; it belongs to the caller.
        """
        client, self._client = self._client, None
        if client is not None and self._transport is None:
            await client.aclose()

    def _debug(self, message: str, data: Any = None) -> None:
        if self.config is not None and self.config.debug:
            logger.info(f"[mbuzz] {message} {data if data is not None else ''}".rstrip())

    def _can_send(self) -> bool:
        if self.config is None:
            logger.debug("[mbuzz] Client not configured, skipping request")
            return False
        if not self.config.enabled:
            self._debug("Tracking disabled, skipping request")
            return False
        return True

    def build_url(self, path: str) -> str:
        """Join the API URL and an endpoint path with exactly one slash."""
        base_url = self.config.api_url if self.config else ""
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    async def _send(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        """Issue one POST, bounded by the configured timeout.

        The overall deadline cancels the in-flight request, which releases
        its connection back to the pool.
        """
        url = self.build_url(path)
        self._debug(f"POST {url}", payload)

        response = await asyncio.wait_for(
            self._get_client().post(url, json=payload, headers=self._headers()),
            timeout=self.config.timeout_seconds,
        )

        self._debug(f"Response {response.status_code}", response.text)
        return response

    async def post(self, path: str, payload: dict[str, Any]) -> bool:
        """
        POST a payload to the API.

        Returns:
            True on a 2xx response, False on any failure
        """
        if not self._can_send():
            return False

        try:
            response = await self._send(path, payload)
        except asyncio.TimeoutError:
            self._debug("Request timeout")
            return False
        except Exception as e:
            self._debug("Request error", str(e))
            return False

        return response.is_success

    async def post_with_response(
        self, path: str, payload: dict[str, Any]
    ) -> dict[str, Any] | None:
        """
        POST a payload to the API and return the decoded JSON object.

        Returns:
            Parsed response body on a 2xx response with a JSON object body,
            None on any failure
        """
        if not self._can_send():
            return None

        try:
            response = await self._send(path, payload)
        except asyncio.TimeoutError:
            self._debug("Request timeout")
            return None
        except Exception as e:
            self._debug("Request error", str(e))
            return None

        if not response.is_success:
            return None

        try:
            data = response.json()
        except ValueError as e:
            self._debug("Invalid response body", str(e))
            return None

        return data if isinstance(data, dict) else None
