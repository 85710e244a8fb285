"""
Tracking API Operations

One function per API call: validate the options, build the payload, send it
and parse the response. Invalid options never reach the network.
"""

import logging
from typing import Any

from ..models import (
    ConversionOptions,
    ConversionResult,
    IdentifyOptions,
    SessionOptions,
    TrackOptions,
    TrackResult,
)
from .api import ApiClient
from .endpoints import Endpoints
from .payloads import (
    build_conversion_payload,
    build_identify_payload,
    build_session_payload,
    build_track_payload,
)
from .validation import (
    validate_conversion,
    validate_identify,
    validate_session,
    validate_track,
)

logger = logging.getLogger(__name__)


def _parse_track_response(
    response: dict[str, Any] | None, options: TrackOptions
) -> TrackResult | None:
    events = (response or {}).get("events")
    if not isinstance(events, list) or not events or not isinstance(events[0], dict):
        return None

    event_id = events[0].get("id")
    if not event_id:
        return None

    return TrackResult(
        event_id=str(event_id),
        event_type=options.event_type,
        visitor_id=options.visitor_id,
        session_id=options.session_id,
    )


def _parse_conversion_response(response: dict[str, Any] | None) -> ConversionResult | None:
    conversion = (response or {}).get("conversion")
    if not isinstance(conversion, dict) or not conversion.get("id"):
        return None

    attribution = response.get("attribution")
    return ConversionResult(
        conversion_id=str(conversion["id"]),
        attribution=attribution if isinstance(attribution, dict) else None,
    )


async def track(api: ApiClient, options: TrackOptions) -> TrackResult | None:
    """Send one event to ``/events``."""
    if not validate_track(options):
        logger.debug(f"[mbuzz] Invalid event options: {options.event_type!r}")
        return None

    response = await api.post_with_response(Endpoints.EVENTS, build_track_payload(options))
    return _parse_track_response(response, options)


async def conversion(api: ApiClient, options: ConversionOptions) -> ConversionResult | None:
    """Send one conversion to ``/conversions``."""
    if not validate_conversion(options):
        logger.debug(f"[mbuzz] Invalid conversion options: {options.conversion_type!r}")
        return None

    response = await api.post_with_response(
        Endpoints.CONVERSIONS, build_conversion_payload(options)
    )
    return _parse_conversion_response(response)


async def identify(api: ApiClient, options: IdentifyOptions) -> bool:
    """Link a user to a visitor via ``/identify``."""
    if not validate_identify(options):
        return False

    return await api.post(Endpoints.IDENTIFY, build_identify_payload(options))


async def create_session(api: ApiClient, options: SessionOptions) -> bool:
    """Register a new session via ``/sessions``."""
    if not validate_session(options):
        return False

    return await api.post(Endpoints.SESSIONS, build_session_payload(options))
