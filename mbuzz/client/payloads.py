"""Pure payload builders for the tracking API."""

from datetime import UTC, datetime
from typing import Any

from ..models import ConversionOptions, IdentifyOptions, SessionOptions, TrackOptions

DEFAULT_CURRENCY = "USD"


def format_timestamp(value: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. ``2025-01-01T12:00:00.000Z``."""
    value = value or datetime.now(UTC)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in data.items() if value is not None}


def build_track_payload(options: TrackOptions) -> dict[str, Any]:
    return {
        "events": [
            compact(
                {
                    "visitor_id": options.visitor_id,
                    "session_id": options.session_id,
                    "user_id": options.user_id,
                    "event_type": options.event_type,
                    "properties": options.properties,
                    "timestamp": format_timestamp(),
                }
            )
        ]
    }


def build_conversion_payload(options: ConversionOptions) -> dict[str, Any]:
    return {
        "conversion": compact(
            {
                "event_id": options.event_id,
                "visitor_id": options.visitor_id,
                "user_id": options.user_id,
                "conversion_type": options.conversion_type,
                "revenue": options.revenue,
                "currency": options.currency or DEFAULT_CURRENCY,
                "is_acquisition": options.is_acquisition,
                "inherit_acquisition": options.inherit_acquisition,
                "properties": options.properties,
                "timestamp": format_timestamp(),
            }
        )
    }


def build_identify_payload(options: IdentifyOptions) -> dict[str, Any]:
    return compact(
        {
            "user_id": str(options.user_id),
            "visitor_id": options.visitor_id,
            "traits": options.traits,
            "timestamp": format_timestamp(),
        }
    )


def build_session_payload(options: SessionOptions) -> dict[str, Any]:
    return {
        "session": compact(
            {
                "visitor_id": options.visitor_id,
                "session_id": options.session_id,
                "url": options.url,
                "referrer": options.referrer,
                "started_at": format_timestamp(options.started_at),
            }
        )
    }
