"""Pure validation of tracking request options."""

from typing import Any

from ..models import ConversionOptions, IdentifyOptions, SessionOptions, TrackOptions


def is_present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def _has_identifier(visitor_id: str | None, user_id: str | int | None) -> bool:
    return is_present(visitor_id) or is_present(user_id)


def validate_track(options: TrackOptions) -> bool:
    return is_present(options.event_type) and _has_identifier(options.visitor_id, options.user_id)


def validate_conversion(options: ConversionOptions) -> bool:
    return is_present(options.conversion_type) and (
        is_present(options.event_id) or is_present(options.visitor_id) or is_present(options.user_id)
    )


def validate_identify(options: IdentifyOptions) -> bool:
    return is_present(options.user_id)


def validate_session(options: SessionOptions) -> bool:
    return (
        is_present(options.visitor_id)
        and is_present(options.session_id)
        and is_present(options.url)
    )
