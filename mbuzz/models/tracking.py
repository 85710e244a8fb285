"""Tracking request options and results."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TrackingIdentity(BaseModel):
    """Resolved identity attached to ``request.state.mbuzz`` by the middleware."""

    model_config = ConfigDict(frozen=True)

    visitor_id: str
    session_id: str
    user_id: str | None = None


class TrackOptions(BaseModel):
    """Options for an ``/events`` call."""

    event_type: str
    visitor_id: str | None = None
    session_id: str | None = None
    user_id: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)


class ConversionOptions(BaseModel):
    """Options for a ``/conversions`` call."""

    conversion_type: str
    event_id: str | None = None
    visitor_id: str | None = None
    user_id: str | None = None
    revenue: float | None = None
    currency: str | None = None
    is_acquisition: bool | None = None
    inherit_acquisition: bool | None = None
    properties: dict[str, Any] = Field(default_factory=dict)


class IdentifyOptions(BaseModel):
    """Options for an ``/identify`` call."""

    user_id: str | int
    visitor_id: str | None = None
    traits: dict[str, Any] = Field(default_factory=dict)


class SessionOptions(BaseModel):
    """Options for a ``/sessions`` call."""

    visitor_id: str
    session_id: str
    url: str
    referrer: str | None = None
    started_at: datetime | None = None


class TrackResult(BaseModel):
    """Successful event tracking result."""

    success: bool = True
    event_id: str
    event_type: str
    visitor_id: str | None = None
    session_id: str | None = None


class ConversionResult(BaseModel):
    """Successful conversion result, with attribution data when returned."""

    success: bool = True
    conversion_id: str
    attribution: dict[str, Any] | None = None
