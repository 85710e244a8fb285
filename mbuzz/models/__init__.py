"""Data models for the tracking client."""

from .tracking import (
    ConversionOptions,
    ConversionResult,
    IdentifyOptions,
    SessionOptions,
    TrackingIdentity,
    TrackOptions,
    TrackResult,
)

__all__ = [
    # Request options
    "TrackOptions",
    "ConversionOptions",
    "IdentifyOptions",
    "SessionOptions",
    # Results
    "TrackResult",
    "ConversionResult",
    # Request attachment
    "TrackingIdentity",
]
