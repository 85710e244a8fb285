"""Library exceptions.

Only configuration problems are raised. Delivery failures are reported as
``False``/``None`` return values and never surface as exceptions.
"""


class MbuzzError(Exception):
    """Base class for mbuzz errors."""


class ConfigurationError(MbuzzError):
    """Raised when the tracker cannot be configured (e.g. missing API key)."""
