"""
mbuzz

Server-side analytics tracking for ASGI applications.
Import everything from this single entry point.
"""

__version__ = "0.1.0"

from .config import TrackingConfig  # noqa: E402
from .context import (  # noqa: E402
    RequestContext,
    get_context,
    get_session_id,
    get_user_id,
    get_visitor_id,
    run_with_context,
    use_context,
    with_context,
)
from .core import generate_id  # noqa: E402
from .errors import ConfigurationError, MbuzzError  # noqa: E402
from .middleware import TrackingMiddleware  # noqa: E402
from .models import ConversionResult, TrackingIdentity, TrackResult  # noqa: E402
from .tracker import Tracker  # noqa: E402

__all__ = [
    "__version__",
    # Config
    "TrackingConfig",
    # Tracking
    "Tracker",
    "TrackResult",
    "ConversionResult",
    # Context
    "RequestContext",
    "use_context",
    "with_context",
    "run_with_context",
    "get_context",
    "get_visitor_id",
    "get_session_id",
    "get_user_id",
    # Middleware
    "TrackingMiddleware",
    "TrackingIdentity",
    # Utilities
    "generate_id",
    # Errors
    "MbuzzError",
    "ConfigurationError",
]
