"""Identity primitives: identifiers, session derivation and path filtering."""

from .identifiers import generate_id
from .path_filter import PathFilter
from .session_id import (
    FINGERPRINT_LENGTH,
    SESSION_ID_LENGTH,
    SESSION_TIMEOUT_SECONDS,
    generate_deterministic,
    generate_fingerprint,
    generate_from_fingerprint,
    generate_random,
    time_bucket,
)

__all__ = [
    "PathFilter",
    "generate_id",
    "generate_deterministic",
    "generate_fingerprint",
    "generate_from_fingerprint",
    "generate_random",
    "time_bucket",
    "SESSION_TIMEOUT_SECONDS",
    "SESSION_ID_LENGTH",
    "FINGERPRINT_LENGTH",
]
