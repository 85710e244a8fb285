"""
Session Identifiers

Session IDs are either random or derived from a stable input plus a
30-minute time bucket. Derived IDs let concurrent requests from the same
visitor agree on one session before any cookie has round-tripped, and they
roll over automatically when the bucket changes.
"""

import hashlib
import time

from .identifiers import generate_id

SESSION_TIMEOUT_SECONDS = 1800
SESSION_ID_LENGTH = 64
FINGERPRINT_LENGTH = 32


def _now() -> int:
    return int(time.time())


def _sha256_hex(raw: str) -> str:
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def time_bucket(timestamp: int) -> int:
    """Index of the session window containing ``timestamp`` (unix seconds)."""
    return timestamp // SESSION_TIMEOUT_SECONDS


def generate_deterministic(visitor_id: str, timestamp: int | None = None) -> str:
    """
    Derive a session ID for a returning visitor.

    Same visitor_id + same time bucket = same session ID.

    Args:
        visitor_id: Visitor identifier read from the visitor cookie
        timestamp: Unix seconds, defaults to now

    Returns:
        64-character hex session ID
    """
    if timestamp is None:
        timestamp = _now()
    raw = f"{visitor_id}_{time_bucket(timestamp)}"
    return _sha256_hex(raw)[:SESSION_ID_LENGTH]


def generate_fingerprint(client_ip: str, user_agent: str) -> str:
    """Hash of client IP and user agent, used when no visitor cookie exists yet."""
    return _sha256_hex(f"{client_ip}|{user_agent}")[:FINGERPRINT_LENGTH]


def generate_from_fingerprint(
    client_ip: str, user_agent: str, timestamp: int | None = None
) -> str:
    """
    Derive a session ID for a new visitor from an IP + user agent fingerprint.

    Same fingerprint + same time bucket = same session ID.

    Args:
        client_ip: Client IP address
        user_agent: User-Agent header value
        timestamp: Unix seconds, defaults to now

    Returns:
        64-character hex session ID
    """
    if timestamp is None:
        timestamp = _now()
    fingerprint = generate_fingerprint(client_ip, user_agent)
    raw = f"{fingerprint}_{time_bucket(timestamp)}"
    return _sha256_hex(raw)[:SESSION_ID_LENGTH]


def generate_random() -> str:
    """Random session ID (fallback when nothing stable is known)."""
    return generate_id()
