"""Random identifier generation."""

import secrets

ID_BYTES = 32


def generate_id() -> str:
    """Generate a random 64-character hex identifier for visitors and sessions."""
    return secrets.token_hex(ID_BYTES)
