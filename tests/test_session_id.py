"""Tests for identifier generation and session ID derivation."""

import re

from mbuzz.core import (
    SESSION_TIMEOUT_SECONDS,
    generate_deterministic,
    generate_fingerprint,
    generate_from_fingerprint,
    generate_id,
    generate_random,
    time_bucket,
)

HEX_64 = re.compile(r"^[0-9a-f]{64}$")

# Start of a time bucket, so +1799 stays inside it
BUCKET_START = 1_000 * SESSION_TIMEOUT_SECONDS


class TestGenerateId:
    """Test random identifier generation."""

    def test_returns_64_char_lowercase_hex(self):
        assert HEX_64.match(generate_id())

    def test_100_ids_are_unique(self):
        ids = {generate_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(HEX_64.match(value) for value in ids)

    def test_random_session_id_uses_same_format(self):
        assert HEX_64.match(generate_random())
        assert generate_random() != generate_random()


class TestTimeBucket:
    """Test time bucket computation."""

    def test_floor_division(self):
        assert time_bucket(0) == 0
        assert time_bucket(1799) == 0
        assert time_bucket(1800) == 1
        assert time_bucket(3599) == 1

    def test_negative_timestamp_accepted(self):
        assert time_bucket(-1) == -1


class TestGenerateDeterministic:
    """Test session IDs derived from a visitor ID."""

    def test_returns_64_char_hex(self):
        assert HEX_64.match(generate_deterministic("visitor_abc", BUCKET_START))

    def test_same_bucket_same_id(self):
        first = generate_deterministic("visitor_abc", BUCKET_START)
        last = generate_deterministic("visitor_abc", BUCKET_START + SESSION_TIMEOUT_SECONDS - 1)
        assert first == last

    def test_adjacent_bucket_different_id(self):
        current = generate_deterministic("visitor_abc", BUCKET_START + 100)
        following = generate_deterministic(
            "visitor_abc", BUCKET_START + 100 + SESSION_TIMEOUT_SECONDS
        )
        assert current != following

    def test_different_visitors_different_ids(self):
        assert generate_deterministic("visitor_1", BUCKET_START) != generate_deterministic(
            "visitor_2", BUCKET_START
        )

    def test_known_value(self):
        """Derivation is sha256("<visitor>_<bucket>") and stable across processes."""
        import hashlib

        expected = hashlib.sha256(b"visitor_abc_1000").hexdigest()
        assert generate_deterministic("visitor_abc", BUCKET_START) == expected

    def test_defaults_to_current_time(self, monkeypatch):
        monkeypatch.setattr("mbuzz.core.session_id.time.time", lambda: BUCKET_START + 5.7)
        assert generate_deterministic("visitor_abc") == generate_deterministic(
            "visitor_abc", BUCKET_START
        )


class TestGenerateFromFingerprint:
    """Test session IDs derived from IP + user agent."""

    def test_returns_64_char_hex(self):
        assert HEX_64.match(generate_from_fingerprint("1.2.3.4", "Mozilla/5.0", BUCKET_START))

    def test_fingerprint_is_32_chars(self):
        assert re.match(r"^[0-9a-f]{32}$", generate_fingerprint("1.2.3.4", "Mozilla/5.0"))

    def test_stable_within_bucket(self):
        first = generate_from_fingerprint("1.2.3.4", "Mozilla/5.0", BUCKET_START)
        second = generate_from_fingerprint("1.2.3.4", "Mozilla/5.0", BUCKET_START + 900)
        assert first == second

    def test_differs_by_ip(self):
        assert generate_from_fingerprint(
            "1.2.3.4", "Mozilla/5.0", BUCKET_START
        ) != generate_from_fingerprint("5.6.7.8", "Mozilla/5.0", BUCKET_START)

    def test_differs_by_user_agent(self):
        assert generate_from_fingerprint(
            "1.2.3.4", "Mozilla/5.0", BUCKET_START
        ) != generate_from_fingerprint("1.2.3.4", "curl/8.0", BUCKET_START)

    def test_differs_by_bucket(self):
        assert generate_from_fingerprint(
            "1.2.3.4", "Mozilla/5.0", BUCKET_START
        ) != generate_from_fingerprint(
            "1.2.3.4", "Mozilla/5.0", BUCKET_START + SESSION_TIMEOUT_SECONDS
        )

    def test_buckets_the_hashed_fingerprint(self):
        fingerprint = generate_fingerprint("1.2.3.4", "Mozilla/5.0")
        assert generate_from_fingerprint(
            "1.2.3.4", "Mozilla/5.0", BUCKET_START
        ) == generate_deterministic(fingerprint, BUCKET_START)

    def test_raw_ip_and_user_agent_not_used_as_visitor_id(self):
        """Hashing the fingerprint first keeps it apart from the raw string."""
        assert generate_from_fingerprint(
            "1.2.3.4", "Mozilla/5.0", BUCKET_START
        ) != generate_deterministic("1.2.3.4|Mozilla/5.0", BUCKET_START)
