"""
Tests for the one-shot token factory.
"""

import uuid
from datetime import datetime, timezone

import pytest

from service_tokens.app.issuing.token_generator import TokenGenerator, factory
from shared.errors import InvalidJTIError
from shared.test_helpers import FIXED_TIMESTAMP, TEST_APPLICATION_ID, decode_unverified


class TestFactory:
    """Test cases for TokenGenerator.factory."""

    @pytest.fixture
    def jti(self):
        return str(uuid.uuid4())

    def test_factory_matches_builder(self, private_key, clock, jti):
        """Test factory output is identical to the equivalent builder calls."""
        paths = ["/*/users/**", {"/*/conversations/**": {"methods": ["GET"]}}]

        token = TokenGenerator.factory(TEST_APPLICATION_ID, private_key, {
            "ttl": 50,
            "jti": jti,
            "paths": paths,
            "not_before": 1700000000,
            "sub": "user1",
            "custom": "value"
        }, clock=clock)

        expected = (TokenGenerator(TEST_APPLICATION_ID, private_key, clock=clock)
                    .set_ttl(50)
                    .set_jti(jti)
                    .set_paths(paths)
                    .set_not_before(1700000000)
                    .set_subject("user1")
                    .add_claim("custom", "value")
                    .generate())

        assert token == expected

    def test_factory_claims(self, private_key, clock, jti):
        """Test factory options land in the right claims."""
        token = factory(TEST_APPLICATION_ID, private_key, {
            "ttl": 50,
            "jti": jti,
            "paths": ["/*/users/**"],
            "not_before": 1700000000,
            "sub": "user1",
            "custom": "value"
        }, clock=clock)
        claims = decode_unverified(token)

        assert claims["iat"] == FIXED_TIMESTAMP
        assert claims["exp"] == FIXED_TIMESTAMP + 50
        assert claims["jti"] == jti
        assert claims["acl"] == {"paths": {"/*/users/**": {}}}
        assert claims["nbf"] == 1700000000
        assert claims["sub"] == "user1"
        assert claims["custom"] == "value"
        assert claims["application_id"] == TEST_APPLICATION_ID

    def test_factory_without_options(self, private_key, clock):
        """Test factory with defaults only."""
        claims = decode_unverified(factory(TEST_APPLICATION_ID, private_key, clock=clock))

        assert claims["exp"] - claims["iat"] == 900
        assert "acl" not in claims
        assert "nbf" not in claims
        assert "sub" not in claims

    def test_factory_accepts_subject_alias(self, private_key, clock):
        """Test ``subject`` maps to the sub claim."""
        claims = decode_unverified(factory(TEST_APPLICATION_ID, private_key, {"subject": "user1"}, clock=clock))

        assert claims["sub"] == "user1"
        assert "subject" not in claims

    def test_factory_sub_wins_over_subject(self, private_key, clock):
        """Test ``sub`` is applied after ``subject``."""
        claims = decode_unverified(factory(
            TEST_APPLICATION_ID, private_key, {"sub": "user1", "subject": "user2"}, clock=clock
        ))

        assert claims["sub"] == "user1"

    def test_factory_accepts_datetime_not_before(self, private_key, clock):
        """Test not_before given as a datetime."""
        claims = decode_unverified(factory(
            TEST_APPLICATION_ID, private_key,
            {"not_before": datetime(2025, 1, 1, tzinfo=timezone.utc)},
            clock=clock
        ))

        assert claims["nbf"] == 1735689600

    def test_factory_does_not_mutate_options(self, private_key, clock, jti):
        """Test the caller's options are left untouched."""
        options = {"ttl": 50, "jti": jti, "custom": "value"}

        factory(TEST_APPLICATION_ID, private_key, options, clock=clock)

        assert options == {"ttl": 50, "jti": jti, "custom": "value"}

    def test_factory_rejects_invalid_jti(self, private_key, clock):
        """Test validation errors propagate from the factory."""
        with pytest.raises(InvalidJTIError):
            factory(TEST_APPLICATION_ID, private_key, {"jti": "abcd"}, clock=clock)
