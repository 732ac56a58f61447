# =============================================================================
# tests/test_security.py - Password and Token Helper Tests
# =============================================================================
# Unit tests for lib/security.py.
#
# Run with: pytest tests/test_security.py -v
# =============================================================================

from datetime import timedelta

import pytest
from jose import ExpiredSignatureError, JWTError, jwt

from app.config import settings
from lib.security import (
    create_access_token,
    decode_access_token,
    generate_reset_token,
    hash_password,
    hash_reset_token,
    verify_password,
)


class TestPasswords:
    """Tests for bcrypt hashing."""

    def test_hash_and_verify(self):
        """Test a password verifies against its own hash only."""
        hashed = hash_password("123456")

        assert hashed != "123456"
        assert hashed.startswith("$2")
        assert verify_password("123456", hashed)
        assert not verify_password("1234567", hashed)

    def test_salted(self):
        """Test two hashes of the same password differ."""
        assert hash_password("123456") != hash_password("123456")

    def test_garbage_hash(self):
        """Test a non-bcrypt stored value never verifies."""
        assert verify_password("123456", "plain-text") is False


class TestAccessTokens:
    """Tests for JWT session tokens."""

    def test_round_trip(self):
        """Test the id claim survives signing and verification."""
        token = create_access_token("5d713995b721c3bb38c1f5d0")

        payload = decode_access_token(token)

        assert payload["id"] == "5d713995b721c3bb38c1f5d0"
        assert "exp" in payload

    def test_expired(self):
        """Test an expired token is rejected."""
        token = create_access_token("5d713995b721c3bb38c1f5d0", expires_delta=timedelta(seconds=-10))

        with pytest.raises(ExpiredSignatureError):
            decode_access_token(token)

    def test_wrong_secret(self):
        """Test a token signed with another secret is rejected."""
        token = jwt.encode({"id": "x"}, "another-secret-entirely", algorithm="HS256")

        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_signed_with_configured_secret(self):
        """Test tokens are HS256 with JWT_SECRET."""
        token = create_access_token("abc")

        assert jwt.decode(token, settings.JWT_SECRET, algorithms=["HS256"])["id"] == "abc"


class TestResetTokens:
    """Tests for password reset tokens."""

    def test_generate(self):
        """Test tokens are 40 hex chars and unique."""
        token = generate_reset_token()

        assert len(token) == 40
        int(token, 16)
        assert generate_reset_token() != token

    def test_hash_is_deterministic(self):
        """Test the stored digest is SHA-256 hex of the raw token."""
        digest = hash_reset_token("abc")

        assert digest == hash_reset_token("abc")
        assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
