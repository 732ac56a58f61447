# =============================================================================
# lib/security.py - Password Hashing and Token Helpers
# =============================================================================
# - bcrypt for password hashes
# - python-jose for signed session tokens (HS256)
# - secrets/hashlib for password reset tokens
#
# Usage:
#   from lib.security import hash_password, create_access_token
#   hashed = hash_password("123456")
#   token = create_access_token(user_id)
# =============================================================================

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Any

import bcrypt
from jose import jwt

from app.config import settings

JWT_ALGORITHM = "HS256"
BCRYPT_ROUNDS = 10
RESET_TOKEN_BYTES = 20


# =============================================================================
# Passwords
# =============================================================================

def hash_password(password: str) -> str:
    """Hash a plain-text password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# =============================================================================
# Session Tokens
# =============================================================================

def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """
    Sign a JWT carrying the user id.

    Args:
        user_id: The user's ObjectId as a string
        expires_delta: Override the configured lifetime

    Returns:
        Encoded JWT string
    """
    expire = datetime.utcnow() + (expires_delta or timedelta(days=settings.JWT_EXPIRE_DAYS))
    payload = {"id": user_id, "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify a JWT and return its payload.

    Raises:
        jose.JWTError: If the signature is invalid or the token expired
    """
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[JWT_ALGORITHM])


# =============================================================================
# Password Reset Tokens
# =============================================================================

def generate_reset_token() -> str:
    """Random hex token sent to the user by email."""
    return secrets.token_hex(RESET_TOKEN_BYTES)


def hash_reset_token(token: str) -> str:
    """SHA-256 digest stored on the user in place of the raw token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
