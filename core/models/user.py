# =============================================================================
# core/models/user.py - User Document
# =============================================================================
# A user registers with name/email/password and authenticates with a JWT.
# Passwords are stored as bcrypt hashes; reset tokens are stored as SHA-256
# digests so the raw token only ever lives in the email that was sent.
#
# Roles:
# - user: may publish one bootcamp and manage it
# - admin: may publish any number and manage every bootcamp
# =============================================================================

from datetime import datetime, timedelta
from enum import Enum

from beanie import Document, Indexed
from pydantic import EmailStr, Field

from app.config import settings
from lib.security import (
    create_access_token,
    generate_reset_token,
    hash_reset_token,
    verify_password,
)


class Role(str, Enum):
    """Roles a user can hold."""
    USER = "user"
    ADMIN = "admin"


class User(Document):
    """
    Registered user.

    Stored in the `users` collection with a unique index on email.
    """

    name: str
    email: Indexed(EmailStr, unique=True)
    role: Role = Role.USER
    password: str = Field(repr=False)
    reset_password_token: str | None = Field(default=None, repr=False)
    reset_password_expire: datetime | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def match_password(self, entered_password: str) -> bool:
        """Compare a plain-text password against the stored hash."""
        return verify_password(entered_password, self.password)

    def get_signed_jwt_token(self) -> str:
        """Sign a session token for this user."""
        return create_access_token(str(self.id))

    def get_reset_password_token(self) -> str:
        """
        Generate a password reset token.

        Sets the hashed token and its expiry on the document (the caller
        saves) and returns the raw token to put in the reset link.
        """
        raw_token = generate_reset_token()
        self.reset_password_token = hash_reset_token(raw_token)
        self.reset_password_expire = datetime.utcnow() + timedelta(
            minutes=settings.RESET_TOKEN_EXPIRE_MINUTES
        )
        return raw_token

    def clear_reset_password_token(self) -> None:
        self.reset_password_token = None
        self.reset_password_expire = None
