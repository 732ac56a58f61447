# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic request/response models for the auth endpoints.
# =============================================================================

from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from core.models import Role, User

MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    """Body for POST /auth/register."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Display name")
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class LoginRequest(BaseModel):
    """
    Body for POST /auth/login.

    Both fields are optional here so a missing one is answered with
    "Please provide an email and password" rather than a schema error.
    """
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    """Body for POST /auth/forgot-password."""
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Body for PUT /auth/reset-password/{reset_token}."""
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class UpdateDetailsRequest(BaseModel):
    """Body for PUT /auth/update-details. Only name and email can change."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None


class UpdatePasswordRequest(BaseModel):
    """Body for PUT /auth/update-password."""
    current_password: str
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class UserResponse(BaseModel):
    """
    Public view of a user.

    Never includes the password hash or reset token.
    """
    id: PydanticObjectId
    name: str
    email: str
    role: Role
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
        )


class TokenResponse(BaseModel):
    """Body returned whenever a token is issued."""
    success: bool = True
    token: str
