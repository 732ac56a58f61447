# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication against the users collection.
#
# Usage:
#   from app.auth import get_current_user, CurrentUser
#
#   @router.get("/protected")
#   async def protected(user: CurrentUser):
#       return {"user_id": str(user.id)}
# =============================================================================

from app.auth.dependencies import (
    CurrentUser,
    PublisherUser,
    get_current_user,
    publisher,
    require_roles,
)
from app.auth.models import TokenResponse, UserResponse

__all__ = [
    "CurrentUser",
    "PublisherUser",
    "get_current_user",
    "publisher",
    "require_roles",
    "TokenResponse",
    "UserResponse",
]
