# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The token is read from (in order):
# - Authorization: Bearer <token>
# - the `token` cookie set at login
#
# Usage:
#   from app.auth import get_current_user, require_roles
#
#   @router.get("/protected")
#   async def protected(user: User = Depends(get_current_user)):
#       return {"user_id": str(user.id)}
#
#   @router.post("/admin-only", dependencies=[Depends(require_roles(Role.ADMIN))])
# =============================================================================

import logging
from typing import Annotated, Callable, Optional

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError

from app.exceptions import NotAuthorizedError, RoleNotAllowedError
from core.models import Role, User
from lib.security import decode_access_token
from lib.utils import parse_object_id

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; a missing header falls through to the cookie
security_optional = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
    token: Annotated[Optional[str], Cookie()] = None,
) -> User:
    """
    Resolve the user behind the request's JWT.

    This dependency:
    1. Takes the Bearer token from the Authorization header, or the cookie
    2. Verifies the JWT signature and expiry
    3. Loads the user named by the `id` claim

    Returns:
        User: The authenticated user document

    Raises:
        NotAuthorizedError: 401 if the token is missing, invalid, expired,
            or the user no longer exists
    """
    raw_token = credentials.credentials if credentials else token

    if not raw_token or raw_token == "none":
        raise NotAuthorizedError()

    try:
        payload = decode_access_token(raw_token)
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise NotAuthorizedError()
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise NotAuthorizedError()

    user_id = parse_object_id(payload.get("id") or "")
    user = await User.get(user_id) if user_id else None

    if not user:
        logger.warning(f"Token refers to unknown user: {payload.get('id')}")
        raise NotAuthorizedError()

    logger.debug(f"Authenticated user: {user.id}")
    return user


def require_roles(*roles: Role) -> Callable:
    """
    Build a dependency that only lets the given roles through.

    Returns the authenticated user so it can be used in place of
    get_current_user.

    Raises:
        RoleNotAllowedError: 403 if the user's role isn't listed
    """
    async def role_checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise RoleNotAllowedError(user.role.value)
        return user

    return role_checker


# Roles allowed to publish and manage bootcamps
publisher = require_roles(Role.USER, Role.ADMIN)

# Type aliases for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
PublisherUser = Annotated[User, Depends(publisher)]
