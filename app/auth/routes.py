# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for registration, login/logout, the current user,
# profile/password updates and the forgot/reset password flow.
#
# Every endpoint that issues a token also sets it as an HttpOnly cookie.
# =============================================================================

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.auth.dependencies import CurrentUser
from app.auth.models import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenResponse,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
    UserResponse,
)
from app.config import settings
from core.models import User
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()

TOKEN_COOKIE = "token"
LOGOUT_COOKIE_SECONDS = 10


def send_token_response(user: User, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Sign a token for `user`, return it in the body and as a cookie."""
    token = user.get_signed_jwt_token()

    response = JSONResponse(
        status_code=status_code,
        content=TokenResponse(token=token).model_dump(),
    )
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=token,
        expires=settings.JWT_COOKIE_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
    )
    return response


def _user_payload(user: User) -> dict:
    return {
        "success": True,
        "data": UserResponse.from_user(user).model_dump(mode="json"),
    }


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest):
    """
    Register a new user.

    Returns a token for the new account.
    """
    user = await AuthService.register(
        name=request.name,
        email=request.email,
        password=request.password,
    )
    return send_token_response(user, status.HTTP_201_CREATED)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Log in with email and password.

    Raises:
        400: If email or password is missing
        401: If the credentials are invalid
    """
    user = await AuthService.login(request.email, request.password)
    return send_token_response(user)


@router.get("/logout")
async def logout(user: CurrentUser):
    """
    Log out by overwriting the token cookie.

    The cookie value becomes "none" and expires in a few seconds.
    """
    response = JSONResponse(content={"success": True, "data": {}})
    response.set_cookie(
        key=TOKEN_COOKIE,
        value="none",
        expires=LOGOUT_COOKIE_SECONDS,
        httponly=True,
    )
    logger.info(f"User logged out: {user.id}")
    return response


@router.get("/me")
async def get_me(user: CurrentUser):
    """
    Get the current authenticated user.

    Raises:
        401: If not authenticated
    """
    return _user_payload(user)


@router.put("/update-details")
async def update_details(request: UpdateDetailsRequest, user: CurrentUser):
    """Update the current user's name and/or email."""
    user = await AuthService.update_details(user, name=request.name, email=request.email)
    return _user_payload(user)


@router.put("/update-password", response_model=TokenResponse)
async def update_password(request: UpdatePasswordRequest, user: CurrentUser):
    """
    Change the current user's password.

    Returns a fresh token.

    Raises:
        401: If current_password is wrong
    """
    user = await AuthService.update_password(user, request.current_password, request.new_password)
    return send_token_response(user)


@router.post("/forgot-password")
async def forgot_password(body: ForgotPasswordRequest, request: Request):
    """
    Email a password reset link.

    Raises:
        404: If no user has that email
        500: If the email couldn't be sent
    """
    await AuthService.forgot_password(body.email, base_url=str(request.base_url))
    return {"success": True, "data": "Email sent"}


@router.put("/reset-password/{reset_token}", response_model=TokenResponse)
async def reset_password(reset_token: str, request: ResetPasswordRequest):
    """
    Set a new password with the token from the reset email.

    Raises:
        400: If the token is invalid or expired
    """
    user = await AuthService.reset_password(reset_token, request.password)
    return send_token_response(user)
