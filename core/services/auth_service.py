# =============================================================================
# core/services/auth_service.py - Authentication Business Logic
# =============================================================================
# Registration, login, profile/password updates and the forgot/reset
# password flow. Token issuing lives on the User document.
# =============================================================================

import logging
from datetime import datetime

from beanie.exceptions import RevisionIdWasChanged

from app.exceptions import (
    DuplicateEmailError,
    EmailSendError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    MissingCredentialsError,
    UserNotFoundError,
)
from core.models import User
from lib.mailer import MailerError, send_email
from lib.security import hash_password, hash_reset_token

logger = logging.getLogger(__name__)

RESET_EMAIL_SUBJECT = "Password reset token"


class AuthService:
    """
    Service for user credential operations.
    """

    @staticmethod
    async def _ensure_email_free(email: str, exclude_user: User | None = None) -> None:
        existing = await User.find_one({"email": email})
        if existing and (exclude_user is None or existing.id != exclude_user.id):
            raise DuplicateEmailError(email)

    @staticmethod
    async def register(name: str, email: str, password: str) -> User:
        """
        Create a user with the `user` role.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        email = email.lower()
        await AuthService._ensure_email_free(email)

        user = User(name=name, email=email, password=hash_password(password))
        await user.insert()

        logger.info(f"Registered user: {user.id}")
        return user

    @staticmethod
    async def login(email: str | None, password: str | None) -> User:
        """
        Check credentials.

        Raises:
            MissingCredentialsError: If email or password is missing
            InvalidCredentialsError: If no user matches or the password is wrong
        """
        if not email or not password:
            raise MissingCredentialsError()

        user = await User.find_one({"email": email.lower()})

        if not user or not user.match_password(password):
            raise InvalidCredentialsError()

        logger.info(f"User logged in: {user.id}")
        return user

    @staticmethod
    async def update_details(user: User, name: str | None = None, email: str | None = None) -> User:
        """
        Update name and/or email.

        Raises:
            DuplicateEmailError: If the new email belongs to another user
        """
        if email is not None:
            email = email.lower()
            if email != user.email:
                await AuthService._ensure_email_free(email, exclude_user=user)
            user.email = email
        if name is not None:
            user.name = name

        try:
            await user.save()
        except RevisionIdWasChanged:
            # Unique email index hit by a concurrent registration
            raise DuplicateEmailError(user.email)

        logger.info(f"Updated details for user: {user.id}")
        return user

    @staticmethod
    async def update_password(user: User, current_password: str, new_password: str) -> User:
        """
        Change the password after re-checking the current one.

        Raises:
            IncorrectPasswordError: If current_password doesn't match
        """
        if not user.match_password(current_password):
            raise IncorrectPasswordError()

        user.password = hash_password(new_password)
        await user.save()
        logger.info(f"Password changed for user: {user.id}")
        return user

    @staticmethod
    async def forgot_password(email: str, base_url: str) -> None:
        """
        Email a password reset link.

        Args:
            email: The account's email
            base_url: Public base URL of the API, ending with "/"

        Raises:
            UserNotFoundError: If no user has that email
            EmailSendError: If the email couldn't be sent (the token is cleared)
        """
        user = await User.find_one({"email": email.lower()})
        if not user:
            raise UserNotFoundError(email)

        reset_token = user.get_reset_password_token()
        await user.save()

        reset_url = f"{base_url}api/v1/auth/reset-password/{reset_token}"
        message = (
            "You are receiving this email because you (or someone else) has requested "
            f"the reset of a password. Please make a PUT request to: \n\n {reset_url}"
        )

        try:
            await send_email(email=user.email, subject=RESET_EMAIL_SUBJECT, message=message)
        except MailerError as e:
            user.clear_reset_password_token()
            await user.save()
            raise EmailSendError(e.message)

        logger.info(f"Sent password reset email to user: {user.id}")

    @staticmethod
    async def reset_password(reset_token: str, password: str) -> User:
        """
        Set a new password using a reset token.

        Raises:
            InvalidResetTokenError: If the token is unknown or expired
        """
        user = await User.find_one({
            "reset_password_token": hash_reset_token(reset_token),
            "reset_password_expire": {"$gt": datetime.utcnow()},
        })
        if not user:
            raise InvalidResetTokenError()

        user.password = hash_password(password)
        user.clear_reset_password_token()
        await user.save()

        logger.info(f"Password reset for user: {user.id}")
        return user
