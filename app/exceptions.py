# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Services and dependencies raise these; the handlers registered in
# app/main.py turn them into the JSON error envelope.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException


class DevCamperException(Exception):
    """
    Base exception for the DevCamper API.

    All custom exceptions inherit from this class.
    Carries the HTTP status it maps to plus an optional suggestion.
    """

    def __init__(
        self,
        message: str,
        code: str = "DEVCAMPER_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "success": False,
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Bootcamp Exceptions
# =============================================================================

class BootcampNotFoundError(DevCamperException):
    """Raised when a bootcamp ID doesn't exist (or isn't an ObjectId)."""

    def __init__(self, bootcamp_id: str):
        super().__init__(
            message=f"Bootcamp not found with id of {bootcamp_id}",
            code="BOOTCAMP_NOT_FOUND",
            status_code=404,
            details={"bootcamp_id": bootcamp_id}
        )


class BootcampAlreadyPublishedError(DevCamperException):
    """Raised when a non-admin user tries to publish a second bootcamp."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"The user with ID {user_id} has already published a bootcamp",
            code="BOOTCAMP_ALREADY_PUBLISHED",
            status_code=400,
            suggestion="Update your existing bootcamp instead",
            details={"user_id": user_id}
        )


class NotBootcampOwnerError(DevCamperException):
    """Raised when a user who is neither owner nor admin modifies a bootcamp."""

    def __init__(self, user_id: str, bootcamp_id: str, action: str):
        super().__init__(
            message=f"User {user_id} is not authorized to {action} this bootcamp",
            code="NOT_BOOTCAMP_OWNER",
            status_code=401,
            details={"user_id": user_id, "bootcamp_id": bootcamp_id}
        )


class DuplicateFieldError(DevCamperException):
    """Raised when a write would break a unique index (e.g. bootcamp name)."""

    def __init__(self, field: str, value: str):
        super().__init__(
            message="Duplicate field value entered",
            code="DUPLICATE_KEY",
            status_code=400,
            suggestion=f"Choose a different {field}",
            details={"field": field, "value": value}
        )


class GeocodeNotFoundError(DevCamperException):
    """Raised when the geocoder has no match for an address or zipcode."""

    def __init__(self, query: str):
        super().__init__(
            message=f"Could not find a location for '{query}'",
            code="LOCATION_NOT_FOUND",
            status_code=404,
            suggestion="Check the spelling of the address or zipcode",
            details={"query": query}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class NoFileUploadedError(DevCamperException):
    """Raised when the photo endpoint is called without a file."""

    def __init__(self):
        super().__init__(
            message="Please upload a file",
            code="NO_FILE",
            status_code=400,
            suggestion="Send the image as multipart form field 'file'",
        )


class InvalidFileTypeError(DevCamperException):
    """Raised when uploaded file is not an image (or is a scriptable SVG)."""

    def __init__(self, filename: str, content_type: str | None):
        super().__init__(
            message="Please upload a valid image file",
            code="INVALID_FILE_TYPE",
            status_code=400,
            details={"filename": filename, "content_type": content_type}
        )


class FileTooLargeError(DevCamperException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size: int, max_size: int):
        super().__init__(
            message=f"Please upload an image less than {max_size}",
            code="FILE_TOO_LARGE",
            status_code=400,
            suggestion=f"Upload a file smaller than {max_size} bytes",
            details={"size": size, "max_size": max_size}
        )


class FileUploadError(DevCamperException):
    """Raised when writing the photo to disk fails."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Problem with file upload {error}",
            code="FILE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class NotAuthorizedError(DevCamperException):
    """Raised when a protected route is hit without a usable token."""

    def __init__(self):
        super().__init__(
            message="Not authorized to access this route",
            code="NOT_AUTHORIZED",
            status_code=401,
            suggestion="Log in and send the token as 'Authorization: Bearer <token>'",
        )


class RoleNotAllowedError(DevCamperException):
    """Raised when the caller's role is not permitted on a route."""

    def __init__(self, role: str):
        super().__init__(
            message=f"User role {role} is not authorized to access this route",
            code="ROLE_NOT_ALLOWED",
            status_code=403,
            details={"role": role}
        )


class MissingCredentialsError(DevCamperException):
    """Raised when login is attempted without email or password."""

    def __init__(self):
        super().__init__(
            message="Please provide an email and password",
            code="MISSING_CREDENTIALS",
            status_code=400,
        )


class InvalidCredentialsError(DevCamperException):
    """Raised on unknown email or wrong password at login."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


class IncorrectPasswordError(DevCamperException):
    """Raised when the current password doesn't match on password update."""

    def __init__(self):
        super().__init__(
            message="Password is incorrect",
            code="INCORRECT_PASSWORD",
            status_code=401,
        )


class DuplicateEmailError(DevCamperException):
    """Raised when registering or switching to an email that is taken."""

    def __init__(self, email: str):
        super().__init__(
            message=f"A user with email {email} already exists",
            code="DUPLICATE_EMAIL",
            status_code=400,
            suggestion="Log in instead, or use the forgot password flow",
            details={"email": email}
        )


class UserNotFoundError(DevCamperException):
    """Raised when no user matches the given email."""

    def __init__(self, email: str):
        super().__init__(
            message="There is no user with that email",
            code="USER_NOT_FOUND",
            status_code=404,
            details={"email": email}
        )


class InvalidResetTokenError(DevCamperException):
    """Raised when a reset token is unknown or expired."""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            code="INVALID_RESET_TOKEN",
            status_code=400,
            suggestion="Request a new reset link via POST /auth/forgot-password",
        )


class EmailSendError(DevCamperException):
    """Raised when the reset email could not be delivered."""

    def __init__(self, error: str):
        super().__init__(
            message="Email could not be sent",
            code="EMAIL_SEND_ERROR",
            status_code=500,
            details={"error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def devcamper_exception_handler(
    request: Request,
    exc: DevCamperException
) -> JSONResponse:
    """
    Convert DevCamperException to JSON response.

    Returns structured error with:
    - error: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Collapses pydantic's error list into one comma-separated message.
    """
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))

    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": ", ".join(messages) or "Validation error",
            "code": "VALIDATION_ERROR",
        }
    )


async def duplicate_key_exception_handler(
    request: Request,
    exc: DuplicateKeyError
) -> JSONResponse:
    """Unique index violations (bootcamp name, user email)."""
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Duplicate field value entered",
            "code": "DUPLICATE_KEY",
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors (404 routes, 405 methods) in the same envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "code": "HTTP_ERROR",
        },
        headers=getattr(exc, "headers", None),
    )
