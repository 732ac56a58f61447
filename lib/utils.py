# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import re
import unicodedata
from typing import Any

from beanie import PydanticObjectId
from bson import ObjectId


# =============================================================================
# ObjectId Utilities
# =============================================================================

def parse_object_id(value: str | ObjectId) -> PydanticObjectId | None:
    """
    Parse a path parameter into an ObjectId.

    Returns None for anything that isn't a valid ObjectId so callers can
    treat a malformed id exactly like an unknown one.

    Example:
        parse_object_id("5d713995b721c3bb38c1f5d0")  # PydanticObjectId(...)
        parse_object_id("not-an-id")                 # None
    """
    if isinstance(value, ObjectId):
        return PydanticObjectId(value)
    if isinstance(value, str) and ObjectId.is_valid(value):
        return PydanticObjectId(value)
    return None


# =============================================================================
# Slugs
# =============================================================================

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(value: str) -> str:
    """
    Lower-case, ASCII, hyphen-separated slug.

    Example:
        slugify("Devworks Bootcamp!")  # "devworks-bootcamp"
    """
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    normalized = _NON_WORD.sub("", normalized).strip().lower()
    return _SEPARATORS.sub("-", normalized).strip("-")


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for errors raised by the lib/ clients.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        status_code: HTTP status the API answers with
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class MyServiceError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="MY_SERVICE_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
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
