# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService
from .bootcamp_service import BootcampService, EARTH_RADIUS_MILES
from .storage_service import StorageService

__all__ = [
    "AuthService",
    "BootcampService",
    "EARTH_RADIUS_MILES",
    "StorageService",
]
