# =============================================================================
# core/models/ - Beanie Documents and Pydantic Schemas
# =============================================================================
# This package contains the persisted documents and request schemas:
# - bootcamp.py: Bootcamp document, Location, create/update bodies
# - user.py: User document and roles
# =============================================================================

from .bootcamp import (
    DEFAULT_PHOTO,
    Bootcamp,
    BootcampCreate,
    BootcampUpdate,
    Career,
    Location,
)
from .user import Role, User

# Every document registered with init_beanie
DOCUMENT_MODELS = [User, Bootcamp]

__all__ = [
    # Bootcamp
    "DEFAULT_PHOTO",
    "Bootcamp",
    "BootcampCreate",
    "BootcampUpdate",
    "Career",
    "Location",
    # User
    "Role",
    "User",
    "DOCUMENT_MODELS",
]
