# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - bootcamps.py: Bootcamp CRUD and radius search endpoints
# - upload.py: Bootcamp photo upload endpoint
#
# Auth endpoints live in app/auth/routes.py.
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import bootcamps
from . import upload

__all__ = [
    "health",
    "bootcamps",
    "upload",
]
