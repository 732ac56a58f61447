# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the domain logic:
# - models/: Beanie documents and Pydantic request schemas
# - services/: Bootcamp, auth and photo storage operations
#
# Routers stay thin and call into these services; errors raised here
# come from app/exceptions.py so handlers can map them to responses.
# =============================================================================
