# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - mongo_client.py: Motor client singleton + Beanie initialization
# - geocoder.py: Address/zipcode geocoding over HTTP
# - mailer.py: SMTP email delivery
# - security.py: Password hashing, JWT and reset tokens
# - query.py: Listing filters, sort and pagination from the query string
# - utils.py: Shared utilities (ObjectId parsing, slugs, base error)
#
# These modules are self-contained and can be tested in isolation.
# mongo_client is not re-exported here since it imports core.models,
# which itself depends on lib.security.
# =============================================================================

from lib.utils import ApplicationError, parse_object_id, slugify

__all__ = [
    "ApplicationError",
    "parse_object_id",
    "slugify",
]
