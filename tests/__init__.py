# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the DevCamper API:
# - test_models.py, test_query.py, test_security.py, test_utils.py,
#   test_config.py: unit tests
# - test_geocoder.py, test_mailer.py: external clients with mocked transports
# - test_*_api.py, test_health.py: endpoint tests against mongomock
#
# Run tests with: pytest
# =============================================================================
