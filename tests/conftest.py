# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Runs the app against an in-memory MongoDB (mongomock-motor)
# - Replaces the geocoder so no HTTP calls leave the test run
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017/devcamper_test")
os.environ.setdefault("DATABASE_LOCAL", "mongodb://localhost:27017/devcamper_test")
os.environ.setdefault("MONGO_DB_NAME", "devcamper_test")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.config import settings
from app.main import app
from core.models import Role, User
from lib.geocoder import GeocodeResult
from lib.mongo_client import MongoClient


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def boston_location():
    """Geocoder match for 233 Bay State Rd, Boston."""
    return GeocodeResult(
        latitude=42.350846,
        longitude=-71.105844,
        formatted_address="233 Bay State Rd, Boston, MA 02215, US",
        street="233 Bay State Rd",
        city="Boston",
        state="MA",
        zipcode="02215",
        country="US",
    )


@pytest.fixture
def mock_geocode(boston_location):
    """Geocoder used by the bootcamp service, answering with Boston."""
    with patch("core.services.bootcamp_service.geocode", new_callable=AsyncMock) as mock:
        mock.return_value = [boston_location]
        yield mock


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """Point FILE_UPLOAD_PATH at a temporary directory."""
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "FILE_UPLOAD_PATH", str(path))
    return path


@pytest.fixture
def client(upload_dir, mock_geocode):
    """
    TestClient with a fresh in-memory database.

    The app's own lifespan runs, so Beanie is initialized exactly as in
    production, just against mongomock.
    """
    MongoClient.close()
    with patch("lib.mongo_client.AsyncIOMotorClient", AsyncMongoMockClient):
        with TestClient(app) as test_client:
            yield test_client
    MongoClient.close()


@pytest.fixture
def register(client):
    """
    Register a user through the API and return their token.

    Cookies are cleared afterwards so each request authenticates
    only with the header it sends.
    """
    def _register(email="john@gmail.com", name="John Doe", password="123456"):
        response = client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        client.cookies.clear()
        return response.json()["token"]

    return _register


@pytest.fixture
def make_admin(client):
    """Promote a registered user to the admin role."""
    def _make_admin(email):
        async def _promote():
            user = await User.find_one({"email": email})
            user.role = Role.ADMIN
            await user.save()

        client.portal.call(_promote)

    return _make_admin


@pytest.fixture
def find_user(client):
    """Load a user document straight from the database."""
    def _find_user(email):
        async def _find():
            return await User.find_one({"email": email})

        return client.portal.call(_find)

    return _find_user


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers():
    """Build the Authorization header for a token."""
    return auth_headers


@pytest.fixture
def sample_bootcamp():
    """Valid body for POST /bootcamps."""
    return {
        "name": "Devworks Bootcamp",
        "description": "Devworks is a full stack JavaScript Bootcamp located in the heart of Boston",
        "website": "https://devworks.com",
        "phone": "(111) 111-1111",
        "email": "enroll@devworks.com",
        "address": "233 Bay State Rd Boston MA 02215",
        "careers": ["Web Development", "UI/UX", "Business"],
        "average_cost": 10000,
        "housing": True,
        "job_assistance": True,
        "job_guarantee": False,
        "accept_gi": True,
    }
