# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================
# Run with: pytest tests/test_config.py -v
# =============================================================================

import runpy
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from app.config import Settings, settings as app_settings


def _settings(**overrides) -> Settings:
    values = {"MONGO_URI": "mongodb://prod:27017/devcamper", "_env_file": None}
    values.update(overrides)
    return Settings(**values)


class TestSettings:
    """Tests for the Settings class."""

    def test_defaults(self, monkeypatch):
        for name in ("JWT_EXPIRE_DAYS", "FILE_UPLOAD_PATH", "MAX_FILE_UPLOAD", "API_PORT", "GEOCODER_PROVIDER"):
            monkeypatch.delenv(name, raising=False)

        settings = _settings()

        assert settings.API_PORT == 5000
        assert settings.JWT_EXPIRE_DAYS == 30
        assert settings.FILE_UPLOAD_PATH == "./public/uploads"
        assert settings.MAX_FILE_UPLOAD == 1_000_000
        assert settings.GEOCODER_PROVIDER == "mapquest"

    def test_mongo_uri_required(self, monkeypatch):
        monkeypatch.delenv("MONGO_URI", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_database_url_by_environment(self):
        """Test production uses MONGO_URI, other environments DATABASE_LOCAL."""
        prod = _settings(ENVIRONMENT="production", DATABASE_LOCAL="mongodb://localhost/dev")
        dev = _settings(ENVIRONMENT="development", DATABASE_LOCAL="mongodb://localhost/dev")

        assert prod.database_url == "mongodb://prod:27017/devcamper"
        assert prod.is_production
        assert dev.database_url == "mongodb://localhost/dev"
        assert dev.is_development

    def test_cors_origins_list(self):
        settings = _settings(CORS_ORIGINS="http://localhost:3000, https://devcamper.io")

        assert settings.cors_origins_list == ["http://localhost:3000", "https://devcamper.io"]

    def test_unknown_geocoder_provider(self):
        with pytest.raises(ValidationError):
            _settings(GEOCODER_PROVIDER="google")

    def test_short_jwt_secret(self):
        with pytest.raises(ValidationError):
            _settings(JWT_SECRET="short")


class TestEntryPoint:
    """Tests for `python -m app.main`."""

    def test_serves_on_configured_host_and_port(self, monkeypatch):
        monkeypatch.setattr(app_settings, "API_HOST", "127.0.0.1")
        monkeypatch.setattr(app_settings, "API_PORT", 8123)

        with patch("uvicorn.run") as run:
            runpy.run_module("app.main", run_name="__main__")

        run.assert_called_once()
        assert run.call_args.args == ("app.main:app",)
        assert run.call_args.kwargs["host"] == "127.0.0.1"
        assert run.call_args.kwargs["port"] == 8123
