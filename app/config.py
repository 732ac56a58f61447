# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.database_url)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, catching configuration
# errors early rather than at runtime.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # MongoDB Configuration
    # -------------------------------------------------------------------------
    # MONGO_URI is required - it is the production database

    MONGO_URI: str = Field(
        ...,
        description="MongoDB connection string used in production"
    )

    DATABASE_LOCAL: str = Field(
        default="mongodb://localhost:27017/devcamper",
        description="MongoDB connection string used outside production"
    )

    MONGO_DB_NAME: str = Field(
        default="devcamper",
        description="Database name holding the bootcamps and users collections"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    JWT_SECRET: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Secret key for signing session tokens"
    )

    JWT_EXPIRE_DAYS: int = Field(
        default=30,
        ge=1,
        description="Days until a session token expires"
    )

    JWT_COOKIE_EXPIRE_DAYS: int = Field(
        default=30,
        ge=1,
        description="Days until the token cookie expires"
    )

    RESET_TOKEN_EXPIRE_MINUTES: int = Field(
        default=10,
        ge=1,
        description="Minutes a password reset token stays valid"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Geocoder
    # -------------------------------------------------------------------------

    GEOCODER_PROVIDER: Literal["mapquest", "nominatim"] = Field(
        default="mapquest",
        description="Geocoding service used for addresses and zipcodes"
    )

    GEOCODER_API_KEY: str = Field(
        default="",
        description="API key for the geocoding provider (MapQuest)"
    )

    # -------------------------------------------------------------------------
    # SMTP / Mail
    # -------------------------------------------------------------------------

    SMTP_HOST: str = Field(default="localhost", description="SMTP server host")
    SMTP_PORT: int = Field(default=2525, ge=1, le=65535, description="SMTP server port")
    SMTP_EMAIL: str = Field(default="", description="SMTP login user")
    SMTP_PASSWORD: str = Field(default="", description="SMTP login password")
    FROM_NAME: str = Field(default="DevCamper", description="Sender display name")
    FROM_EMAIL: str = Field(default="noreply@devcamper.io", description="Sender address")

    # -------------------------------------------------------------------------
    # File Upload Settings
    # -------------------------------------------------------------------------

    FILE_UPLOAD_PATH: str = Field(
        default="./public/uploads",
        description="Directory where bootcamp photos are written"
    )

    MAX_FILE_UPLOAD: int = Field(
        default=1_000_000,
        ge=1,
        description="Maximum photo upload size in bytes"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def database_url(self) -> str:
        """Production talks to MONGO_URI, everything else to DATABASE_LOCAL."""
        return self.MONGO_URI if self.is_production else self.DATABASE_LOCAL

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
