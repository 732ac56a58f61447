# =============================================================================
# lib/mongo_client.py - MongoDB Client Wrapper
# =============================================================================
# This module owns the single Motor client for the process and registers
# the Beanie documents against it.
#
# Usage:
#   from lib.mongo_client import MongoClient
#   await MongoClient.connect()   # app startup
#   await MongoClient.ping()      # readiness check
#   MongoClient.close()           # app shutdown
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from app.config import settings
from core.models import DOCUMENT_MODELS

# Set up logging for this module
logger = logging.getLogger(__name__)


class MongoClientError(Exception):
    """
    Error during MongoDB connection setup.

    Carries a suggestion on how to fix the configuration.
    """

    def __init__(
        self,
        message: str,
        code: str = "MONGO_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def _safe_host(url: str) -> str:
    """Strip credentials from a connection string for logging."""
    return url.split("@")[-1] if "@" in url else url


class MongoClient:
    """
    Process-wide Motor client.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.
    """

    _instance: AsyncIOMotorClient | None = None

    @classmethod
    async def connect(cls) -> AsyncIOMotorClient:
        """
        Create the client (once) and initialize Beanie.

        Returns:
            AsyncIOMotorClient: The shared client

        Raises:
            MongoClientError: If the client can't be created or Beanie init fails
        """
        if cls._instance is None:
            url = settings.database_url
            try:
                client = AsyncIOMotorClient(url)
                await init_beanie(
                    database=client[settings.MONGO_DB_NAME],
                    document_models=DOCUMENT_MODELS,
                )
            except Exception as e:
                raise MongoClientError(
                    message=f"Failed to connect to MongoDB: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check MONGO_URI / DATABASE_LOCAL in your .env file",
                    details={"host": _safe_host(url)},
                )
            cls._instance = client
            logger.info(f"MongoDB connected: {_safe_host(url)}")
        return cls._instance

    @classmethod
    def get_client(cls) -> AsyncIOMotorClient:
        """Return the connected client."""
        if cls._instance is None:
            raise MongoClientError(
                message="MongoDB client is not connected",
                code="CLIENT_NOT_CONNECTED",
                suggestion="Call MongoClient.connect() during application startup",
            )
        return cls._instance

    @classmethod
    async def ping(cls) -> bool:
        """Round-trip to the server; True when it answers."""
        client = cls.get_client()
        result = await client[settings.MONGO_DB_NAME].command("ping")
        return bool(result.get("ok"))

    @classmethod
    def close(cls) -> None:
        """Close and forget the client."""
        if cls._instance is not None:
            cls._instance.close()
            cls._instance = None
            logger.info("MongoDB connection closed")
