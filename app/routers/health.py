# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Liveness and readiness for load balancers and container orchestrators.
#
# Readiness covers the two things a request can depend on:
# - MongoDB answers a ping
# - FILE_UPLOAD_PATH exists and is writable (photo uploads)
# =============================================================================

import os
from datetime import datetime
from pathlib import Path

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.mongo_client import MongoClient

router = APIRouter()

API_VERSION = "1.0.0"
HEALTHY = "healthy"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Per-dependency status: "healthy" or "unhealthy: <reason>"."""
    database: str
    uploads: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


# =============================================================================
# Checks
# =============================================================================

async def _check_database() -> str:
    try:
        await MongoClient.ping()
    except Exception as e:
        return f"unhealthy: {str(e)[:50]}"
    return HEALTHY


def _check_upload_dir() -> str:
    path = Path(settings.FILE_UPLOAD_PATH)
    if not path.is_dir():
        return f"unhealthy: {path} is missing"
    if not os.access(path, os.W_OK):
        return f"unhealthy: {path} is not writable"
    return HEALTHY


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status=HEALTHY,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    "ready" only when MongoDB answers and photos can be written;
    "degraded" otherwise, with the failing check named in `checks`.
    """
    checks = ChecksResponse(
        database=await _check_database(),
        uploads=_check_upload_dir(),
    )
    ready = checks.database == HEALTHY and checks.uploads == HEALTHY

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        checks=checks,
        timestamp=datetime.utcnow().isoformat(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """Process is up; used for restart decisions."""
    return LivenessResponse(
        status="alive",
        timestamp=datetime.utcnow().isoformat(),
    )
