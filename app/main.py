# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the DevCamper API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 5000
#   python -m app.main          (binds API_HOST:API_PORT)
# =============================================================================

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    DevCamperException,
    devcamper_exception_handler,
    duplicate_key_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.routers import bootcamps, health, upload
from lib.mongo_client import MongoClient
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Connect to MongoDB, register documents, ensure upload dir
    - Shutdown: Close the MongoDB client
    """
    logger.info(f"Starting DevCamper API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    Path(settings.FILE_UPLOAD_PATH).mkdir(parents=True, exist_ok=True)
    await MongoClient.connect()

    yield

    logger.info("Shutting down DevCamper API")
    MongoClient.close()


# Create FastAPI application
app = FastAPI(
    title="DevCamper API",
    description="""
## Bootcamp Directory API

Create, search and manage coding bootcamp listings.

### Features

- **Bootcamps**: CRUD with filtering, sorting and pagination
- **Radius Search**: Bootcamps within N miles of a zipcode
- **Photos**: Upload an image for a bootcamp
- **Auth**: JWT sessions, password reset by email

### Quick Start

```bash
# 1. Register
curl -X POST http://localhost:5000/api/v1/auth/register \\
  -H "Content-Type: application/json" \\
  -d '{"name": "John", "email": "john@gmail.com", "password": "123456"}'

# 2. Create a bootcamp
curl -X POST http://localhost:5000/api/v1/bootcamps \\
  -H "Authorization: Bearer <token>" -H "Content-Type: application/json" \\
  -d '{"name": "Devworks", "description": "...", "address": "233 Bay State Rd Boston MA 02215", "careers": ["Web Development"]}'

# 3. Search within 10 miles
curl http://localhost:5000/api/v1/bootcamps/radius/02118/10
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Registration, login and password management",
        },
        {
            "name": "Bootcamps",
            "description": "Create, search and manage bootcamps",
        },
        {
            "name": "Upload",
            "description": "Upload bootcamp photos",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(DevCamperException, devcamper_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(DuplicateKeyError, duplicate_key_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)


@app.exception_handler(ApplicationError)
async def handle_application_error(request: Request, exc: ApplicationError):
    """Handle errors raised by the lib/ clients (geocoder, mailer)."""
    logger.error(f"{exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Server Error",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Bootcamp endpoints
app.include_router(
    bootcamps.router,
    prefix="/api/v1/bootcamps",
    tags=["Bootcamps"]
)

# Photo upload endpoints
app.include_router(
    upload.router,
    prefix="/api/v1/bootcamps",
    tags=["Upload"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Uploaded photos
app.mount(
    "/uploads",
    StaticFiles(directory=settings.FILE_UPLOAD_PATH, check_dir=False),
    name="uploads",
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "DevCamper API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )
