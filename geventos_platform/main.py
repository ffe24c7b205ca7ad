"""FastAPI application setup and configuration."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from geventos_platform.config import settings
from geventos_platform.api import api_router
from geventos_platform.database import init_database, close_database
from geventos_platform.middleware import (
    ErrorHandlerMiddleware,
    LoggingMiddleware,
    request_validation_exception_handler
)
from geventos_platform.schemas.common import HealthStatus
from geventos_platform.utils.logging_config import setup_logging

# Set up logging
setup_logging(
    log_level="DEBUG" if settings.debug else settings.log_level,
    log_file="logs/geventos.log" if settings.environment == "production" else None,
    enable_json_logging=settings.enable_json_logging or settings.environment == "production"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting GEventos platform")
    await init_database()
    logger.info("Database initialized successfully")
    yield
    # Shutdown
    logger.info("Shutting down GEventos platform")
    await close_database()
    logger.info("Database connections closed")

app = FastAPI(
    title="GEventos API",
    description="""
    ## GEventos

    Backend for event management and ticketing: venues, events, seating areas
    and seats, and the seating layout editor that ties them together.

    ### Layout editor

    `PUT /api/eventos/{eventoID}/layout` saves the layout document and the seat
    list of an event in a single transaction. Tables and seats drawn in the
    editor but not saved yet use placeholder identifiers; the server creates
    the rows and answers with the real identifiers in place of the placeholders.

    ### Authentication

    Every `/api` endpoint expects a JWT issued by the identity service:
    `Authorization: Bearer <token>`. The token's `role` claim must be one of
    `ORGANIZADOR`, `ADMINISTRADOR` or `ASISTENTE`.

    ### Error Handling

    The API returns structured error responses:

    ```json
    {
      "error": {
        "error_code": "ERROR_CODE",
        "message": "Human readable error message",
        "details": {"field": "Additional error context"},
        "suggestions": ["Helpful suggestions"]
      },
      "error_id": "uuid",
      "timestamp": "ISO-8601"
    }
    ```

    ### Concurrency Safety

    Layouts carry a `version`. Send it back with a save to have concurrent
    edits rejected with 409 instead of silently overwritten.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "events",
            "description": "Event management and seating layout operations"
        },
        {
            "name": "venues",
            "description": "Venue (lugar) management operations"
        },
        {
            "name": "areas",
            "description": "Seating area management within venues"
        },
        {
            "name": "seats",
            "description": "Seat management within areas"
        },
        {
            "name": "activities",
            "description": "Audit trail of user actions"
        },
        {
            "name": "config",
            "description": "Application configuration"
        },
        {
            "name": "tickets",
            "description": "Ticket QR lookup and attendance check-in"
        },
        {
            "name": "health",
            "description": "System health and monitoring endpoints"
        }
    ],
    lifespan=lifespan,
)

# Middleware stack; the last one added runs first

# 1. Error handling middleware (turns exceptions into error envelopes)
app.add_middleware(
    ErrorHandlerMiddleware,
    debug=settings.debug
)

# 2. Logging middleware (sees the final status of every request)
app.add_middleware(
    LoggingMiddleware,
    log_requests=settings.enable_request_logging,
    log_responses=settings.enable_request_logging
)

# 3. CORS middleware
if settings.debug:
    # Development: Allow all origins for easier development
    cors_origins = ["*"]
    cors_allow_credentials = False  # Cannot use credentials with wildcard origins
else:
    cors_origins = settings.cors_origins
    cors_allow_credentials = settings.cors_allow_credentials

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
    expose_headers=settings.cors_expose_headers
)

# Malformed bodies, paths and queries are reported as 400
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

# Include API routes
app.include_router(api_router)


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for API information.
    """
    return {
        "message": "GEventos API",
        "version": "1.0.0",
        "docs_url": "/docs",
        "status": "operational"
    }


@app.get("/health", response_model=HealthStatus, tags=["health"])
async def health_check():
    """
    Basic health check endpoint for uptime monitoring.
    """
    return HealthStatus(status="healthy", service="geventos-platform")
