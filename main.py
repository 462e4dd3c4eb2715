"""Main entry point for the Virtual Lab Engine FastAPI application.

This module creates and configures the FastAPI app instance that serves the
REST API for in-browser cybersecurity lab sessions.

To run the development server:
    uv run uvicorn main:app --reload

To run in production:
    uv run uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_session_registry, shutdown_session_registry
from api.exceptions import (
    SessionLimitError,
    SessionNotFoundError,
    generic_exception_handler,
    runtime_error_handler,
    session_limit_handler,
    session_not_found_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import sessions as session_routes
from api.routes import targets as target_routes

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Creates the session registry at startup and drops every session at
    shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    logger.info("Starting Virtual Lab Engine - initializing SessionRegistry...")
    initialize_session_registry()

    yield  # App runs and handles requests here

    logger.info("Shutting down Virtual Lab Engine - dropping sessions...")
    shutdown_session_registry()


# Create the FastAPI application instance
app = FastAPI(
    title="Virtual Lab Engine",
    description="API for simulated terminals, filesystems and vulnerable hosts used in security labs",
    version=API_VERSION,
    lifespan=lifespan,
)

# Register exception handlers
# Order matters: specific exceptions before general ones
app.add_exception_handler(SessionNotFoundError, session_not_found_handler)
app.add_exception_handler(SessionLimitError, session_limit_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Register route modules
app.include_router(session_routes.router)
app.include_router(target_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message."""
    return {
        "message": "Welcome to the Virtual Lab Engine API",
        "version": API_VERSION,
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": API_VERSION}
