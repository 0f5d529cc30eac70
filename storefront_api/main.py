"""
Storefront API - FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (storefront_api.main:app, or `python -m storefront_api`);
       tests call create_app() with their own Settings.

Application Architecture:
    Middleware Chain:   RequestID → AccessLog → route
    Routes:             /health, /customers, /orders, /products, /say
    Exception Handlers: ValidationError→400 │ NotFound→404 │ Persistence→500
    Docs:               /docs (Swagger UI), /redoc, /openapi.json

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the Database handle (connection pool) unless one is already set
    3. Optionally create missing tables (DB_CREATE_TABLES)

    Shutdown:
    1. Dispose the Database handle this lifespan created
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront_api import __version__
from storefront_api.config import Settings, settings as default_settings
from storefront_api.database import Database
from storefront_api.exceptions import (
    EchoFunctionError,
    NotFoundError,
    PersistenceError,
    StorefrontError,
    ValidationError,
)
from storefront_api.middleware.logging import AccessLogMiddleware
from storefront_api.middleware.request_id import RequestIDMiddleware, request_id_var
from storefront_api.routes import customers, echo, health, listings
from storefront_api.services.echo_service import EchoService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s on stdout.
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-query and per-request noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the connection pool for the life of the process.

    A Database already placed on app.state (tests) is used as-is and left
    for its owner to dispose.
    """
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("Storefront API %s starting up...", __version__)

    owns_database = getattr(app.state, "db", None) is None
    if owns_database:
        app.state.db = Database.from_settings(app_settings)
    database: Database = app.state.db

    if app_settings.db_create_tables:
        await database.create_all()

    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)
    logger.info("API docs: http://%s:%d/docs", app_settings.host, app_settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Storefront API shutting down...")
    if owns_database:
        await database.dispose()
        app.state.db = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_validation_errors(exc: RequestValidationError) -> list:
    """Flatten FastAPI's schema errors into [{field, message}] entries."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request (field errors in details)
        RequestValidationError  → 400 Bad Request (schema errors in details)
        NotFoundError           → 404 Not Found
        PersistenceError        → 500 (driver message exposed; ConflictError too)
        EchoFunctionError       → 500
        StorefrontError (base)  → 500
        Exception (fallback)    → 500 generic message
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": {"errors": exc.errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = _request_validation_errors(exc)
        logger.warning("[%s] Malformed request: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": errors[0]["message"] if errors else "Invalid request",
                "details": {"errors": errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        rid = request_id_var.get("")
        logger.error("[%s] Persistence error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "persistence_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(EchoFunctionError)
    async def handle_echo_error(request: Request, exc: EchoFunctionError):
        rid = request_id_var.get("")
        logger.error("[%s] Echo function error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "echo_function_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StorefrontError)
    async def handle_app_error(request: Request, exc: StorefrontError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, never to the client."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    echo_service: Optional[EchoService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use (default: read from the environment)
        database: Pre-built Database handle; when given, the lifespan does
                  not create or dispose one
        echo_service: Pre-built EchoService (tests inject a mock transport)

    Returns:
        Fully configured FastAPI instance.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Storefront Sample API",
        description=(
            "CRUD service for customers plus read-only orders and products, "
            "backed by the sample MariaDB database."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        openapi_tags=[
            {"name": "Health"},
            {"name": "Customers"},
            {"name": "Orders"},
            {"name": "Products"},
            {"name": "Echo"},
        ],
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.db = database
    app.state.echo_service = echo_service or EchoService(
        function_url=app_settings.echo_function_url,
        timeout=app_settings.echo_timeout,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID, then AccessLog
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(customers.router)
    app.include_router(listings.router)
    app.include_router(echo.router)

    return app


# uvicorn entry point: storefront_api.main:app
app = create_app()
