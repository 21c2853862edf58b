"""
Zyx Dashboard - FastAPI Application
===================================

FastAPI application factory and configuration.

Run with:
    uvicorn --factory zyx.api.app:create_app
or through main.py, which loads .env first.
"""

import sqlite3
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.responses import JSONResponse

from zyx import __version__
from zyx.core.logger import logger
from zyx.core.database import DatabaseManager
from zyx.api.config import APIConfig, get_api_config
from zyx.api.errors import ErrorCode, code_for_status, error_response
from zyx.api.middleware import LoggingMiddleware
from zyx.api.models.base import ErrorResponse
from zyx.api.services.auth import AuthService
from zyx.api.routers import (
    health_router,
    auth_router,
    dashboard_router,
    servers_router,
    settings_router,
    tickets_router,
    mod_actions_router,
    log_events_router,
    commands_router,
    reaction_roles_router,
    analytics_router,
)


API_PREFIX = "/api"


# =============================================================================
# OpenAPI Documentation
# =============================================================================

API_DESCRIPTION = """
## Zyx Dashboard API

Backend for the Zyx web dashboard: accounts, registered Discord servers,
per-server bot settings, and the records the bot reports back.

### Authentication

Register or log in at `/api/auth/register` and `/api/auth/login`. The session
token is returned in the HTTP-only `zyx_auth_token` cookie and is valid for
7 days. Every endpoint except `/api/auth/*` and `/health` requires it.

### Error Responses

All errors follow a consistent format:
```json
{
    "success": false,
    "error_code": "SERVER_NOT_FOUND",
    "message": "Server not found",
    "details": null
}
```
"""

OPENAPI_TAGS = [
    {"name": "Health", "description": "Health check and status endpoints"},
    {"name": "Auth", "description": "Registration, login and session cookie"},
    {"name": "Dashboard", "description": "Totals and recent activity across owned servers"},
    {"name": "Servers", "description": "Registered Discord servers"},
    {"name": "Settings", "description": "Per-server bot settings"},
    {"name": "Tickets", "description": "Support tickets"},
    {"name": "Mod Actions", "description": "Moderation audit trail"},
    {"name": "Log Events", "description": "Server event log"},
    {"name": "Commands", "description": "Custom commands"},
    {"name": "Reaction Roles", "description": "Emoji to role bindings"},
    {"name": "Analytics", "description": "Daily server counters"},
]

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation failed"},
    401: {"model": ErrorResponse, "description": "Missing or invalid session"},
    403: {"model": ErrorResponse, "description": "Server owned by another user"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    500: {"model": ErrorResponse, "description": "Server error"},
}


# =============================================================================
# Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Handles startup and shutdown events.
    """
    db: DatabaseManager = app.state.db

    # Startup
    logger.tree("API Starting", [
        ("Version", __version__),
        ("Database", db.path),
        ("Secure Cookies", "Yes" if app.state.config.cookie_secure else "No"),
    ], emoji="🚀")
    db.purge_expired_sessions()

    yield

    # Shutdown
    logger.tree("API Stopping", [], emoji="🛑")
    db.close()


# =============================================================================
# Application Factory
# =============================================================================

def create_app(
    config: Optional[APIConfig] = None,
    db: Optional[DatabaseManager] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: API configuration. Loaded from the environment when omitted,
            which raises ConfigValidationError if no signing secret is set.
        db: Database to serve from. Opened at config.database_path when omitted.

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = get_api_config()
    if db is None:
        db = DatabaseManager(config.database_path)

    app = FastAPI(
        title="Zyx Dashboard API",
        description=API_DESCRIPTION,
        version=__version__,
        docs_url=f"{API_PREFIX}/docs" if config.debug else None,
        redoc_url=f"{API_PREFIX}/redoc" if config.debug else None,
        openapi_url=f"{API_PREFIX}/openapi.json" if config.debug else None,
        openapi_tags=OPENAPI_TAGS,
        responses=ERROR_RESPONSES,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.db = db
    app.state.auth_service = AuthService(config, db)

    # ==========================================================================
    # Middleware (order matters - last added = first executed)
    # ==========================================================================

    # CORS; credentials need explicit origins, a wildcard disables cookies
    origins = list(config.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging
    app.add_middleware(LoggingMiddleware)

    # ==========================================================================
    # Exception Handlers
    # ==========================================================================

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """APIError bodies pass through; bare framework errors get the same shape."""
        if isinstance(exc.detail, dict):
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.detail,
                headers=exc.headers,
            )
        return error_response(
            code_for_status(exc.status_code),
            status_code=exc.status_code,
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed, missing or unexpected fields answer 400."""
        details = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
                "message": error.get("msg", ""),
                "type": error.get("type", ""),
            }
            for error in exc.errors()
        ]
        logger.debug("Request Validation Failed", [
            ("Path", str(request.url.path)[:50]),
            ("Errors", str(len(details))),
        ])
        return error_response(ErrorCode.VALIDATION_ERROR, details=details)

    @app.exception_handler(sqlite3.Error)
    async def database_exception_handler(request: Request, exc: sqlite3.Error):
        """Storage failures answer 500 without leaking the SQL error."""
        logger.error("Database Error", [
            ("Path", str(request.url.path)[:50]),
            ("Method", request.method),
            ("Error Type", type(exc).__name__),
            ("Error", str(exc)[:100]),
        ])

        return error_response(ErrorCode.SERVER_DATABASE_ERROR)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions with consistent error format."""
        logger.error("Unhandled API Error", [
            ("Path", str(request.url.path)[:50]),
            ("Method", request.method),
            ("Error Type", type(exc).__name__),
            ("Error", str(exc)[:100]),
        ])

        return error_response(
            ErrorCode.SERVER_ERROR,
            details={"path": str(request.url.path)} if config.debug else None,
        )

    # ==========================================================================
    # Routers
    # ==========================================================================

    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(dashboard_router, prefix=API_PREFIX)
    app.include_router(servers_router, prefix=API_PREFIX)
    app.include_router(settings_router, prefix=API_PREFIX)
    app.include_router(tickets_router, prefix=API_PREFIX)
    app.include_router(mod_actions_router, prefix=API_PREFIX)
    app.include_router(log_events_router, prefix=API_PREFIX)
    app.include_router(commands_router, prefix=API_PREFIX)
    app.include_router(reaction_roles_router, prefix=API_PREFIX)
    app.include_router(analytics_router, prefix=API_PREFIX)

    # Root health check (for load balancers)
    @app.get("/health", include_in_schema=False)
    async def root_health():
        return {"status": "healthy"}

    return app


__all__ = ["create_app", "API_PREFIX"]
