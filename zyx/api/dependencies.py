"""
Zyx Dashboard - API Dependencies
================================

FastAPI dependency injection utilities.

Everything a handler needs (config, database, auth service) lives on
app.state, set by create_app().
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from zyx.core.constants import SESSION_COOKIE_NAME
from zyx.core.database import DatabaseManager, ServerRecord
from zyx.api.config import APIConfig
from zyx.api.errors import APIError, ErrorCode, forbidden, not_found
from zyx.api.models.auth import TokenPayload
from zyx.api.services.auth import AuthService


# =============================================================================
# Security
# =============================================================================

session_cookie = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


# =============================================================================
# Application State
# =============================================================================

def get_app_config(request: Request) -> APIConfig:
    """The APIConfig the app was built with."""
    return request.app.state.config


def get_db(request: Request) -> DatabaseManager:
    """The app's database manager."""
    return request.app.state.db


def get_auth_service(request: Request) -> AuthService:
    """The app's auth service."""
    return request.app.state.auth_service


# =============================================================================
# Authentication Dependencies
# =============================================================================

async def require_auth(
    token: Optional[str] = Depends(session_cookie),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPayload:
    """
    Require a valid session cookie.
    Raises 401 if not authenticated.
    """
    if not token:
        raise APIError(ErrorCode.AUTH_MISSING_TOKEN)

    payload = auth_service.verify_token(token)
    if payload is None:
        raise APIError(ErrorCode.AUTH_INVALID_TOKEN)

    return payload


# =============================================================================
# Ownership
# =============================================================================

def check_server_access(db: DatabaseManager, server_id: str, user_id: str) -> ServerRecord:
    """
    Resolve a server the user may manage.

    Raises:
        APIError: 404 if the server is unknown, 403 if someone else owns it.
    """
    server = db.get_server(server_id)
    if server is None:
        raise not_found("server")
    if server["owner_id"] != user_id:
        raise forbidden()
    return server


async def get_owned_server(
    server_id: str,
    payload: TokenPayload = Depends(require_auth),
    db: DatabaseManager = Depends(get_db),
) -> ServerRecord:
    """Path dependency for /servers/{server_id}/... routes."""
    return check_server_access(db, server_id, payload.sub)


__all__ = [
    "session_cookie",
    "get_app_config",
    "get_db",
    "get_auth_service",
    "require_auth",
    "check_server_access",
    "get_owned_server",
]
