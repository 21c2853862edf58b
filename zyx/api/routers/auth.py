"""
Zyx Dashboard - Auth Router
===========================

Registration, login and logout with an HTTP-only session cookie.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from starlette.status import HTTP_201_CREATED

from zyx.core.database import DatabaseManager
from zyx.core.logger import logger
from zyx.api.dependencies import get_auth_service, get_db, require_auth, session_cookie
from zyx.api.errors import APIError, ErrorCode
from zyx.api.models.base import MessageResponse
from zyx.api.models.auth import (
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    TokenPayload,
    UserResponse,
)
from zyx.api.services.auth import AuthService, get_client_ip


router = APIRouter(prefix="/auth", tags=["Auth"])


def _require_credentials(email: str, password: str) -> None:
    if not email or not password:
        raise APIError(ErrorCode.VALIDATION_MISSING_FIELD)


# register and login are sync so bcrypt runs in the threadpool, off the event loop
@router.post("/register", response_model=UserResponse, status_code=HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Create an account and log it in.

    The session cookie is set on the response, same as a login.
    """
    _require_credentials(body.email, body.password)

    user, message = auth_service.register(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    if user is None:
        raise APIError(ErrorCode.AUTH_USER_EXISTS, message=message)

    token, _ = auth_service.start_session(
        user,
        client_ip=get_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
    auth_service.set_session_cookie(response, token)

    return UserResponse.model_validate(user)


@router.post("/login", response_model=UserResponse)
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Check credentials and set the session cookie."""
    _require_credentials(body.email, body.password)

    user, token, _ = auth_service.login(
        email=body.email,
        password=body.password,
        client_ip=get_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
    if user is None or token is None:
        raise APIError(ErrorCode.AUTH_INVALID_CREDENTIALS)

    auth_service.set_session_cookie(response, token)
    return UserResponse.model_validate(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    token: Optional[str] = Depends(session_cookie),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Clear the session cookie. Works with or without a valid session."""
    if auth_service.logout(token):
        logger.debug("Dashboard Logout", [("Session", "Removed")])
    auth_service.clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=CurrentUserResponse)
async def get_current_user(
    payload: TokenPayload = Depends(require_auth),
    db: DatabaseManager = Depends(get_db),
) -> CurrentUserResponse:
    """Profile of the logged-in user."""
    user = db.get_user(payload.sub)
    if user is None:
        raise APIError(ErrorCode.AUTH_USER_NOT_FOUND)
    return CurrentUserResponse.model_validate(user)


__all__ = ["router"]
