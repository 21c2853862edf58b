"""
Zyx Dashboard - API Error System
================================

Centralized error codes and exception handling for consistent API responses.

Every error body has the same shape:
    {"success": false, "error_code": "...", "message": "...", "details": ...}
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCode(str, Enum):
    """
    Centralized error codes for the API.

    Format: CATEGORY_SPECIFIC_ERROR

    Categories:
    - AUTH: Authentication/authorization errors
    - SERVER_ACCESS: Server ownership errors
    - TICKET / COMMAND / REACTION_ROLE: Missing records
    - VALIDATION: Input validation errors
    - HTTP: Routing errors
    - SERVER: Server-side errors
    """

    # Authentication errors (401)
    AUTH_MISSING_TOKEN = "AUTH_MISSING_TOKEN"
    AUTH_INVALID_TOKEN = "AUTH_INVALID_TOKEN"
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    AUTH_USER_NOT_FOUND = "AUTH_USER_NOT_FOUND"

    # Registration errors (400)
    AUTH_USER_EXISTS = "AUTH_USER_EXISTS"

    # Server access errors (403, 404)
    SERVER_NOT_FOUND = "SERVER_NOT_FOUND"
    SERVER_FORBIDDEN = "SERVER_FORBIDDEN"

    # Record errors (404, 409)
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    COMMAND_NOT_FOUND = "COMMAND_NOT_FOUND"
    COMMAND_NAME_TAKEN = "COMMAND_NAME_TAKEN"
    REACTION_ROLE_NOT_FOUND = "REACTION_ROLE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    VALIDATION_MISSING_FIELD = "VALIDATION_MISSING_FIELD"

    # Routing errors
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

    # Server errors (500)
    SERVER_ERROR = "SERVER_ERROR"
    SERVER_DATABASE_ERROR = "SERVER_DATABASE_ERROR"


# =============================================================================
# Error Messages
# =============================================================================

ERROR_MESSAGES: Dict[ErrorCode, str] = {
    # Auth
    ErrorCode.AUTH_MISSING_TOKEN: "Unauthorized",
    ErrorCode.AUTH_INVALID_TOKEN: "Unauthorized",
    ErrorCode.AUTH_INVALID_CREDENTIALS: "Invalid email or password",
    ErrorCode.AUTH_USER_NOT_FOUND: "User not found",
    ErrorCode.AUTH_USER_EXISTS: "User already exists",

    # Servers
    ErrorCode.SERVER_NOT_FOUND: "Server not found",
    ErrorCode.SERVER_FORBIDDEN: "You do not have access to this server",

    # Records
    ErrorCode.TICKET_NOT_FOUND: "Ticket not found",
    ErrorCode.COMMAND_NOT_FOUND: "Custom command not found",
    ErrorCode.COMMAND_NAME_TAKEN: "A command with this name already exists",
    ErrorCode.REACTION_ROLE_NOT_FOUND: "Reaction role not found",

    # Validation
    ErrorCode.VALIDATION_ERROR: "Request validation failed",
    ErrorCode.VALIDATION_MISSING_FIELD: "Email and password are required",

    # Routing
    ErrorCode.NOT_FOUND: "Not found",
    ErrorCode.METHOD_NOT_ALLOWED: "Method not allowed",

    # Server
    ErrorCode.SERVER_ERROR: "An internal server error occurred",
    ErrorCode.SERVER_DATABASE_ERROR: "A database error occurred",
}


# =============================================================================
# Default Status Codes
# =============================================================================

ERROR_STATUS_CODES: Dict[ErrorCode, int] = {
    # Auth - 401/400
    ErrorCode.AUTH_MISSING_TOKEN: HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_INVALID_TOKEN: HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_INVALID_CREDENTIALS: HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_USER_NOT_FOUND: HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_USER_EXISTS: HTTP_400_BAD_REQUEST,

    # Servers - 404/403
    ErrorCode.SERVER_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.SERVER_FORBIDDEN: HTTP_403_FORBIDDEN,

    # Records - 404/409
    ErrorCode.TICKET_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.COMMAND_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.COMMAND_NAME_TAKEN: HTTP_409_CONFLICT,
    ErrorCode.REACTION_ROLE_NOT_FOUND: HTTP_404_NOT_FOUND,

    # Validation - 400
    ErrorCode.VALIDATION_ERROR: HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_MISSING_FIELD: HTTP_400_BAD_REQUEST,

    # Routing
    ErrorCode.NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.METHOD_NOT_ALLOWED: HTTP_405_METHOD_NOT_ALLOWED,

    # Server - 500
    ErrorCode.SERVER_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.SERVER_DATABASE_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
}


# =============================================================================
# API Error Exception
# =============================================================================

class APIError(HTTPException):
    """
    Custom API exception with error codes.

    Usage:
        raise APIError(ErrorCode.TICKET_NOT_FOUND)
        raise APIError(ErrorCode.VALIDATION_ERROR, details={"field": "email"})
        raise APIError(ErrorCode.AUTH_USER_EXISTS, message="User already exists")
    """

    def __init__(
        self,
        code: ErrorCode,
        status_code: Optional[int] = None,
        message: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error_code = code
        self.error_message = message or ERROR_MESSAGES.get(code, "An error occurred")
        self.error_details = details

        if status_code is None:
            status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

        super().__init__(
            status_code=status_code,
            detail=error_body(code, self.error_message, details),
            headers=headers,
        )


# =============================================================================
# Helper Functions
# =============================================================================

def error_body(code: ErrorCode, message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    """The JSON body shared by every error response."""
    return {
        "success": False,
        "error_code": code.value,
        "message": message,
        "details": details,
    }


def error_response(
    code: ErrorCode,
    status_code: Optional[int] = None,
    message: Optional[str] = None,
    details: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Create a JSON error response without raising an exception.

    Useful for returning errors in exception handlers.
    """
    if status_code is None:
        status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

    return JSONResponse(
        status_code=status_code,
        content=error_body(code, message or ERROR_MESSAGES.get(code, "An error occurred"), details),
        headers=headers,
    )


def code_for_status(status_code: int) -> ErrorCode:
    """Best error code for a bare HTTP status raised by the framework."""
    return {
        HTTP_400_BAD_REQUEST: ErrorCode.VALIDATION_ERROR,
        HTTP_401_UNAUTHORIZED: ErrorCode.AUTH_MISSING_TOKEN,
        HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
        HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.METHOD_NOT_ALLOWED,
    }.get(status_code, ErrorCode.SERVER_ERROR)


def not_found(resource: str) -> APIError:
    """Shorthand for 404 errors."""
    resource_map = {
        "server": ErrorCode.SERVER_NOT_FOUND,
        "ticket": ErrorCode.TICKET_NOT_FOUND,
        "command": ErrorCode.COMMAND_NOT_FOUND,
        "reaction_role": ErrorCode.REACTION_ROLE_NOT_FOUND,
    }
    return APIError(resource_map.get(resource.lower(), ErrorCode.NOT_FOUND))


def forbidden(message: Optional[str] = None) -> APIError:
    """Shorthand for 403 errors."""
    return APIError(ErrorCode.SERVER_FORBIDDEN, message=message)


def bad_request(code: ErrorCode = ErrorCode.VALIDATION_ERROR, message: Optional[str] = None, details: Optional[Any] = None) -> APIError:
    """Shorthand for 400 errors."""
    return APIError(code, message=message, details=details)


__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "ERROR_STATUS_CODES",
    "APIError",
    "error_body",
    "error_response",
    "code_for_status",
    "not_found",
    "forbidden",
    "bad_request",
]
