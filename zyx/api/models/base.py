"""
Zyx Dashboard - Base API Models
===============================

Common response models and utilities.
"""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Generic Type Variables
# =============================================================================

T = TypeVar("T")

SNOWFLAKE_PATTERN = r"^\d{1,20}$"
"""Discord IDs are decimal strings of up to 20 digits."""

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Base Models
# =============================================================================

class CamelModel(BaseModel):
    """
    Model whose JSON field names are camelCase.

    Python attributes stay snake_case; both spellings are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StrictCamelModel(CamelModel):
    """Request body that rejects fields it does not declare."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# =============================================================================
# Base Response Models
# =============================================================================

class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    timestamp: datetime = Field(default_factory=_utcnow)


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error_code: str
    message: str
    details: Optional[Any] = None


class SystemHealth(BaseModel):
    """Detailed process health."""

    status: str = Field(description="healthy or degraded")
    uptime_seconds: int
    memory_mb: float
    cpu_percent: float
    db_connected: bool
    db_size_mb: Optional[float] = None
    run_id: str


__all__ = [
    "CamelModel",
    "StrictCamelModel",
    "APIResponse",
    "MessageResponse",
    "ErrorResponse",
    "SystemHealth",
    "SNOWFLAKE_PATTERN",
    "HEX_COLOR_PATTERN",
]
