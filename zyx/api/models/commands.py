"""
Zyx Dashboard - Custom Command API Models
=========================================
"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import Field, field_validator

from zyx.api.models.base import (
    CamelModel,
    StrictCamelModel,
    HEX_COLOR_PATTERN,
    SNOWFLAKE_PATTERN,
)
from zyx.core.constants import DEFAULT_EMBED_COLOR, MAX_COMMAND_NAME_LENGTH, MAX_MESSAGE_LENGTH


Snowflake = Annotated[str, Field(pattern=SNOWFLAKE_PATTERN)]
COMMAND_NAME_PATTERN = r"^[a-z0-9_-]+$"


class _CommandFields(CamelModel):
    name: str = Field(min_length=1, max_length=MAX_COMMAND_NAME_LENGTH, pattern=COMMAND_NAME_PATTERN)
    description: Optional[str] = Field(None, max_length=100)
    response: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)
    embed_enabled: bool = False
    embed_color: str = Field(DEFAULT_EMBED_COLOR, pattern=HEX_COLOR_PATTERN)
    allowed_roles: List[Snowflake] = Field(default_factory=list, max_length=25)
    cooldown: int = Field(0, ge=0, le=86400, description="Seconds between uses per member")
    enabled: bool = True

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class CustomCommandCreate(_CommandFields, StrictCamelModel):
    """Create a custom command."""


class CustomCommandUpdate(StrictCamelModel):
    """Partial update; only fields sent are written."""

    name: Optional[str] = Field(None, min_length=1, max_length=MAX_COMMAND_NAME_LENGTH, pattern=COMMAND_NAME_PATTERN)
    description: Optional[str] = Field(None, max_length=100)
    response: Optional[str] = Field(None, min_length=1, max_length=MAX_MESSAGE_LENGTH)
    embed_enabled: Optional[bool] = None
    embed_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    allowed_roles: Optional[List[Snowflake]] = Field(None, max_length=25)
    cooldown: Optional[int] = Field(None, ge=0, le=86400)
    enabled: Optional[bool] = None

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("name", "response", "embed_enabled", "embed_color", "allowed_roles", "cooldown", "enabled")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class CustomCommand(_CommandFields):
    """A stored custom command."""

    id: str
    server_id: str
    usage_count: int = 0
    created_at: datetime
    updated_at: datetime


__all__ = ["CustomCommandCreate", "CustomCommandUpdate", "CustomCommand"]
