"""
Zyx Dashboard - Mod Action API Models
=====================================

Moderation audit trail models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from zyx.api.models.base import CamelModel, StrictCamelModel, SNOWFLAKE_PATTERN
from zyx.core.constants import MAX_REASON_LENGTH


class ActionType(str, Enum):
    """Moderation action kinds."""

    BAN = "ban"
    KICK = "kick"
    MUTE = "mute"
    WARN = "warn"


class ModActionCreate(StrictCamelModel):
    """Record a moderation action."""

    action_type: ActionType
    target_id: str = Field(pattern=SNOWFLAKE_PATTERN)
    target_name: str = Field(min_length=1, max_length=100)
    moderator_id: str = Field(pattern=SNOWFLAKE_PATTERN)
    moderator_name: str = Field(min_length=1, max_length=100)
    reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)


class ModAction(CamelModel):
    """A recorded moderation action."""

    id: str
    server_id: str
    action_type: ActionType
    target_id: str
    target_name: str
    moderator_id: str
    moderator_name: str
    reason: Optional[str] = None
    created_at: datetime


__all__ = ["ActionType", "ModActionCreate", "ModAction"]
