"""
Zyx Dashboard - Reaction Role API Models
========================================
"""

from datetime import datetime

from pydantic import Field

from zyx.api.models.base import CamelModel, StrictCamelModel, SNOWFLAKE_PATTERN
from zyx.core.constants import MAX_EMOJI_LENGTH


class ReactionRoleCreate(StrictCamelModel):
    """Bind an emoji on a message to a role."""

    message_id: str = Field(pattern=SNOWFLAKE_PATTERN)
    channel_id: str = Field(pattern=SNOWFLAKE_PATTERN)
    emoji: str = Field(min_length=1, max_length=MAX_EMOJI_LENGTH, description="Unicode emoji or <:name:id>")
    role_id: str = Field(pattern=SNOWFLAKE_PATTERN)


class ReactionRole(CamelModel):
    id: str
    server_id: str
    message_id: str
    channel_id: str
    emoji: str
    role_id: str
    created_at: datetime


__all__ = ["ReactionRoleCreate", "ReactionRole"]
