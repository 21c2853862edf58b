"""
Zyx Dashboard - Log Event API Models
====================================
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from zyx.api.models.base import CamelModel, StrictCamelModel, SNOWFLAKE_PATTERN
from zyx.core.constants import MAX_EVENT_TYPE_LENGTH, MAX_MESSAGE_LENGTH


class LogEventCreate(StrictCamelModel):
    """Append a server log event."""

    event_type: str = Field(min_length=1, max_length=MAX_EVENT_TYPE_LENGTH, description="e.g. member_join")
    actor_id: Optional[str] = Field(None, pattern=SNOWFLAKE_PATTERN)
    actor_name: Optional[str] = Field(None, max_length=100)
    target_id: Optional[str] = Field(None, pattern=SNOWFLAKE_PATTERN)
    target_name: Optional[str] = Field(None, max_length=100)
    details: Optional[str] = Field(None, max_length=MAX_MESSAGE_LENGTH)


class LogEvent(CamelModel):
    """A server log event."""

    id: str
    server_id: str
    event_type: str
    actor_id: Optional[str] = None
    actor_name: Optional[str] = None
    target_id: Optional[str] = None
    target_name: Optional[str] = None
    details: Optional[str] = None
    created_at: datetime


__all__ = ["LogEventCreate", "LogEvent"]
