"""
Zyx Dashboard - Analytics API Models
====================================
"""

import datetime
from typing import Optional

from pydantic import Field

from zyx.api.models.base import CamelModel, StrictCamelModel


class AnalyticsUpsert(StrictCamelModel):
    """Daily counters reported by the bot. Omitted counters keep their value."""

    date: datetime.date
    member_count: Optional[int] = Field(None, ge=0)
    message_count: Optional[int] = Field(None, ge=0)
    commands_used: Optional[int] = Field(None, ge=0)
    tickets_created: Optional[int] = Field(None, ge=0)
    mod_actions_count: Optional[int] = Field(None, ge=0)
    active_members: Optional[int] = Field(None, ge=0)


class ServerAnalytics(CamelModel):
    """Counters for one server on one day."""

    id: str
    server_id: str
    date: datetime.date
    member_count: int = 0
    message_count: int = 0
    commands_used: int = 0
    tickets_created: int = 0
    mod_actions_count: int = 0
    active_members: int = 0


__all__ = ["AnalyticsUpsert", "ServerAnalytics"]
