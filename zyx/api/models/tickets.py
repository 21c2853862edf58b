"""
Zyx Dashboard - Ticket API Models
=================================

Support ticket request/response models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from zyx.api.models.base import CamelModel, StrictCamelModel, SNOWFLAKE_PATTERN


class TicketStatus(str, Enum):
    """Ticket lifecycle states."""

    OPEN = "open"
    CLOSED = "closed"


class TicketCreate(StrictCamelModel):
    """Open a ticket on a server."""

    channel_id: str = Field(pattern=SNOWFLAKE_PATTERN, description="Ticket channel")
    creator_id: str = Field(pattern=SNOWFLAKE_PATTERN, description="Discord user who opened it")
    creator_name: str = Field(min_length=1, max_length=100)
    subject: Optional[str] = Field(None, max_length=200)


class Ticket(CamelModel):
    """A support ticket."""

    id: str
    server_id: str
    channel_id: str
    creator_id: str
    creator_name: str
    status: TicketStatus
    subject: Optional[str] = None
    created_at: datetime
    closed_at: Optional[datetime] = None


__all__ = ["TicketStatus", "TicketCreate", "Ticket"]
