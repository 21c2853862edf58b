"""
Zyx Dashboard - Server API Models
=================================

Discord servers registered on the dashboard.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from zyx.api.models.base import CamelModel, StrictCamelModel, SNOWFLAKE_PATTERN
from zyx.core.constants import MAX_SERVER_NAME_LENGTH


class ServerCreate(StrictCamelModel):
    """Register a server, or refresh one the caller already owns."""

    id: str = Field(pattern=SNOWFLAKE_PATTERN, description="Discord guild ID")
    name: str = Field(min_length=1, max_length=MAX_SERVER_NAME_LENGTH)
    icon_url: Optional[str] = Field(None, max_length=500)
    member_count: int = Field(0, ge=0)


class Server(CamelModel):
    """A registered server."""

    id: str
    name: str
    icon_url: Optional[str] = None
    owner_id: str
    member_count: int = 0
    created_at: datetime
    updated_at: datetime


__all__ = ["ServerCreate", "Server"]
