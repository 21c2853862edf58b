"""
Zyx Dashboard - Dashboard API Models
====================================

Owner-scoped overview models.
"""

from typing import List

from pydantic import Field

from zyx.api.models.base import CamelModel
from zyx.api.models.mod_actions import ModAction
from zyx.api.models.tickets import Ticket


class DashboardStats(CamelModel):
    """Totals across every server the user owns."""

    total_servers: int = Field(description="Servers owned by the user")
    total_members: int = Field(description="Sum of member counts")
    open_tickets: int = Field(description="Open tickets across servers")
    mod_actions_today: int = Field(description="Mod actions since local midnight")


class DashboardActivity(CamelModel):
    """Most recent mod actions and tickets, newest first."""

    mod_actions: List[ModAction] = Field(default_factory=list)
    tickets: List[Ticket] = Field(default_factory=list)


__all__ = ["DashboardStats", "DashboardActivity"]
