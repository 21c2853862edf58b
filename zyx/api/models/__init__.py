"""
Zyx Dashboard - API Models
==========================

Pydantic request and response models.
"""

from zyx.api.models.base import (
    APIResponse,
    CamelModel,
    ErrorResponse,
    MessageResponse,
    StrictCamelModel,
    SystemHealth,
)
from zyx.api.models.auth import (
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    TokenPayload,
    UserResponse,
)
from zyx.api.models.servers import Server, ServerCreate
from zyx.api.models.tickets import Ticket, TicketCreate, TicketStatus
from zyx.api.models.mod_actions import ActionType, ModAction, ModActionCreate
from zyx.api.models.log_events import LogEvent, LogEventCreate
from zyx.api.models.commands import CustomCommand, CustomCommandCreate, CustomCommandUpdate
from zyx.api.models.reaction_roles import ReactionRole, ReactionRoleCreate
from zyx.api.models.analytics import AnalyticsUpsert, ServerAnalytics
from zyx.api.models.dashboard import DashboardActivity, DashboardStats

__all__ = [
    "APIResponse",
    "CamelModel",
    "ErrorResponse",
    "MessageResponse",
    "StrictCamelModel",
    "SystemHealth",
    "CurrentUserResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenPayload",
    "UserResponse",
    "Server",
    "ServerCreate",
    "Ticket",
    "TicketCreate",
    "TicketStatus",
    "ActionType",
    "ModAction",
    "ModActionCreate",
    "LogEvent",
    "LogEventCreate",
    "CustomCommand",
    "CustomCommandCreate",
    "CustomCommandUpdate",
    "ReactionRole",
    "ReactionRoleCreate",
    "AnalyticsUpsert",
    "ServerAnalytics",
    "DashboardActivity",
    "DashboardStats",
]
