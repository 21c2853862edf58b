"""
Zyx Dashboard - API Routers
===========================

Route handlers for the API.
"""

from .health import router as health_router
from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .servers import router as servers_router
from .settings import router as settings_router
from .tickets import router as tickets_router
from .mod_actions import router as mod_actions_router
from .log_events import router as log_events_router
from .commands import router as commands_router
from .reaction_roles import router as reaction_roles_router
from .analytics import router as analytics_router

__all__ = [
    "health_router",
    "auth_router",
    "dashboard_router",
    "servers_router",
    "settings_router",
    "tickets_router",
    "mod_actions_router",
    "log_events_router",
    "commands_router",
    "reaction_roles_router",
    "analytics_router",
]
