"""
Zyx Dashboard - Database Module
===============================

SQLite storage for dashboard users, servers, settings, and bot records.
"""

from zyx.core.database.manager import DatabaseManager
from zyx.core.database.base import _safe_json_loads
from zyx.core.database.settings import SETTINGS_TABLES, default_settings
from zyx.core.database.analytics import ANALYTICS_COUNTERS

from zyx.core.database.models import (
    UserRecord,
    SessionRecord,
    ServerRecord,
    ModSettingsRecord,
    TicketSettingsRecord,
    TicketRecord,
    ModActionRecord,
    LogEventRecord,
    CustomCommandRecord,
    ReactionRoleRecord,
    ServerAnalyticsRecord,
)

__all__ = [
    # Main interface
    "DatabaseManager",

    # Helpers
    "_safe_json_loads",
    "SETTINGS_TABLES",
    "default_settings",
    "ANALYTICS_COUNTERS",

    # Type definitions
    "UserRecord",
    "SessionRecord",
    "ServerRecord",
    "ModSettingsRecord",
    "TicketSettingsRecord",
    "TicketRecord",
    "ModActionRecord",
    "LogEventRecord",
    "CustomCommandRecord",
    "ReactionRoleRecord",
    "ServerAnalyticsRecord",
]
