"""
Zyx Dashboard - Database Log Event Operations Module
====================================================

Server event log written by the bot and read by the dashboard.
"""

import time
from typing import TYPE_CHECKING, List, Optional

from zyx.core.constants import LOG_EVENTS_DEFAULT_LIMIT
from zyx.core.logger import logger
from zyx.core.database.base import _new_id, _decode_row
from zyx.core.database.models import LogEventRecord

if TYPE_CHECKING:
    from zyx.core.database.manager import DatabaseManager


class LogEventsMixin:
    """Mixin for server log events."""

    def create_log_event(
        self: "DatabaseManager",
        server_id: str,
        event_type: str,
        actor_id: Optional[str] = None,
        actor_name: Optional[str] = None,
        target_id: Optional[str] = None,
        target_name: Optional[str] = None,
        details: Optional[str] = None,
    ) -> LogEventRecord:
        """Append a log event."""
        event_id = _new_id()
        self.execute(
            """INSERT INTO log_events (
                id, server_id, event_type, actor_id, actor_name,
                target_id, target_name, details, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (event_id, server_id, event_type, actor_id, actor_name,
             target_id, target_name, details, time.time())
        )
        logger.debug("Log Event Recorded", [
            ("Type", event_type),
            ("Server ID", server_id),
        ])
        return _decode_row(self.fetchone("SELECT * FROM log_events WHERE id = ?", (event_id,)))

    def get_log_events(
        self: "DatabaseManager",
        server_id: str,
        limit: int = LOG_EVENTS_DEFAULT_LIMIT,
    ) -> List[LogEventRecord]:
        """Most recent log events for a server, newest first."""
        rows = self.fetchall(
            """SELECT * FROM log_events WHERE server_id = ?
               ORDER BY created_at DESC, rowid DESC LIMIT ?""",
            (server_id, limit)
        )
        return [dict(row) for row in rows]
