"""
Zyx Dashboard - Database Mod Action Operations Module
=====================================================

Append-only moderation audit trail.
"""

import time
from typing import TYPE_CHECKING, List, Optional

from zyx.core.logger import logger
from zyx.core.database.base import _new_id, _decode_row
from zyx.core.database.models import ModActionRecord

if TYPE_CHECKING:
    from zyx.core.database.manager import DatabaseManager


class ModActionsMixin:
    """Mixin for moderation action records."""

    def create_mod_action(
        self: "DatabaseManager",
        server_id: str,
        action_type: str,
        target_id: str,
        target_name: str,
        moderator_id: str,
        moderator_name: str,
        reason: Optional[str] = None,
    ) -> ModActionRecord:
        """
        Record a moderation action.

        Returns:
            The stored record.
        """
        action_id = _new_id()
        now = time.time()
        self.execute(
            """INSERT INTO mod_actions (
                id, server_id, action_type, target_id, target_name,
                moderator_id, moderator_name, reason, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (action_id, server_id, action_type, target_id, target_name,
             moderator_id, moderator_name, reason, now)
        )
        logger.tree("Mod Action Recorded", [
            ("Action", action_type),
            ("Server ID", server_id),
            ("Target", f"{target_name} ({target_id})"),
            ("Moderator", f"{moderator_name} ({moderator_id})"),
            ("Reason", (reason[:30] + "...") if reason and len(reason) > 30 else (reason or "None")),
        ], emoji="🔨")
        return _decode_row(self.fetchone("SELECT * FROM mod_actions WHERE id = ?", (action_id,)))

    def get_mod_actions_by_server(
        self: "DatabaseManager",
        server_id: str,
        limit: Optional[int] = None,
    ) -> List[ModActionRecord]:
        """Moderation actions for a server, newest first."""
        query = "SELECT * FROM mod_actions WHERE server_id = ? ORDER BY created_at DESC, rowid DESC"
        params: tuple = (server_id,)
        if limit is not None:
            query += " LIMIT ?"
            params = (server_id, limit)
        return [dict(row) for row in self.fetchall(query, params)]

    def get_mod_actions_since(
        self: "DatabaseManager",
        server_id: str,
        since: float,
    ) -> List[ModActionRecord]:
        """Moderation actions at or after a unix timestamp, newest first."""
        rows = self.fetchall(
            """SELECT * FROM mod_actions WHERE server_id = ? AND created_at >= ?
               ORDER BY created_at DESC, rowid DESC""",
            (server_id, since)
        )
        return [dict(row) for row in rows]
