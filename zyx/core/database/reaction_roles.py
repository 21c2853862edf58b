"""
Zyx Dashboard - Database Reaction Role Operations Module
========================================================

Emoji -> role bindings on a specific message.
"""

import time
from typing import TYPE_CHECKING, List, Optional

from zyx.core.logger import logger
from zyx.core.database.base import _new_id, _decode_row
from zyx.core.database.models import ReactionRoleRecord

if TYPE_CHECKING:
    from zyx.core.database.manager import DatabaseManager


class ReactionRolesMixin:
    """Mixin for reaction role operations."""

    def create_reaction_role(
        self: "DatabaseManager",
        server_id: str,
        message_id: str,
        channel_id: str,
        emoji: str,
        role_id: str,
    ) -> ReactionRoleRecord:
        """Bind an emoji on a message to a role."""
        binding_id = _new_id()
        self.execute(
            """INSERT INTO reaction_roles (
                id, server_id, message_id, channel_id, emoji, role_id, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (binding_id, server_id, message_id, channel_id, emoji, role_id, time.time())
        )
        logger.tree("Reaction Role Created", [
            ("Server ID", server_id),
            ("Message ID", message_id),
            ("Emoji", emoji),
            ("Role ID", role_id),
        ], emoji="🎭")
        return self.get_reaction_role(binding_id)

    def get_reaction_role(self: "DatabaseManager", binding_id: str) -> Optional[ReactionRoleRecord]:
        row = self.fetchone("SELECT * FROM reaction_roles WHERE id = ?", (binding_id,))
        return _decode_row(row)

    def get_reaction_roles(self: "DatabaseManager", server_id: str) -> List[ReactionRoleRecord]:
        """Reaction roles for a server, newest first."""
        rows = self.fetchall(
            "SELECT * FROM reaction_roles WHERE server_id = ? ORDER BY created_at DESC, rowid DESC",
            (server_id,)
        )
        return [dict(row) for row in rows]

    def delete_reaction_role(self: "DatabaseManager", binding_id: str) -> bool:
        cursor = self.execute("DELETE FROM reaction_roles WHERE id = ?", (binding_id,))
        return cursor.rowcount > 0
