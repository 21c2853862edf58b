"""
Zyx Dashboard - Database Custom Command Operations Module
=========================================================

Per-server custom commands configured on the dashboard.
"""

import time
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from zyx.core.constants import DEFAULT_EMBED_COLOR
from zyx.core.logger import logger
from zyx.core.database.base import _new_id, _decode_row, _encode_value
from zyx.core.database.models import CustomCommandRecord

if TYPE_CHECKING:
    from zyx.core.database.manager import DatabaseManager


COMMAND_JSON_FIELDS = frozenset({"allowed_roles"})
COMMAND_BOOL_FIELDS = frozenset({"embed_enabled", "enabled"})
COMMAND_UPDATABLE_FIELDS = frozenset({
    "name",
    "description",
    "response",
    "embed_enabled",
    "embed_color",
    "allowed_roles",
    "cooldown",
    "enabled",
})


class CommandsMixin:
    """Mixin for custom command operations."""

    def _decode_command(self, row: Any) -> Optional[CustomCommandRecord]:
        return _decode_row(row, COMMAND_JSON_FIELDS, COMMAND_BOOL_FIELDS)

    def create_custom_command(
        self: "DatabaseManager",
        server_id: str,
        name: str,
        response: str,
        description: Optional[str] = None,
        embed_enabled: bool = False,
        embed_color: str = DEFAULT_EMBED_COLOR,
        allowed_roles: Optional[List[str]] = None,
        cooldown: int = 0,
        enabled: bool = True,
    ) -> CustomCommandRecord:
        """
        Create a custom command.

        Raises:
            sqlite3.IntegrityError: If the server already has a command
                with this name.
        """
        command_id = _new_id()
        now = time.time()
        self.execute(
            """INSERT INTO custom_commands (
                id, server_id, name, description, response, embed_enabled,
                embed_color, allowed_roles, cooldown, enabled, usage_count,
                created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 0, ?, ?)""",
            (
                command_id, server_id, name, description, response,
                _encode_value("embed_enabled", embed_enabled, COMMAND_JSON_FIELDS, COMMAND_BOOL_FIELDS),
                embed_color,
                _encode_value("allowed_roles", allowed_roles, COMMAND_JSON_FIELDS, COMMAND_BOOL_FIELDS),
                cooldown,
                _encode_value("enabled", enabled, COMMAND_JSON_FIELDS, COMMAND_BOOL_FIELDS),
                now, now,
            )
        )
        logger.tree("Custom Command Created", [
            ("Command ID", command_id),
            ("Server ID", server_id),
            ("Name", name),
        ], emoji="💬")
        return self.get_custom_command(command_id)

    def get_custom_command(self: "DatabaseManager", command_id: str) -> Optional[CustomCommandRecord]:
        """Get a custom command by ID."""
        row = self.fetchone("SELECT * FROM custom_commands WHERE id = ?", (command_id,))
        return self._decode_command(row)

    def get_custom_commands(self: "DatabaseManager", server_id: str) -> List[CustomCommandRecord]:
        """All custom commands for a server, newest first."""
        rows = self.fetchall(
            "SELECT * FROM custom_commands WHERE server_id = ? ORDER BY created_at DESC, rowid DESC",
            (server_id,)
        )
        return [self._decode_command(row) for row in rows]

    def update_custom_command(
        self: "DatabaseManager",
        command_id: str,
        fields: Mapping[str, Any],
    ) -> Optional[CustomCommandRecord]:
        """
        Partially update a custom command.

        Returns:
            The updated command, or None if it does not exist.

        Raises:
            ValueError: If a field name is not updatable.
            sqlite3.IntegrityError: If a rename collides with another command.
        """
        unknown = set(fields) - COMMAND_UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown command fields: {', '.join(sorted(unknown))}")

        names = sorted(fields)
        assignments = [f"{name} = ?" for name in names] + ["updated_at = ?"]
        values = [
            _encode_value(name, fields[name], COMMAND_JSON_FIELDS, COMMAND_BOOL_FIELDS)
            for name in names
        ]
        cursor = self.execute(
            f"UPDATE custom_commands SET {', '.join(assignments)} WHERE id = ?",
            (*values, time.time(), command_id)
        )
        if cursor.rowcount == 0:
            return None
        return self.get_custom_command(command_id)

    def delete_custom_command(self: "DatabaseManager", command_id: str) -> bool:
        """Delete a custom command. Returns True if one was removed."""
        cursor = self.execute("DELETE FROM custom_commands WHERE id = ?", (command_id,))
        if cursor.rowcount > 0:
            logger.tree("Custom Command Deleted", [("Command ID", command_id)], emoji="🗑️")
        return cursor.rowcount > 0

    def increment_command_usage(self: "DatabaseManager", command_id: str) -> Optional[CustomCommandRecord]:
        """Atomically bump a command's usage counter."""
        cursor = self.execute(
            "UPDATE custom_commands SET usage_count = usage_count + 1 WHERE id = ?",
            (command_id,)
        )
        if cursor.rowcount == 0:
            return None
        return self.get_custom_command(command_id)
