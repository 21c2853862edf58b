"""
Zyx Dashboard - Database Server Operations Module
=================================================

Discord servers registered on the dashboard.
"""

import time
from typing import TYPE_CHECKING, List, Optional

from zyx.core.logger import logger
from zyx.core.database.base import _decode_row
from zyx.core.database.models import ServerRecord

if TYPE_CHECKING:
    from zyx.core.database.manager import DatabaseManager


class ServersMixin:
    """Mixin for server operations."""

    def upsert_server(
        self: "DatabaseManager",
        server_id: str,
        name: str,
        owner_id: str,
        icon_url: Optional[str] = None,
        member_count: int = 0,
    ) -> Optional[ServerRecord]:
        """
        Register a server or refresh its name, icon and member count.

        DESIGN: A single INSERT ... ON CONFLICT statement. An existing row
        is only updated when it belongs to the same owner, so ownership
        cannot be taken over by re-registering a guild ID.

        Returns:
            The stored row. Its owner_id differs from the caller's when the
            server is already owned by someone else.
        """
        now = time.time()
        self.execute(
            """INSERT INTO servers (
                id, name, icon_url, owner_id, member_count, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                icon_url = excluded.icon_url,
                member_count = excluded.member_count,
                updated_at = excluded.updated_at
            WHERE servers.owner_id = excluded.owner_id""",
            (server_id, name, icon_url, owner_id, member_count, now, now)
        )
        server = self.get_server(server_id)
        if server and server["owner_id"] == owner_id:
            logger.tree("Server Saved", [
                ("Server ID", server_id),
                ("Name", name),
                ("Members", str(member_count)),
            ], emoji="🏠")
        return server

    def get_server(self: "DatabaseManager", server_id: str) -> Optional[ServerRecord]:
        """Get a server by guild ID."""
        row = self.fetchone("SELECT * FROM servers WHERE id = ?", (server_id,))
        return _decode_row(row)

    def get_servers_by_owner(self: "DatabaseManager", owner_id: str) -> List[ServerRecord]:
        """All servers owned by a user, oldest registration first."""
        rows = self.fetchall(
            "SELECT * FROM servers WHERE owner_id = ? ORDER BY created_at ASC, rowid ASC",
            (owner_id,)
        )
        return [dict(row) for row in rows]

    def get_all_servers(self: "DatabaseManager") -> List[ServerRecord]:
        """Every registered server."""
        rows = self.fetchall("SELECT * FROM servers ORDER BY created_at ASC, rowid ASC")
        return [dict(row) for row in rows]

    def delete_server(self: "DatabaseManager", server_id: str) -> bool:
        """Delete a server and, by cascade, everything scoped to it."""
        cursor = self.execute("DELETE FROM servers WHERE id = ?", (server_id,))
        if cursor.rowcount > 0:
            logger.tree("Server Deleted", [("Server ID", server_id)], emoji="🗑️")
        return cursor.rowcount > 0
