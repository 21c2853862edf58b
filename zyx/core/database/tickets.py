"""
Zyx Dashboard - Database Ticket Operations Module
=================================================

Ticket system database operations.
"""

import time
from typing import TYPE_CHECKING, List, Optional

from zyx.core.logger import logger
from zyx.core.database.base import _new_id, _decode_row
from zyx.core.database.models import TicketRecord

if TYPE_CHECKING:
    from zyx.core.database.manager import DatabaseManager


class TicketsMixin:
    """Mixin for ticket database operations."""

    def create_ticket(
        self: "DatabaseManager",
        server_id: str,
        channel_id: str,
        creator_id: str,
        creator_name: str,
        subject: Optional[str] = None,
    ) -> TicketRecord:
        """
        Open a new support ticket.

        Args:
            server_id: Server the ticket belongs to.
            channel_id: Discord channel created for the ticket.
            creator_id: Discord user who opened it.
            creator_name: Display name of the creator.
            subject: Optional subject line.

        Returns:
            The stored ticket.
        """
        ticket_id = _new_id()
        now = time.time()
        self.execute(
            """INSERT INTO tickets (
                id, server_id, channel_id, creator_id, creator_name,
                status, subject, created_at
            ) VALUES (?, ?, ?, ?, ?, 'open', ?, ?)""",
            (ticket_id, server_id, channel_id, creator_id, creator_name, subject, now)
        )
        logger.tree("Ticket Created", [
            ("Ticket ID", ticket_id),
            ("Server ID", server_id),
            ("Creator", creator_name),
            ("Subject", (subject[:30] + "...") if subject and len(subject) > 30 else (subject or "None")),
        ], emoji="🎫")
        return self.get_ticket(ticket_id)

    def get_ticket(self: "DatabaseManager", ticket_id: str) -> Optional[TicketRecord]:
        """Get a ticket by its ID."""
        row = self.fetchone("SELECT * FROM tickets WHERE id = ?", (ticket_id,))
        return _decode_row(row)

    def get_tickets_by_server(self: "DatabaseManager", server_id: str, limit: Optional[int] = None) -> List[TicketRecord]:
        """All tickets for a server, newest first."""
        query = "SELECT * FROM tickets WHERE server_id = ? ORDER BY created_at DESC, rowid DESC"
        params: tuple = (server_id,)
        if limit is not None:
            query += " LIMIT ?"
            params = (server_id, limit)
        return [dict(row) for row in self.fetchall(query, params)]

    def count_open_tickets(self: "DatabaseManager", server_id: str) -> int:
        """Number of open tickets on a server."""
        row = self.fetchone(
            "SELECT COUNT(*) AS n FROM tickets WHERE server_id = ? AND status = 'open'",
            (server_id,)
        )
        return row["n"] if row else 0

    def close_ticket(self: "DatabaseManager", ticket_id: str) -> Optional[TicketRecord]:
        """
        Close a ticket and stamp closed_at.

        DESIGN: No check that the ticket is still open, so closing twice
        keeps status 'closed' and refreshes closed_at.

        Returns:
            The updated ticket, or None if no ticket has this ID.
        """
        cursor = self.execute(
            "UPDATE tickets SET status = 'closed', closed_at = ? WHERE id = ?",
            (time.time(), ticket_id)
        )
        if cursor.rowcount == 0:
            return None
        logger.tree("Ticket Closed", [
            ("Ticket ID", ticket_id),
        ], emoji="🔒")
        return self.get_ticket(ticket_id)
