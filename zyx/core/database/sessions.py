"""
Zyx Dashboard - Database Session Operations Module
==================================================

Login session bookkeeping. Rows are informational: token validity is
decided by the signature and expiry alone.
"""

import json
import time
from typing import TYPE_CHECKING, Any, Dict, Optional

from zyx.core.logger import logger
from zyx.core.database.base import _safe_json_loads
from zyx.core.database.models import SessionRecord

if TYPE_CHECKING:
    from zyx.core.database.manager import DatabaseManager


class SessionsMixin:
    """Mixin for session table operations."""

    def create_session(
        self: "DatabaseManager",
        sid: str,
        data: Dict[str, Any],
        expire: float,
    ) -> None:
        """Record a login session."""
        self.execute(
            "INSERT OR REPLACE INTO sessions (sid, sess, expire) VALUES (?, ?, ?)",
            (sid, json.dumps(data), expire)
        )

    def get_session(self: "DatabaseManager", sid: str) -> Optional[SessionRecord]:
        """Get a session row by ID."""
        row = self.fetchone("SELECT * FROM sessions WHERE sid = ?", (sid,))
        if not row:
            return None
        return {
            "sid": row["sid"],
            "sess": _safe_json_loads(row["sess"], default={}),
            "expire": row["expire"],
        }

    def delete_session(self: "DatabaseManager", sid: str) -> bool:
        """Delete a session row. Returns True if one was removed."""
        cursor = self.execute("DELETE FROM sessions WHERE sid = ?", (sid,))
        return cursor.rowcount > 0

    def purge_expired_sessions(self: "DatabaseManager", now: Optional[float] = None) -> int:
        """Delete sessions past their expiry. Returns number removed."""
        cursor = self.execute(
            "DELETE FROM sessions WHERE expire <= ?",
            (now if now is not None else time.time(),)
        )
        if cursor.rowcount > 0:
            logger.tree("Expired Sessions Purged", [
                ("Removed", str(cursor.rowcount)),
            ], emoji="🧹")
        return cursor.rowcount
