"""
Zyx Dashboard - Database User Operations Module
===============================================

Dashboard account storage.
"""

import time
from typing import TYPE_CHECKING, Optional

from zyx.core.logger import logger
from zyx.core.database.base import _new_id, _decode_row
from zyx.core.database.models import UserRecord

if TYPE_CHECKING:
    from zyx.core.database.manager import DatabaseManager


class UsersMixin:
    """Mixin for dashboard user operations."""

    def create_user(
        self: "DatabaseManager",
        email: str,
        password_hash: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        profile_image_url: Optional[str] = None,
    ) -> UserRecord:
        """
        Insert a new user.

        Raises:
            sqlite3.IntegrityError: If the email is already registered.
        """
        user_id = _new_id()
        now = time.time()
        self.execute(
            """INSERT INTO users (
                id, email, password_hash, first_name, last_name,
                profile_image_url, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (user_id, email, password_hash, first_name, last_name, profile_image_url, now, now)
        )
        logger.tree("User Created", [
            ("User ID", user_id),
            ("Email", email),
        ], emoji="👤")
        return self.get_user(user_id)

    def get_user(self: "DatabaseManager", user_id: str) -> Optional[UserRecord]:
        """Get a user by ID."""
        row = self.fetchone("SELECT * FROM users WHERE id = ?", (user_id,))
        return _decode_row(row)

    def get_user_by_email(self: "DatabaseManager", email: str) -> Optional[UserRecord]:
        """Get a user by (normalized) email."""
        row = self.fetchone("SELECT * FROM users WHERE email = ?", (email,))
        return _decode_row(row)

    def count_users_by_email(self: "DatabaseManager", email: str) -> int:
        """Number of accounts registered under an email (0 or 1)."""
        row = self.fetchone("SELECT COUNT(*) AS n FROM users WHERE email = ?", (email,))
        return row["n"] if row else 0
