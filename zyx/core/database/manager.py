"""
Zyx Dashboard - Database Manager
================================

Central SQLite database manager for all dashboard data.
"""

import sqlite3
import threading
from pathlib import Path
from typing import List, Optional, Tuple, Union

from zyx.core.logger import logger
from zyx.core.constants import DB_CONNECTION_TIMEOUT, SQLITE_BUSY_TIMEOUT

from zyx.core.database.schema import SchemaMixin
from zyx.core.database.users import UsersMixin
from zyx.core.database.sessions import SessionsMixin
from zyx.core.database.servers import ServersMixin
from zyx.core.database.settings import SettingsMixin
from zyx.core.database.tickets import TicketsMixin
from zyx.core.database.mod_actions import ModActionsMixin
from zyx.core.database.log_events import LogEventsMixin
from zyx.core.database.commands import CommandsMixin
from zyx.core.database.reaction_roles import ReactionRolesMixin
from zyx.core.database.analytics import AnalyticsMixin


# =============================================================================
# Database Manager
# =============================================================================

class DatabaseManager(
    SchemaMixin,
    UsersMixin,
    SessionsMixin,
    ServersMixin,
    SettingsMixin,
    TicketsMixin,
    ModActionsMixin,
    LogEventsMixin,
    CommandsMixin,
    ReactionRolesMixin,
    AnalyticsMixin,
):
    """
    Database manager with thread-safe operations.

    DESIGN: One instance per application, created by the app factory and
    shared through app.state. Uses WAL mode for concurrent readers.
    All operations are serialized through an internal lock so the single
    connection can be used from FastAPI's worker threads.
    """

    def __init__(self, db_path: Union[str, Path]) -> None:
        """Open the connection and create tables."""
        self._db_path: str = str(db_path)
        self._db_lock: threading.Lock = threading.Lock()
        self._conn: Optional[sqlite3.Connection] = None

        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._connect()
        self._init_tables()

        logger.tree("Database Manager Initialized", [
            ("Path", self._db_path),
            ("WAL Mode", "Enabled"),
            ("Foreign Keys", "Enabled"),
        ], emoji="🗄️")

    @property
    def path(self) -> str:
        """Filesystem path of the database."""
        return self._db_path

    # =========================================================================
    # Connection Management
    # =========================================================================

    def _connect(self) -> None:
        """
        Establish database connection with WAL mode.

        DESIGN: foreign_keys must be enabled per connection for the
        ON DELETE CASCADE clauses to apply.
        """
        try:
            self._conn = sqlite3.connect(
                self._db_path,
                check_same_thread=False,
                timeout=DB_CONNECTION_TIMEOUT,
            )
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
            self._conn.execute("PRAGMA foreign_keys=ON")
            self._conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT}")
            self._conn.row_factory = sqlite3.Row
        except sqlite3.Error as e:
            logger.error("Database Connection Failed", [
                ("Path", self._db_path),
                ("Error", str(e)),
            ])
            raise

    def _ensure_connection(self) -> sqlite3.Connection:
        """Ensure connection is valid, reconnect if needed."""
        if self._conn is None:
            self._connect()
        return self._conn

    def execute(
        self,
        query: str,
        params: Tuple = (),
        commit: bool = True
    ) -> sqlite3.Cursor:
        """Execute a query with thread safety."""
        with self._db_lock:
            conn = self._ensure_connection()
            cursor = conn.cursor()
            try:
                cursor.execute(query, params)
            except sqlite3.Error:
                if conn.in_transaction:
                    conn.rollback()
                raise
            if commit:
                conn.commit()
            return cursor

    def fetchone(self, query: str, params: Tuple = ()) -> Optional[sqlite3.Row]:
        """Execute query and fetch one result."""
        with self._db_lock:
            cursor = self._ensure_connection().execute(query, params)
            return cursor.fetchone()

    def fetchall(self, query: str, params: Tuple = ()) -> List[sqlite3.Row]:
        """Execute query and fetch all results."""
        with self._db_lock:
            cursor = self._ensure_connection().execute(query, params)
            return cursor.fetchall()

    def ping(self) -> bool:
        """Run a trivial query to confirm the connection works."""
        try:
            return self.fetchone("SELECT 1") is not None
        except sqlite3.Error:
            return False

    def close(self) -> None:
        """Close database connection."""
        with self._db_lock:
            if self._conn:
                self._conn.close()
                self._conn = None
                logger.info("Database Connection Closed")

    # =========================================================================
    # Transaction Support
    # =========================================================================

    class Transaction:
        """
        Context manager for atomic database transactions.

        Usage:
            with db.transaction() as tx:
                tx.execute("INSERT INTO ...", (...))
                row = tx.execute("SELECT ...", (...)).fetchone()
            # Commits on success, rolls back on exception
        """

        def __init__(self, db: "DatabaseManager"):
            self._db = db
            self._cursor: Optional[sqlite3.Cursor] = None

        def __enter__(self) -> "DatabaseManager.Transaction":
            self._db._db_lock.acquire()
            try:
                conn = self._db._ensure_connection()
                conn.execute("BEGIN IMMEDIATE")
                self._cursor = conn.cursor()
            except sqlite3.Error:
                self._db._db_lock.release()
                raise
            return self

        def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
            conn = self._db._ensure_connection()
            try:
                if exc_type is None:
                    conn.commit()
                else:
                    conn.rollback()
                    logger.warning("Database Transaction Rolled Back", [
                        ("Error", str(exc_val)[:100] if exc_val else "Unknown"),
                    ])
            finally:
                self._db._db_lock.release()
            return False

        def execute(self, query: str, params: Tuple = ()) -> sqlite3.Cursor:
            """Execute a query within this transaction."""
            self._cursor.execute(query, params)
            return self._cursor

        def fetchone(self) -> Optional[sqlite3.Row]:
            """Fetch one result from the last query."""
            return self._cursor.fetchone() if self._cursor else None

        def fetchall(self) -> List[sqlite3.Row]:
            """Fetch all results from the last query."""
            return self._cursor.fetchall() if self._cursor else []

    def transaction(self) -> "DatabaseManager.Transaction":
        """
        Create a new transaction context manager.

        Example:
            with db.transaction() as tx:
                tx.execute("INSERT INTO ... ON CONFLICT ...", (...))
                tx.execute("SELECT * FROM ... WHERE ...", (...))
                row = tx.fetchone()
        """
        return self.Transaction(self)


# =============================================================================
# Module Export
# =============================================================================

__all__ = ["DatabaseManager"]
