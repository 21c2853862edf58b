"""
Zyx Dashboard - Database Settings Operations Module
===================================================

Per-server settings stored one row per server per settings kind.

DESIGN:
    Every settings kind shares one read path and one write path. Reads
    substitute the defaults from zyx.core.constants when no row exists.
    Writes are a single INSERT ... ON CONFLICT(server_id) DO UPDATE, so
    concurrent first writes for the same server cannot race into a
    duplicate-key failure, and only the supplied columns are touched.
"""

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Mapping, Optional

from zyx.core.constants import (
    MOD_SETTINGS_DEFAULTS,
    TICKET_SETTINGS_DEFAULTS,
    AUTO_MOD_SETTINGS_DEFAULTS,
    LOG_SETTINGS_DEFAULTS,
    WELCOME_SETTINGS_DEFAULTS,
    AUTO_ROLE_SETTINGS_DEFAULTS,
)
from zyx.core.logger import logger
from zyx.core.database.base import _new_id, _decode_row, _encode_value

if TYPE_CHECKING:
    from zyx.core.database.manager import DatabaseManager


# =============================================================================
# Settings Tables
# =============================================================================

@dataclass(frozen=True)
class SettingsTable:
    """Column layout of one settings table."""

    table: str
    defaults: Mapping[str, Any]
    json_fields: FrozenSet[str]
    bool_fields: FrozenSet[str]

    @property
    def columns(self) -> FrozenSet[str]:
        """Writable columns."""
        return frozenset(self.defaults)


def _table(name: str, defaults: Dict[str, Any]) -> SettingsTable:
    """Derive JSON and boolean columns from the default values."""
    return SettingsTable(
        table=name,
        defaults=defaults,
        json_fields=frozenset(k for k, v in defaults.items() if isinstance(v, list)),
        bool_fields=frozenset(k for k, v in defaults.items() if isinstance(v, bool)),
    )


SETTINGS_TABLES: Dict[str, SettingsTable] = {
    "mod": _table("mod_settings", MOD_SETTINGS_DEFAULTS),
    "ticket": _table("ticket_settings", TICKET_SETTINGS_DEFAULTS),
    "auto_mod": _table("auto_mod_settings", AUTO_MOD_SETTINGS_DEFAULTS),
    "log": _table("log_settings", LOG_SETTINGS_DEFAULTS),
    "welcome": _table("welcome_settings", WELCOME_SETTINGS_DEFAULTS),
    "auto_role": _table("auto_role_settings", AUTO_ROLE_SETTINGS_DEFAULTS),
}
"""Settings kind -> table layout. Table and column names only come from here."""


def _get_table(kind: str) -> SettingsTable:
    """Look up a settings kind, rejecting unknown names."""
    try:
        return SETTINGS_TABLES[kind]
    except KeyError:
        raise ValueError(f"Unknown settings kind: {kind}")


def default_settings(kind: str, server_id: str) -> Dict[str, Any]:
    """Defaults for a server with no stored row."""
    layout = _get_table(kind)
    record: Dict[str, Any] = {"id": None, "server_id": server_id}
    for name, value in layout.defaults.items():
        record[name] = list(value) if isinstance(value, list) else value
    record["created_at"] = None
    record["updated_at"] = None
    return record


# =============================================================================
# Settings Mixin
# =============================================================================

class SettingsMixin:
    """Mixin for per-server settings operations."""

    def get_settings(self: "DatabaseManager", kind: str, server_id: str) -> Optional[Dict[str, Any]]:
        """Stored settings row for a server, or None."""
        layout = _get_table(kind)
        row = self.fetchone(f"SELECT * FROM {layout.table} WHERE server_id = ?", (server_id,))
        return _decode_row(row, layout.json_fields, layout.bool_fields)

    def get_settings_or_default(self: "DatabaseManager", kind: str, server_id: str) -> Dict[str, Any]:
        """Stored settings row, or the defaults when nothing was written yet."""
        stored = self.get_settings(kind, server_id)
        return stored if stored is not None else default_settings(kind, server_id)

    def upsert_settings(
        self: "DatabaseManager",
        kind: str,
        server_id: str,
        fields: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Create or partially update a server's settings in one statement.

        Supplied fields overwrite stored values. Fields not supplied keep
        their stored value, or the default when the row is new.

        Args:
            kind: Settings kind, a key of SETTINGS_TABLES.
            server_id: Owning server.
            fields: Column -> new value.

        Returns:
            The stored row after the write.

        Raises:
            ValueError: If the kind or any field name is unknown.
        """
        layout = _get_table(kind)
        unknown = set(fields) - layout.columns
        if unknown:
            raise ValueError(f"Unknown {kind} settings fields: {', '.join(sorted(unknown))}")

        columns = list(layout.defaults)
        merged = {**layout.defaults, **fields}
        values = [
            _encode_value(name, merged[name], layout.json_fields, layout.bool_fields)
            for name in columns
        ]
        now = time.time()

        assignments = [f"{name} = excluded.{name}" for name in columns if name in fields]
        assignments.append("updated_at = excluded.updated_at")

        query = (
            f"INSERT INTO {layout.table} (id, server_id, {', '.join(columns)}, created_at, updated_at) "
            f"VALUES ({', '.join('?' for _ in range(len(columns) + 4))}) "
            f"ON CONFLICT(server_id) DO UPDATE SET {', '.join(assignments)}"
        )

        with self.transaction() as tx:
            tx.execute(query, (_new_id(), server_id, *values, now, now))
            tx.execute(f"SELECT * FROM {layout.table} WHERE server_id = ?", (server_id,))
            row = tx.fetchone()

        logger.tree("Settings Updated", [
            ("Kind", kind),
            ("Server ID", server_id),
            ("Fields", ", ".join(sorted(fields)) or "none"),
        ], emoji="⚙️")

        return _decode_row(row, layout.json_fields, layout.bool_fields)
