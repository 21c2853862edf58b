"""
Zyx Dashboard - Database Analytics Operations Module
====================================================

Daily per-server counters.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, List, Mapping, Union

from zyx.core.logger import logger
from zyx.core.database.base import _new_id, _decode_row
from zyx.core.database.models import ServerAnalyticsRecord

if TYPE_CHECKING:
    from zyx.core.database.manager import DatabaseManager


ANALYTICS_COUNTERS = (
    "member_count",
    "message_count",
    "commands_used",
    "tickets_created",
    "mod_actions_count",
    "active_members",
)

DateLike = Union[str, date, datetime]


def _normalize_date(value: DateLike) -> str:
    """
    Reduce a date, datetime or ISO string to "YYYY-MM-DD".

    Raises:
        ValueError: If the string is not an ISO date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(str(value)[:10]).isoformat()


class AnalyticsMixin:
    """Mixin for server analytics operations."""

    def upsert_daily_analytics(
        self: "DatabaseManager",
        server_id: str,
        day: DateLike,
        counters: Mapping[str, int],
    ) -> ServerAnalyticsRecord:
        """
        Set counters for one server on one day.

        DESIGN: INSERT ... ON CONFLICT(server_id, date) so the bot can
        report repeatedly during the day. Supplied counters overwrite,
        the rest keep their stored value (0 on first insert).

        Raises:
            ValueError: If a counter name is unknown or the date is invalid.
        """
        unknown = set(counters) - set(ANALYTICS_COUNTERS)
        if unknown:
            raise ValueError(f"Unknown analytics counters: {', '.join(sorted(unknown))}")

        day_str = _normalize_date(day)
        values = [int(counters.get(name, 0)) for name in ANALYTICS_COUNTERS]
        assignments = [f"{name} = excluded.{name}" for name in ANALYTICS_COUNTERS if name in counters]
        conflict_clause = (
            f"DO UPDATE SET {', '.join(assignments)}" if assignments else "DO NOTHING"
        )

        with self.transaction() as tx:
            tx.execute(
                f"""INSERT INTO server_analytics (id, server_id, date, {', '.join(ANALYTICS_COUNTERS)})
                    VALUES (?, ?, ?, {', '.join('?' for _ in ANALYTICS_COUNTERS)})
                    ON CONFLICT(server_id, date) {conflict_clause}""",
                (_new_id(), server_id, day_str, *values)
            )
            tx.execute(
                "SELECT * FROM server_analytics WHERE server_id = ? AND date = ?",
                (server_id, day_str)
            )
            row = tx.fetchone()

        logger.debug("Analytics Recorded", [
            ("Server ID", server_id),
            ("Date", day_str),
        ])
        return _decode_row(row)

    def get_server_analytics(
        self: "DatabaseManager",
        server_id: str,
        start: DateLike,
        end: DateLike,
    ) -> List[ServerAnalyticsRecord]:
        """Daily rows between start and end inclusive, oldest first."""
        rows = self.fetchall(
            """SELECT * FROM server_analytics
               WHERE server_id = ? AND date >= ? AND date <= ?
               ORDER BY date ASC""",
            (server_id, _normalize_date(start), _normalize_date(end))
        )
        return [dict(row) for row in rows]
