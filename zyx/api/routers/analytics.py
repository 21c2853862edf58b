"""
Zyx Dashboard - Analytics Router
================================

Daily per-server counters reported by the bot.
"""

import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from zyx.core.database import DatabaseManager, ServerRecord
from zyx.api.config import APIConfig
from zyx.api.dependencies import get_app_config, get_db, get_owned_server
from zyx.api.errors import bad_request
from zyx.api.models.analytics import AnalyticsUpsert, ServerAnalytics


# Range used when the caller gives no start date
DEFAULT_RANGE_DAYS = 30


router = APIRouter(prefix="/servers/{server_id}/analytics", tags=["Analytics"])


@router.get("", response_model=List[ServerAnalytics])
async def get_analytics(
    start: Optional[datetime.date] = Query(None, description="First day, inclusive"),
    end: Optional[datetime.date] = Query(None, description="Last day, inclusive"),
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
    config: APIConfig = Depends(get_app_config),
) -> List[ServerAnalytics]:
    """Daily rows oldest first. Defaults to the last 30 days."""
    if end is None:
        end = datetime.datetime.now(config.tz).date()
    if start is None:
        start = end - datetime.timedelta(days=DEFAULT_RANGE_DAYS - 1)
    if start > end:
        raise bad_request(message="start must not be after end")

    rows = db.get_server_analytics(server["id"], start, end)
    return [ServerAnalytics.model_validate(row) for row in rows]


@router.post("", response_model=ServerAnalytics)
async def record_analytics(
    body: AnalyticsUpsert,
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> ServerAnalytics:
    """Set counters for one day. Counters left out keep their stored value."""
    counters = {
        name: value
        for name, value in body.model_dump(exclude_unset=True, exclude={"date"}).items()
        if value is not None
    }
    row = db.upsert_daily_analytics(server["id"], body.date, counters)
    return ServerAnalytics.model_validate(row)


__all__ = ["router", "DEFAULT_RANGE_DAYS"]
