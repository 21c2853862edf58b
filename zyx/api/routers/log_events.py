"""
Zyx Dashboard - Log Events Router
=================================
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from starlette.status import HTTP_201_CREATED

from zyx.core.constants import LOG_EVENTS_DEFAULT_LIMIT, LOG_EVENTS_MAX_LIMIT
from zyx.core.database import DatabaseManager, ServerRecord
from zyx.api.dependencies import get_db, get_owned_server
from zyx.api.models.log_events import LogEvent, LogEventCreate


router = APIRouter(prefix="/servers/{server_id}/log-events", tags=["Log Events"])


@router.get("", response_model=List[LogEvent])
async def list_log_events(
    limit: int = Query(LOG_EVENTS_DEFAULT_LIMIT, ge=1, le=LOG_EVENTS_MAX_LIMIT),
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> List[LogEvent]:
    """Most recent log events, newest first."""
    return [LogEvent.model_validate(row) for row in db.get_log_events(server["id"], limit=limit)]


@router.post("", response_model=LogEvent, status_code=HTTP_201_CREATED)
async def create_log_event(
    body: LogEventCreate,
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> LogEvent:
    event = db.create_log_event(server_id=server["id"], **body.model_dump())
    return LogEvent.model_validate(event)


__all__ = ["router"]
