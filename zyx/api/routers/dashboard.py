"""
Zyx Dashboard - Dashboard Router
================================

Overview across every server the logged-in user owns.

Totals are gathered one server at a time and combined in memory.
"""

from datetime import datetime

from fastapi import APIRouter, Depends

from zyx.core.constants import RECENT_ACTIVITY_LIMIT
from zyx.core.database import DatabaseManager
from zyx.core.logger import logger
from zyx.api.config import APIConfig
from zyx.api.dependencies import get_app_config, get_db, require_auth
from zyx.api.models.auth import TokenPayload
from zyx.api.models.dashboard import DashboardActivity, DashboardStats
from zyx.api.models.mod_actions import ModAction
from zyx.api.models.tickets import Ticket


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def start_of_today(config: APIConfig) -> float:
    """Unix time of the most recent midnight in the configured timezone."""
    now = datetime.now(config.tz)
    return now.replace(hour=0, minute=0, second=0, microsecond=0).timestamp()


@router.get("/stats", response_model=DashboardStats)
async def get_stats(
    payload: TokenPayload = Depends(require_auth),
    db: DatabaseManager = Depends(get_db),
    config: APIConfig = Depends(get_app_config),
) -> DashboardStats:
    """Servers, members, open tickets and today's mod actions."""
    servers = db.get_servers_by_owner(payload.sub)
    since = start_of_today(config)

    total_members = 0
    open_tickets = 0
    mod_actions_today = 0
    for server in servers:
        total_members += server.get("member_count") or 0
        open_tickets += db.count_open_tickets(server["id"])
        mod_actions_today += len(db.get_mod_actions_since(server["id"], since))

    logger.debug("Dashboard Stats", [
        ("User ID", payload.sub),
        ("Servers", str(len(servers))),
        ("Open Tickets", str(open_tickets)),
    ])

    return DashboardStats(
        total_servers=len(servers),
        total_members=total_members,
        open_tickets=open_tickets,
        mod_actions_today=mod_actions_today,
    )


@router.get("/activity", response_model=DashboardActivity)
async def get_activity(
    payload: TokenPayload = Depends(require_auth),
    db: DatabaseManager = Depends(get_db),
) -> DashboardActivity:
    """The latest mod actions and tickets across all servers, newest first."""
    mod_actions = []
    tickets = []
    for server in db.get_servers_by_owner(payload.sub):
        mod_actions.extend(db.get_mod_actions_by_server(server["id"], limit=RECENT_ACTIVITY_LIMIT))
        tickets.extend(db.get_tickets_by_server(server["id"], limit=RECENT_ACTIVITY_LIMIT))

    mod_actions.sort(key=lambda row: row["created_at"], reverse=True)
    tickets.sort(key=lambda row: row["created_at"], reverse=True)

    return DashboardActivity(
        mod_actions=[ModAction.model_validate(row) for row in mod_actions[:RECENT_ACTIVITY_LIMIT]],
        tickets=[Ticket.model_validate(row) for row in tickets[:RECENT_ACTIVITY_LIMIT]],
    )


__all__ = ["router", "start_of_today"]
