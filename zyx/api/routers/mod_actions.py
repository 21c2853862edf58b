"""
Zyx Dashboard - Mod Actions Router
==================================

Moderation audit trail per server.
"""

from typing import List

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from zyx.core.database import DatabaseManager, ServerRecord
from zyx.api.dependencies import get_db, get_owned_server
from zyx.api.models.mod_actions import ModAction, ModActionCreate


router = APIRouter(prefix="/servers/{server_id}/mod-actions", tags=["Mod Actions"])


@router.get("", response_model=List[ModAction])
async def list_mod_actions(
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> List[ModAction]:
    """All mod actions for a server, newest first."""
    return [ModAction.model_validate(row) for row in db.get_mod_actions_by_server(server["id"])]


@router.post("", response_model=ModAction, status_code=HTTP_201_CREATED)
async def create_mod_action(
    body: ModActionCreate,
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> ModAction:
    """Record a moderation action."""
    action = db.create_mod_action(
        server_id=server["id"],
        action_type=body.action_type.value,
        target_id=body.target_id,
        target_name=body.target_name,
        moderator_id=body.moderator_id,
        moderator_name=body.moderator_name,
        reason=body.reason,
    )
    return ModAction.model_validate(action)


__all__ = ["router"]
