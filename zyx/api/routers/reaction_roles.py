"""
Zyx Dashboard - Reaction Roles Router
=====================================
"""

from typing import List

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from zyx.core.database import DatabaseManager, ServerRecord
from zyx.api.dependencies import check_server_access, get_db, get_owned_server, require_auth
from zyx.api.errors import not_found
from zyx.api.models.base import MessageResponse
from zyx.api.models.auth import TokenPayload
from zyx.api.models.reaction_roles import ReactionRole, ReactionRoleCreate


router = APIRouter(tags=["Reaction Roles"])


@router.get("/servers/{server_id}/reaction-roles", response_model=List[ReactionRole])
async def list_reaction_roles(
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> List[ReactionRole]:
    return [ReactionRole.model_validate(row) for row in db.get_reaction_roles(server["id"])]


@router.post("/servers/{server_id}/reaction-roles", response_model=ReactionRole, status_code=HTTP_201_CREATED)
async def create_reaction_role(
    body: ReactionRoleCreate,
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> ReactionRole:
    """Bind an emoji on a message to a role."""
    binding = db.create_reaction_role(server_id=server["id"], **body.model_dump())
    return ReactionRole.model_validate(binding)


@router.delete("/reaction-roles/{binding_id}", response_model=MessageResponse)
async def delete_reaction_role(
    binding_id: str,
    payload: TokenPayload = Depends(require_auth),
    db: DatabaseManager = Depends(get_db),
) -> MessageResponse:
    binding = db.get_reaction_role(binding_id)
    if binding is None:
        raise not_found("reaction_role")
    check_server_access(db, binding["server_id"], payload.sub)

    db.delete_reaction_role(binding_id)
    return MessageResponse(message="Reaction role deleted")


__all__ = ["router"]
