"""
Zyx Dashboard - Servers Router
==============================

Servers registered by the logged-in user.
"""

from typing import List

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from zyx.core.database import DatabaseManager, ServerRecord
from zyx.api.dependencies import get_db, get_owned_server, require_auth
from zyx.api.errors import forbidden
from zyx.api.models.base import MessageResponse
from zyx.api.models.auth import TokenPayload
from zyx.api.models.servers import Server, ServerCreate


router = APIRouter(prefix="/servers", tags=["Servers"])


@router.get("", response_model=List[Server])
async def list_servers(
    payload: TokenPayload = Depends(require_auth),
    db: DatabaseManager = Depends(get_db),
) -> List[Server]:
    """Servers owned by the current user."""
    return [Server.model_validate(row) for row in db.get_servers_by_owner(payload.sub)]


@router.post("", response_model=Server, status_code=HTTP_201_CREATED)
async def register_server(
    body: ServerCreate,
    payload: TokenPayload = Depends(require_auth),
    db: DatabaseManager = Depends(get_db),
) -> Server:
    """
    Register a server, or refresh one the user already owns.

    A server registered by another user is left untouched and answers 403.
    """
    server = db.upsert_server(
        server_id=body.id,
        name=body.name,
        owner_id=payload.sub,
        icon_url=body.icon_url,
        member_count=body.member_count,
    )
    if server is None or server["owner_id"] != payload.sub:
        raise forbidden()
    return Server.model_validate(server)


@router.get("/{server_id}", response_model=Server)
async def get_server(server: ServerRecord = Depends(get_owned_server)) -> Server:
    """One server."""
    return Server.model_validate(server)


@router.delete("/{server_id}", response_model=MessageResponse)
async def delete_server(
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> MessageResponse:
    """Remove a server along with its settings and records."""
    db.delete_server(server["id"])
    return MessageResponse(message="Server deleted")


__all__ = ["router"]
