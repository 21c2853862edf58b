"""
Zyx Dashboard - Custom Commands Router
======================================

Per-server custom commands and their usage counter.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from zyx.core.database import CustomCommandRecord, DatabaseManager, ServerRecord
from zyx.api.dependencies import check_server_access, get_db, get_owned_server, require_auth
from zyx.api.errors import APIError, ErrorCode, not_found
from zyx.api.models.base import MessageResponse
from zyx.api.models.auth import TokenPayload
from zyx.api.models.commands import CustomCommand, CustomCommandCreate, CustomCommandUpdate


router = APIRouter(tags=["Commands"])


async def get_owned_command(
    command_id: str,
    payload: TokenPayload = Depends(require_auth),
    db: DatabaseManager = Depends(get_db),
) -> CustomCommandRecord:
    """Path dependency for /commands/{command_id} routes."""
    command = db.get_custom_command(command_id)
    if command is None:
        raise not_found("command")
    check_server_access(db, command["server_id"], payload.sub)
    return command


@router.get("/servers/{server_id}/commands", response_model=List[CustomCommand])
async def list_commands(
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> List[CustomCommand]:
    """All custom commands for a server, newest first."""
    return [CustomCommand.model_validate(row) for row in db.get_custom_commands(server["id"])]


@router.post("/servers/{server_id}/commands", response_model=CustomCommand, status_code=HTTP_201_CREATED)
async def create_command(
    body: CustomCommandCreate,
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> CustomCommand:
    """Create a custom command. Names are unique per server."""
    try:
        command = db.create_custom_command(server_id=server["id"], **body.model_dump())
    except sqlite3.IntegrityError:
        raise APIError(ErrorCode.COMMAND_NAME_TAKEN, details={"name": body.name})
    return CustomCommand.model_validate(command)


@router.get("/commands/{command_id}", response_model=CustomCommand)
async def get_command(command: CustomCommandRecord = Depends(get_owned_command)) -> CustomCommand:
    return CustomCommand.model_validate(command)


@router.patch("/commands/{command_id}", response_model=CustomCommand)
async def update_command(
    body: CustomCommandUpdate,
    command: CustomCommandRecord = Depends(get_owned_command),
    db: DatabaseManager = Depends(get_db),
) -> CustomCommand:
    """Update only the fields present in the body."""
    fields = body.model_dump(exclude_unset=True)
    try:
        updated = db.update_custom_command(command["id"], fields)
    except sqlite3.IntegrityError:
        raise APIError(ErrorCode.COMMAND_NAME_TAKEN, details={"name": fields.get("name")})
    if updated is None:
        raise not_found("command")
    return CustomCommand.model_validate(updated)


@router.delete("/commands/{command_id}", response_model=MessageResponse)
async def delete_command(
    command: CustomCommandRecord = Depends(get_owned_command),
    db: DatabaseManager = Depends(get_db),
) -> MessageResponse:
    if not db.delete_custom_command(command["id"]):
        raise not_found("command")
    return MessageResponse(message="Command deleted")


@router.post("/commands/{command_id}/use", response_model=CustomCommand)
async def record_command_use(
    command: CustomCommandRecord = Depends(get_owned_command),
    db: DatabaseManager = Depends(get_db),
) -> CustomCommand:
    """Bump the usage counter. Called by the bot each time the command runs."""
    updated = db.increment_command_usage(command["id"])
    if updated is None:
        raise not_found("command")
    return CustomCommand.model_validate(updated)


__all__ = ["router", "get_owned_command"]
