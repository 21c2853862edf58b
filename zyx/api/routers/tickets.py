"""
Zyx Dashboard - Tickets Router
==============================

Support tickets per server.
"""

from typing import List

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from zyx.core.database import DatabaseManager, ServerRecord
from zyx.api.dependencies import check_server_access, get_db, get_owned_server, require_auth
from zyx.api.errors import not_found
from zyx.api.models.auth import TokenPayload
from zyx.api.models.tickets import Ticket, TicketCreate


router = APIRouter(tags=["Tickets"])


@router.get("/servers/{server_id}/tickets", response_model=List[Ticket])
async def list_tickets(
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> List[Ticket]:
    """All tickets for a server, newest first."""
    return [Ticket.model_validate(row) for row in db.get_tickets_by_server(server["id"])]


@router.post("/servers/{server_id}/tickets", response_model=Ticket, status_code=HTTP_201_CREATED)
async def create_ticket(
    body: TicketCreate,
    server: ServerRecord = Depends(get_owned_server),
    db: DatabaseManager = Depends(get_db),
) -> Ticket:
    """Open a ticket."""
    ticket = db.create_ticket(
        server_id=server["id"],
        channel_id=body.channel_id,
        creator_id=body.creator_id,
        creator_name=body.creator_name,
        subject=body.subject,
    )
    return Ticket.model_validate(ticket)


@router.patch("/tickets/{ticket_id}/close", response_model=Ticket)
async def close_ticket(
    ticket_id: str,
    payload: TokenPayload = Depends(require_auth),
    db: DatabaseManager = Depends(get_db),
) -> Ticket:
    """
    Close a ticket.

    Closing an already closed ticket refreshes its closed time.
    """
    ticket = db.get_ticket(ticket_id)
    if ticket is None:
        raise not_found("ticket")
    check_server_access(db, ticket["server_id"], payload.sub)

    closed = db.close_ticket(ticket_id)
    if closed is None:
        raise not_found("ticket")
    return Ticket.model_validate(closed)


__all__ = ["router"]
