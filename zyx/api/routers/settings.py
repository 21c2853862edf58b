"""
Zyx Dashboard - Settings Router
===============================

GET and PATCH for every per-server settings kind.

GET answers the stored row, or the defaults when nothing was saved yet.
PATCH writes only the fields present in the body.
"""

from typing import Any, Dict, Type

from fastapi import APIRouter, Depends

from zyx.core.database import DatabaseManager, ServerRecord
from zyx.api.dependencies import get_db, get_owned_server
from zyx.api.models.base import CamelModel, StrictCamelModel
from zyx.api.models.settings import (
    AutoModSettings,
    AutoModSettingsUpdate,
    AutoRoleSettings,
    AutoRoleSettingsUpdate,
    LogSettings,
    LogSettingsUpdate,
    ModSettings,
    ModSettingsUpdate,
    TicketSettings,
    TicketSettingsUpdate,
    WelcomeSettings,
    WelcomeSettingsUpdate,
)


router = APIRouter(prefix="/servers/{server_id}", tags=["Settings"])


# URL slug -> (storage kind, response model, PATCH body model)
SETTINGS_ROUTES: Dict[str, tuple] = {
    "mod-settings": ("mod", ModSettings, ModSettingsUpdate),
    "ticket-settings": ("ticket", TicketSettings, TicketSettingsUpdate),
    "automod-settings": ("auto_mod", AutoModSettings, AutoModSettingsUpdate),
    "log-settings": ("log", LogSettings, LogSettingsUpdate),
    "welcome-settings": ("welcome", WelcomeSettings, WelcomeSettingsUpdate),
    "autorole-settings": ("auto_role", AutoRoleSettings, AutoRoleSettingsUpdate),
}


def _add_settings_routes(
    slug: str,
    kind: str,
    response_model: Type[CamelModel],
    update_model: Type[StrictCamelModel],
) -> None:
    """Register GET/PATCH /servers/{server_id}/<slug>."""

    async def read_settings(
        server: ServerRecord = Depends(get_owned_server),
        db: DatabaseManager = Depends(get_db),
    ) -> Any:
        return response_model.model_validate(db.get_settings_or_default(kind, server["id"]))

    async def update_settings(
        body: update_model,  # type: ignore[valid-type]
        server: ServerRecord = Depends(get_owned_server),
        db: DatabaseManager = Depends(get_db),
    ) -> Any:
        fields = body.model_dump(exclude_unset=True, mode="json")
        return response_model.model_validate(db.upsert_settings(kind, server["id"], fields))

    label = slug.replace("-", " ")
    router.add_api_route(
        f"/{slug}",
        read_settings,
        methods=["GET"],
        response_model=response_model,
        name=f"get_{kind}_settings",
        summary=f"Get {label}",
    )
    router.add_api_route(
        f"/{slug}",
        update_settings,
        methods=["PATCH"],
        response_model=response_model,
        name=f"update_{kind}_settings",
        summary=f"Update {label}",
    )


for _slug, (_kind, _response_model, _update_model) in SETTINGS_ROUTES.items():
    _add_settings_routes(_slug, _kind, _response_model, _update_model)


__all__ = ["router", "SETTINGS_ROUTES"]
