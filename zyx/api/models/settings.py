"""
Zyx Dashboard - Settings API Models
===================================

Per-server settings. Each kind has three models:

- <Kind>Fields: the configurable fields with their defaults
- <Kind>Update: PATCH body; only the fields sent are written, unknown
  fields are rejected
- <Kind>: the response, Fields plus row metadata (None until first write)
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import Field

from zyx.api.models.base import CamelModel, StrictCamelModel, HEX_COLOR_PATTERN, SNOWFLAKE_PATTERN
from zyx.core.constants import DEFAULT_EMBED_COLOR, MAX_MESSAGE_LENGTH


Snowflake = Annotated[str, Field(pattern=SNOWFLAKE_PATTERN)]
FilteredWord = Annotated[str, Field(min_length=1, max_length=100)]


# =============================================================================
# Enums
# =============================================================================

class SpamAction(str, Enum):
    MUTE = "mute"
    KICK = "kick"
    BAN = "ban"


class WordFilterAction(str, Enum):
    DELETE = "delete"
    WARN = "warn"
    MUTE = "mute"


class RaidAction(str, Enum):
    LOCKDOWN = "lockdown"
    KICK = "kick"
    BAN = "ban"


# =============================================================================
# Shared Pieces
# =============================================================================

class _SettingsMeta(CamelModel):
    id: Optional[str] = None
    server_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# Moderation
# =============================================================================

class ModSettingsFields(CamelModel):
    ban_enabled: bool = True
    kick_enabled: bool = True
    mute_enabled: bool = True
    warn_enabled: bool = True
    mod_roles: List[Snowflake] = Field(default_factory=list, max_length=50)
    log_channel_id: Optional[Snowflake] = None


class ModSettingsUpdate(ModSettingsFields, StrictCamelModel):
    """PATCH body for moderation settings."""


class ModSettings(ModSettingsFields, _SettingsMeta):
    """Moderation settings for a server."""


# =============================================================================
# Tickets
# =============================================================================

class TicketSettingsFields(CamelModel):
    enabled: bool = True
    category_id: Optional[Snowflake] = None
    support_roles: List[Snowflake] = Field(default_factory=list, max_length=50)
    welcome_message: str = Field(
        "Thank you for creating a ticket! Support will be with you shortly.",
        min_length=1,
        max_length=MAX_MESSAGE_LENGTH,
    )


class TicketSettingsUpdate(TicketSettingsFields, StrictCamelModel):
    """PATCH body for ticket settings."""


class TicketSettings(TicketSettingsFields, _SettingsMeta):
    """Ticket settings for a server."""


# =============================================================================
# Auto-Moderation
# =============================================================================

class AutoModSettingsFields(CamelModel):
    spam_enabled: bool = False
    spam_threshold: int = Field(5, ge=1, le=100, description="Messages within the interval")
    spam_interval: int = Field(5, ge=1, le=3600, description="Window in seconds")
    spam_action: SpamAction = SpamAction.MUTE
    word_filter_enabled: bool = False
    filtered_words: List[FilteredWord] = Field(default_factory=list, max_length=1000)
    word_filter_action: WordFilterAction = WordFilterAction.DELETE
    raid_protection_enabled: bool = False
    raid_join_threshold: int = Field(10, ge=1, le=1000, description="Joins within the interval")
    raid_join_interval: int = Field(10, ge=1, le=3600, description="Window in seconds")
    raid_action: RaidAction = RaidAction.LOCKDOWN
    exempt_roles: List[Snowflake] = Field(default_factory=list, max_length=50)


class AutoModSettingsUpdate(AutoModSettingsFields, StrictCamelModel):
    """PATCH body for auto-moderation settings."""


class AutoModSettings(AutoModSettingsFields, _SettingsMeta):
    """Auto-moderation settings for a server."""


# =============================================================================
# Logging
# =============================================================================

class LogSettingsFields(CamelModel):
    log_channel_id: Optional[Snowflake] = None
    log_mod_actions: bool = True
    log_message_edits: bool = False
    log_message_deletes: bool = False
    log_member_joins: bool = True
    log_member_leaves: bool = True
    log_voice_activity: bool = False
    log_role_changes: bool = False


class LogSettingsUpdate(LogSettingsFields, StrictCamelModel):
    """PATCH body for log settings."""


class LogSettings(LogSettingsFields, _SettingsMeta):
    """Log settings for a server."""


# =============================================================================
# Welcome
# =============================================================================

class WelcomeSettingsFields(CamelModel):
    welcome_enabled: bool = False
    welcome_channel_id: Optional[Snowflake] = None
    welcome_message: str = Field(
        "Welcome to the server, {user}! We're glad to have you here.",
        min_length=1,
        max_length=MAX_MESSAGE_LENGTH,
    )
    welcome_embed_enabled: bool = True
    welcome_embed_color: str = Field(DEFAULT_EMBED_COLOR, pattern=HEX_COLOR_PATTERN)
    goodbye_enabled: bool = False
    goodbye_channel_id: Optional[Snowflake] = None
    goodbye_message: str = Field(
        "Goodbye {user}, we hope to see you again!",
        min_length=1,
        max_length=MAX_MESSAGE_LENGTH,
    )
    dm_welcome_enabled: bool = False
    dm_welcome_message: str = Field(
        "Welcome to {server}! Please read our rules and enjoy your stay.",
        min_length=1,
        max_length=MAX_MESSAGE_LENGTH,
    )


class WelcomeSettingsUpdate(WelcomeSettingsFields, StrictCamelModel):
    """PATCH body for welcome settings."""


class WelcomeSettings(WelcomeSettingsFields, _SettingsMeta):
    """Welcome and goodbye settings for a server."""


# =============================================================================
# Auto-Roles
# =============================================================================

class AutoRoleSettingsFields(CamelModel):
    enabled: bool = False
    join_roles: List[Snowflake] = Field(default_factory=list, max_length=25)
    verified_role_id: Optional[Snowflake] = None
    verification_enabled: bool = False
    reaction_roles_enabled: bool = False


class AutoRoleSettingsUpdate(AutoRoleSettingsFields, StrictCamelModel):
    """PATCH body for auto-role settings."""


class AutoRoleSettings(AutoRoleSettingsFields, _SettingsMeta):
    """Auto-role settings for a server."""


__all__ = [
    "SpamAction",
    "WordFilterAction",
    "RaidAction",
    "ModSettingsFields",
    "ModSettingsUpdate",
    "ModSettings",
    "TicketSettingsFields",
    "TicketSettingsUpdate",
    "TicketSettings",
    "AutoModSettingsFields",
    "AutoModSettingsUpdate",
    "AutoModSettings",
    "LogSettingsFields",
    "LogSettingsUpdate",
    "LogSettings",
    "WelcomeSettingsFields",
    "WelcomeSettingsUpdate",
    "WelcomeSettings",
    "AutoRoleSettingsFields",
    "AutoRoleSettingsUpdate",
    "AutoRoleSettings",
]
