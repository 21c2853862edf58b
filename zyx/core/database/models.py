"""
Zyx Dashboard - Database Type Definitions
=========================================

TypedDict definitions for database records.
"""

from typing import List, Optional, TypedDict


class UserRecord(TypedDict, total=False):
    """Type for dashboard user records."""
    id: str
    email: str
    password_hash: str
    first_name: Optional[str]
    last_name: Optional[str]
    profile_image_url: Optional[str]
    created_at: float
    updated_at: float


class SessionRecord(TypedDict, total=False):
    """Type for login session records."""
    sid: str
    sess: dict
    expire: float


class ServerRecord(TypedDict, total=False):
    """Type for Discord server records."""
    id: str
    name: str
    icon_url: Optional[str]
    owner_id: str
    member_count: int
    created_at: float
    updated_at: float


class ModSettingsRecord(TypedDict, total=False):
    """Type for moderation settings records."""
    id: Optional[str]
    server_id: str
    ban_enabled: bool
    kick_enabled: bool
    mute_enabled: bool
    warn_enabled: bool
    mod_roles: List[str]
    log_channel_id: Optional[str]
    created_at: Optional[float]
    updated_at: Optional[float]


class TicketSettingsRecord(TypedDict, total=False):
    """Type for ticket settings records."""
    id: Optional[str]
    server_id: str
    enabled: bool
    category_id: Optional[str]
    support_roles: List[str]
    welcome_message: str
    created_at: Optional[float]
    updated_at: Optional[float]


class TicketRecord(TypedDict, total=False):
    """Type for ticket records."""
    id: str
    server_id: str
    channel_id: str
    creator_id: str
    creator_name: str
    status: str
    subject: Optional[str]
    created_at: float
    closed_at: Optional[float]


class ModActionRecord(TypedDict, total=False):
    """Type for moderation action records."""
    id: str
    server_id: str
    action_type: str
    target_id: str
    target_name: str
    moderator_id: str
    moderator_name: str
    reason: Optional[str]
    created_at: float


class LogEventRecord(TypedDict, total=False):
    """Type for server log event records."""
    id: str
    server_id: str
    event_type: str
    actor_id: Optional[str]
    actor_name: Optional[str]
    target_id: Optional[str]
    target_name: Optional[str]
    details: Optional[str]
    created_at: float


class CustomCommandRecord(TypedDict, total=False):
    """Type for custom command records."""
    id: str
    server_id: str
    name: str
    description: Optional[str]
    response: str
    embed_enabled: bool
    embed_color: str
    allowed_roles: List[str]
    cooldown: int
    enabled: bool
    usage_count: int
    created_at: float
    updated_at: float


class ReactionRoleRecord(TypedDict, total=False):
    """Type for reaction role records."""
    id: str
    server_id: str
    message_id: str
    channel_id: str
    emoji: str
    role_id: str
    created_at: float


class ServerAnalyticsRecord(TypedDict, total=False):
    """Type for daily server analytics records."""
    id: str
    server_id: str
    date: str
    member_count: int
    message_count: int
    commands_used: int
    tickets_created: int
    mod_actions_count: int
    active_members: int


__all__ = [
    "UserRecord",
    "SessionRecord",
    "ServerRecord",
    "ModSettingsRecord",
    "TicketSettingsRecord",
    "TicketRecord",
    "ModActionRecord",
    "LogEventRecord",
    "CustomCommandRecord",
    "ReactionRoleRecord",
    "ServerAnalyticsRecord",
]
