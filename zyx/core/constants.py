"""
Zyx Dashboard - Centralized Constants
=====================================

All magic numbers and default values are defined here for maintainability.
Import from this module instead of hardcoding values.
"""

from typing import Any, Dict


# =============================================================================
# Time Constants (in seconds)
# =============================================================================

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

# =============================================================================
# Network Constants
# =============================================================================

DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 5000

# =============================================================================
# Database Constants
# =============================================================================

DB_CONNECTION_TIMEOUT = 30            # sqlite3.connect timeout (seconds)
SQLITE_BUSY_TIMEOUT = 5000            # PRAGMA busy_timeout (milliseconds)

# =============================================================================
# Auth Constants
# =============================================================================

BCRYPT_ROUNDS = 10
BCRYPT_MAX_PASSWORD_BYTES = 72
SESSION_DURATION_DAYS = 7
SESSION_COOKIE_NAME = "zyx_auth_token"

# =============================================================================
# Listing Constants
# =============================================================================

RECENT_ACTIVITY_LIMIT = 10            # Per-server fetch and merged result size
LOG_EVENTS_DEFAULT_LIMIT = 50
LOG_EVENTS_MAX_LIMIT = 500

# =============================================================================
# Field Limits
# =============================================================================

MAX_EVENT_TYPE_LENGTH = 30
MAX_COMMAND_NAME_LENGTH = 32
MAX_EMOJI_LENGTH = 64
MAX_SERVER_NAME_LENGTH = 100
MAX_REASON_LENGTH = 1000
MAX_MESSAGE_LENGTH = 2000

DEFAULT_EMBED_COLOR = "#5865F2"

# =============================================================================
# Settings Defaults
# =============================================================================
# Applied when a server has no stored row and on first insert.

MOD_SETTINGS_DEFAULTS: Dict[str, Any] = {
    "ban_enabled": True,
    "kick_enabled": True,
    "mute_enabled": True,
    "warn_enabled": True,
    "mod_roles": [],
    "log_channel_id": None,
}

TICKET_SETTINGS_DEFAULTS: Dict[str, Any] = {
    "enabled": True,
    "category_id": None,
    "support_roles": [],
    "welcome_message": "Thank you for creating a ticket! Support will be with you shortly.",
}

AUTO_MOD_SETTINGS_DEFAULTS: Dict[str, Any] = {
    "spam_enabled": False,
    "spam_threshold": 5,
    "spam_interval": 5,
    "spam_action": "mute",
    "word_filter_enabled": False,
    "filtered_words": [],
    "word_filter_action": "delete",
    "raid_protection_enabled": False,
    "raid_join_threshold": 10,
    "raid_join_interval": 10,
    "raid_action": "lockdown",
    "exempt_roles": [],
}

LOG_SETTINGS_DEFAULTS: Dict[str, Any] = {
    "log_channel_id": None,
    "log_mod_actions": True,
    "log_message_edits": False,
    "log_message_deletes": False,
    "log_member_joins": True,
    "log_member_leaves": True,
    "log_voice_activity": False,
    "log_role_changes": False,
}

WELCOME_SETTINGS_DEFAULTS: Dict[str, Any] = {
    "welcome_enabled": False,
    "welcome_channel_id": None,
    "welcome_message": "Welcome to the server, {user}! We're glad to have you here.",
    "welcome_embed_enabled": True,
    "welcome_embed_color": DEFAULT_EMBED_COLOR,
    "goodbye_enabled": False,
    "goodbye_channel_id": None,
    "goodbye_message": "Goodbye {user}, we hope to see you again!",
    "dm_welcome_enabled": False,
    "dm_welcome_message": "Welcome to {server}! Please read our rules and enjoy your stay.",
}

AUTO_ROLE_SETTINGS_DEFAULTS: Dict[str, Any] = {
    "enabled": False,
    "join_roles": [],
    "verified_role_id": None,
    "verification_enabled": False,
    "reaction_roles_enabled": False,
}
