"""
Zyx Dashboard - Configuration Module
====================================

Centralized configuration management with environment variable validation.

DESIGN:
    This module provides a single source of truth for process-wide settings,
    loaded from environment variables at startup. Using a dataclass ensures
    type safety once loaded.

    Key patterns:
    - load_config() builds a fresh Config; get_config() caches one for main.py
    - Validation happens once at load time, not on every access
    - Invalid values raise ConfigValidationError instead of falling back
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class Config:
    """
    Process configuration loaded from environment variables.

    Attributes:
        environment: Deployment environment ("development" or "production").
        database_path: Path to the SQLite database file.
        timezone: IANA timezone name used for "today" boundaries and logs.
        error_webhook_url: Optional Discord webhook for error alerts.
    """

    environment: str = "development"
    database_path: str = "data/zyx.db"
    timezone: str = "UTC"
    error_webhook_url: Optional[str] = None

    @property
    def is_production(self) -> bool:
        """Whether the process runs in production (secure cookies)."""
        return self.environment == "production"


# =============================================================================
# Validation
# =============================================================================

class ConfigValidationError(Exception):
    """
    Raised when configuration is missing or invalid.

    DESIGN:
        Startup fails loudly instead of running with unsafe defaults.
    """
    pass


def _parse_int_with_default(
    value: Optional[str],
    default: int,
    name: str,
    min_val: Optional[int] = None,
    max_val: Optional[int] = None,
) -> int:
    """
    Parse an optional integer environment variable with bounds.

    Raises:
        ConfigValidationError: If the value is not an integer or out of range.
    """
    if value is None or value.strip() == "":
        return default
    try:
        result = int(value.strip())
    except ValueError:
        raise ConfigValidationError(f"{name} must be an integer, got: {value}")
    if min_val is not None and result < min_val:
        raise ConfigValidationError(f"{name} must be >= {min_val}, got: {result}")
    if max_val is not None and result > max_val:
        raise ConfigValidationError(f"{name} must be <= {max_val}, got: {result}")
    return result


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse a boolean flag such as "true", "1" or "yes"."""
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _validate_url(value: Optional[str], name: str) -> Optional[str]:
    """
    Validate an optional URL environment variable.

    Raises:
        ConfigValidationError: If the value is set but is not an http(s) URL.
    """
    if not value:
        return None
    value = value.strip()
    if not value.startswith(("http://", "https://")):
        raise ConfigValidationError(f"{name} must be an http(s) URL")
    return value


def _validate_timezone(value: str) -> str:
    """Ensure the timezone name resolves."""
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigValidationError(f"ZYX_TIMEZONE is not a known timezone: {value}")
    return value


# =============================================================================
# Loading
# =============================================================================

def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """
    Load configuration from the environment.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Returns:
        A validated Config instance.

    Raises:
        ConfigValidationError: If any value is invalid.
    """
    if env is None:
        env = os.environ

    environment = (env.get("ZYX_ENV") or env.get("NODE_ENV") or "development").strip().lower()

    return Config(
        environment=environment,
        database_path=env.get("ZYX_DATABASE_PATH", "data/zyx.db"),
        timezone=_validate_timezone(env.get("ZYX_TIMEZONE", "UTC")),
        error_webhook_url=_validate_url(env.get("ZYX_ERROR_WEBHOOK_URL"), "ZYX_ERROR_WEBHOOK_URL"),
    )


# =============================================================================
# Global Config Instance
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the process configuration, loading it on first use.

    Only the entry point relies on this cache; the application factory
    receives its configuration explicitly.

    Raises:
        ConfigValidationError: On first call if config is invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


# =============================================================================
# Config Validation & Logging
# =============================================================================

def validate_and_log_config() -> Config:
    """
    Validate configuration and log a summary at startup.

    Returns:
        The loaded Config.

    Raises:
        ConfigValidationError: If configuration is invalid.
    """
    from zyx.core.logger import logger

    config = get_config()

    logger.set_webhook(config.error_webhook_url)

    logger.tree("Configuration Validated", [
        ("Environment", config.environment),
        ("Database", config.database_path),
        ("Timezone", config.timezone),
        ("Error Webhook", "Enabled" if config.error_webhook_url else "Disabled"),
    ], emoji="⚙️")

    return config


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "Config",
    "ConfigValidationError",
    "get_config",
    "load_config",
    "validate_and_log_config",
]
