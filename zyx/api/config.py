"""
Zyx Dashboard - API Configuration
=================================

Configuration for the FastAPI service.

DESIGN:
    APIConfig is built once and handed to create_app(), which stores it on
    app.state. Nothing below the factory reads the environment.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple
from zoneinfo import ZoneInfo

from zyx.core.config import (
    Config,
    ConfigValidationError,
    _parse_bool,
    _parse_int_with_default,
    load_config,
)
from zyx.core.constants import (
    BCRYPT_ROUNDS,
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    SESSION_COOKIE_NAME,
    SESSION_DURATION_DAYS,
)


SECRET_ENV_VARS = ("ZYX_SESSION_SECRET", "SESSION_SECRET", "JWT_SECRET")
"""Environment variables checked, in order, for the token signing secret."""


@dataclass(frozen=True)
class APIConfig:
    """API configuration settings."""

    # Server
    host: str = DEFAULT_API_HOST
    port: int = DEFAULT_API_PORT
    debug: bool = False

    # CORS
    cors_origins: Tuple[str, ...] = ("*",)

    # JWT Auth
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expiry_days: int = SESSION_DURATION_DAYS
    bcrypt_rounds: int = BCRYPT_ROUNDS

    # Session cookie
    cookie_name: str = SESSION_COOKIE_NAME
    cookie_secure: bool = False
    cookie_samesite: str = "lax"

    # Storage
    database_path: str = "data/zyx.db"
    timezone: str = "UTC"

    @property
    def cookie_max_age(self) -> int:
        """Cookie lifetime in seconds, matching the token expiry."""
        return self.jwt_expiry_days * 24 * 60 * 60

    @property
    def tz(self) -> ZoneInfo:
        """Timezone that decides where "today" starts."""
        return ZoneInfo(self.timezone)


def _first_secret(env: Mapping[str, str]) -> str:
    for name in SECRET_ENV_VARS:
        value = env.get(name, "").strip()
        if value:
            return value
    return ""


def load_api_config(
    env: Optional[Mapping[str, str]] = None,
    core: Optional[Config] = None,
) -> APIConfig:
    """
    Load API configuration from environment.

    Args:
        env: Mapping to read from. Defaults to os.environ.
        core: Process configuration. Loaded from env when omitted.

    Raises:
        ConfigValidationError: If no signing secret is configured or a
            value is invalid.
    """
    if env is None:
        env = os.environ
    if core is None:
        core = load_config(env)

    secret = _first_secret(env)
    if not secret:
        raise ConfigValidationError(
            f"A session signing secret is required: set one of {', '.join(SECRET_ENV_VARS)}"
        )

    origins = tuple(
        origin.strip()
        for origin in env.get("ZYX_CORS_ORIGINS", "*").split(",")
        if origin.strip()
    )

    return APIConfig(
        host=env.get("ZYX_API_HOST", DEFAULT_API_HOST),
        port=_parse_int_with_default(env.get("ZYX_API_PORT") or env.get("PORT"), DEFAULT_API_PORT, "ZYX_API_PORT", 1, 65535),
        debug=_parse_bool(env.get("ZYX_API_DEBUG")),
        cors_origins=origins or ("*",),
        jwt_secret=secret,
        jwt_expiry_days=_parse_int_with_default(env.get("ZYX_SESSION_DAYS"), SESSION_DURATION_DAYS, "ZYX_SESSION_DAYS", 1, 365),
        bcrypt_rounds=_parse_int_with_default(env.get("ZYX_BCRYPT_ROUNDS"), BCRYPT_ROUNDS, "ZYX_BCRYPT_ROUNDS", 4, 16),
        cookie_secure=core.is_production,
        database_path=core.database_path,
        timezone=core.timezone,
    )


# Singleton instance, used by main.py only
_config: Optional[APIConfig] = None


def get_api_config() -> APIConfig:
    """Get the API configuration singleton."""
    global _config
    if _config is None:
        _config = load_api_config()
    return _config


__all__ = ["APIConfig", "get_api_config", "load_api_config", "SECRET_ENV_VARS"]
