"""
Zyx Dashboard - Auth Service
============================

Password hashing, JWT session tokens and the session cookie.

Tokens are stateless: validity is decided by the signature and expiry.
Each login also records a row in the sessions table keyed by the token's
jti, which is informational only.
"""

import sqlite3
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import bcrypt
import jwt
from fastapi import Request, Response
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from pydantic import ValidationError

from zyx.core.constants import BCRYPT_MAX_PASSWORD_BYTES
from zyx.core.database import DatabaseManager, UserRecord
from zyx.core.logger import logger
from zyx.api.config import APIConfig
from zyx.api.models.auth import TokenPayload


# =============================================================================
# Constants
# =============================================================================

TOKEN_TYPE_ACCESS = "access"


def _password_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes; newer releases raise past it
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def get_client_ip(request: Request) -> str:
    """Get client IP from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


# =============================================================================
# Auth Service
# =============================================================================

class AuthService:
    """
    Handles authentication for the dashboard.

    Features:
    - Email/password registration with bcrypt hashes
    - JWT token generation and validation
    - Session bookkeeping in the sessions table
    """

    def __init__(self, config: APIConfig, db: DatabaseManager) -> None:
        self._config = config
        self._db = db

    # =========================================================================
    # Passwords
    # =========================================================================

    def hash_password(self, password: str) -> str:
        """Hash a password with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self._config.bcrypt_rounds)
        return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash. Malformed hashes never match."""
        try:
            return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    # =========================================================================
    # Registration & Login
    # =========================================================================

    def register(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> Tuple[Optional[UserRecord], str]:
        """
        Create an account.

        Returns:
            Tuple of (user or None, message)
        """
        if self._db.count_users_by_email(email) > 0:
            return None, "User already exists"

        try:
            user = self._db.create_user(
                email=email,
                password_hash=self.hash_password(password),
                first_name=first_name,
                last_name=last_name,
            )
        except sqlite3.IntegrityError:
            # Lost a race with a concurrent registration for the same email
            return None, "User already exists"

        logger.tree("Dashboard User Registered", [
            ("User ID", user["id"]),
            ("Email", email),
        ], emoji="📝")
        return user, "Registration successful"

    def authenticate(self, email: str, password: str) -> Optional[UserRecord]:
        """Look up a user and check the password."""
        user = self._db.get_user_by_email(email)
        if not user:
            return None
        if not self.verify_password(password, user.get("password_hash") or ""):
            return None
        return user

    def start_session(
        self,
        user: UserRecord,
        client_ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Tuple[str, datetime]:
        """Issue a token for a user and record the session."""
        token, expires_at, jti = self.create_token(user)
        browser = self._parse_user_agent(user_agent or "")
        self._db.create_session(
            jti,
            {
                "user_id": user["id"],
                "ip": client_ip or "unknown",
                "browser": browser,
                "created_at": time.time(),
            },
            expires_at.timestamp(),
        )

        logger.tree("Dashboard Login", [
            ("User ID", user["id"]),
            ("Email", user["email"]),
            ("IP", client_ip or "Unknown"),
            ("Browser", browser),
        ], emoji="🔐")
        return token, expires_at

    def login(
        self,
        email: str,
        password: str,
        client_ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Tuple[Optional[UserRecord], Optional[str], Optional[datetime]]:
        """
        Authenticate a user and generate a token.

        Returns:
            Tuple of (user, access_token, expires_at); all None on failure
        """
        user = self.authenticate(email, password)
        if user is None:
            logger.debug("Dashboard Login Failed", [
                ("Email", email),
                ("IP", client_ip or "Unknown"),
            ])
            return None, None, None

        token, expires_at = self.start_session(user, client_ip, user_agent)
        return user, token, expires_at

    def logout(self, token: Optional[str]) -> bool:
        """Drop the session row for a token. The token itself stays valid until expiry."""
        if not token:
            return False
        try:
            payload = jwt.decode(
                token,
                self._config.jwt_secret,
                algorithms=[self._config.jwt_algorithm],
                options={"verify_exp": False},
            )
        except InvalidTokenError:
            return False

        jti = payload.get("jti")
        if not jti:
            return False
        return self._db.delete_session(jti)

    def _parse_user_agent(self, user_agent: str) -> str:
        """Parse user agent string to extract browser name."""
        if not user_agent:
            return "Unknown"

        ua_lower = user_agent.lower()

        # Specific engines first: Edge and Opera also claim Chrome
        if "edg" in ua_lower:
            return "Edge"
        elif "opera" in ua_lower or "opr" in ua_lower:
            return "Opera"
        elif "chrome" in ua_lower and "safari" in ua_lower:
            return "Chrome"
        elif "firefox" in ua_lower:
            return "Firefox"
        elif "safari" in ua_lower:
            return "Safari"
        elif "msie" in ua_lower or "trident" in ua_lower:
            return "Internet Explorer"

        if "mobile" in ua_lower:
            if "android" in ua_lower:
                return "Android Browser"
            elif "iphone" in ua_lower or "ipad" in ua_lower:
                return "iOS Browser"
            return "Mobile Browser"

        return "Unknown"

    # =========================================================================
    # Token Management
    # =========================================================================

    def create_token(
        self,
        user: UserRecord,
        expires_delta: Optional[timedelta] = None,
    ) -> Tuple[str, datetime, str]:
        """
        Generate a signed access token for a user.

        Returns:
            Tuple of (token, expires_at, jti)
        """
        now = datetime.now(timezone.utc)
        if expires_delta is None:
            expires_delta = timedelta(days=self._config.jwt_expiry_days)
        expires_at = now + expires_delta
        jti = uuid.uuid4().hex

        payload = {
            "sub": user["id"],
            "email": user["email"],
            "firstName": user.get("first_name"),
            "lastName": user.get("last_name"),
            "iat": now,
            "exp": expires_at,
            "type": TOKEN_TYPE_ACCESS,
            "jti": jti,
        }

        token = jwt.encode(
            payload,
            self._config.jwt_secret,
            algorithm=self._config.jwt_algorithm,
        )

        return token, expires_at, jti

    def verify_token(self, token: Optional[str]) -> Optional[TokenPayload]:
        """
        Validate a token and return its payload.

        Returns:
            The payload, or None for a missing, malformed, forged or expired token
        """
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self._config.jwt_secret,
                algorithms=[self._config.jwt_algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except ExpiredSignatureError:
            return None
        except InvalidTokenError:
            return None

        if payload.get("type") != TOKEN_TYPE_ACCESS:
            return None

        try:
            return TokenPayload.model_validate(payload)
        except ValidationError:
            return None

    # =========================================================================
    # Cookie
    # =========================================================================

    def set_session_cookie(self, response: Response, token: str) -> None:
        """Attach the session cookie to a response."""
        response.set_cookie(
            key=self._config.cookie_name,
            value=token,
            max_age=self._config.cookie_max_age,
            path="/",
            httponly=True,
            secure=self._config.cookie_secure,
            samesite=self._config.cookie_samesite,
        )

    def clear_session_cookie(self, response: Response) -> None:
        """Expire the session cookie on the client."""
        response.set_cookie(
            key=self._config.cookie_name,
            value="",
            max_age=0,
            path="/",
            httponly=True,
            secure=self._config.cookie_secure,
            samesite=self._config.cookie_samesite,
        )


__all__ = ["AuthService", "TOKEN_TYPE_ACCESS", "get_client_ip"]
