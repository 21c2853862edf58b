"""
Zyx Dashboard - API Services
============================

Service layer for the API.
"""

# Authentication
from .auth import AuthService, TOKEN_TYPE_ACCESS, get_client_ip

__all__ = [
    "AuthService",
    "TOKEN_TYPE_ACCESS",
    "get_client_ip",
]
