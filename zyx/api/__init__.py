"""
Zyx Dashboard - API Package
===========================

FastAPI backend for the Zyx dashboard.
"""

from zyx.api.app import create_app
from zyx.api.config import APIConfig, get_api_config, load_api_config

__all__ = ["create_app", "APIConfig", "get_api_config", "load_api_config"]
