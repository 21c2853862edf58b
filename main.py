#!/usr/bin/env python3
"""
Zyx Dashboard - API Entry Point
===============================

Loads .env, validates configuration, and serves the dashboard API
with uvicorn.
"""

import sys

from dotenv import load_dotenv

# Before zyx imports: the logger reads ZYX_LOG_DIR and ZYX_TIMEZONE on import
load_dotenv()

import uvicorn

from zyx import __version__
from zyx.core.config import ConfigValidationError, validate_and_log_config
from zyx.core.logger import logger
from zyx.api.app import create_app
from zyx.api.config import get_api_config


def main() -> None:
    """
    Main entry point for the dashboard API.

    Raises:
        SystemExit: If configuration is invalid, including a missing
            session secret
    """
    logger.tree("ZYX DASHBOARD STARTING", [
        ("Version", __version__),
    ], emoji="🔥")

    try:
        validate_and_log_config()
        config = get_api_config()
    except ConfigValidationError as e:
        logger.critical("Invalid Configuration", [
            ("Error", str(e)),
        ])
        sys.exit(1)

    app = create_app(config)

    logger.tree("Serving API", [
        ("Host", config.host),
        ("Port", str(config.port)),
        ("Debug", "Yes" if config.debug else "No"),
    ], emoji="🌐")

    uvicorn.run(app, host=config.host, port=config.port, log_level="info" if config.debug else "warning")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("🛑 Dashboard stopped by user (Ctrl+C)")
