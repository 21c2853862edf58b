"""
Zyx Dashboard - Logger Module
=============================

Custom tree-style logging with configurable timezone and daily rotation.

DESIGN:
    This logger provides structured, hierarchical output that's easy to scan
    visually. Tree-style formatting groups related information together.

    Key features:
    - Tree-style formatting for structured data visualization
    - Timestamps in the configured timezone (ZYX_TIMEZONE, default UTC)
    - Daily log rotation in dated folders
    - 7-day log retention with automatic cleanup
    - Session tracking with unique run IDs
    - Discord webhook integration for error alerts
"""

import asyncio
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

import aiohttp
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


# =============================================================================
# Constants
# =============================================================================

LOG_RETENTION_DAYS = 7
"""Number of days to retain log directories before cleanup."""

Details = Optional[List[Tuple[str, str]]]


def _resolve_timezone() -> ZoneInfo:
    """Timezone for log timestamps, falling back to UTC on bad names."""
    try:
        return ZoneInfo(os.getenv("ZYX_TIMEZONE", "UTC"))
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


# =============================================================================
# Tree Logger Class
# =============================================================================

class TreeLogger:
    """
    Custom logger with tree-style formatting.

    DESIGN:
        Uses tree-style output (├─ └─) for visual hierarchy.
        Separate error log file for quick troubleshooting.
        Optional webhook notifications for errors with details.

    Attributes:
        run_id: Unique identifier for this process.
        log_file: Path to the main log file.
        error_file: Path to the error-only log file.
    """

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(self, logs_dir: Optional[Path] = None) -> None:
        """
        Initialize logger with run ID and daily log file.

        Creates dated log directory, cleans up old logs, and writes
        the session header.
        """
        self.run_id: str = str(uuid.uuid4())[:8]
        self._webhook_url: Optional[str] = None
        self._app_name: str = "Zyx"
        self.tz: ZoneInfo = _resolve_timezone()
        self.logs_dir: Path = logs_dir or Path(os.getenv("ZYX_LOG_DIR", "logs"))

        today = datetime.now(self.tz).strftime("%Y-%m-%d")
        self.log_dir = self.logs_dir / today
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.log_dir / f"{self._app_name}-{today}.log"
        self.error_file = self.log_dir / f"{self._app_name}-Errors-{today}.log"

        self._cleanup_old_logs()
        self._write_session_header()

    def set_webhook(self, url: Optional[str]) -> None:
        """
        Set webhook URL for error notifications.

        Args:
            url: Discord webhook URL for error alerts.
        """
        self._webhook_url = url

    # =========================================================================
    # Log Cleanup
    # =========================================================================

    def _cleanup_old_logs(self) -> None:
        """
        Remove log directories older than the retention period.

        Only directories named YYYY-MM-DD are considered.
        """
        if not self.logs_dir.exists():
            return

        now = datetime.now()
        deleted = 0

        for item in self.logs_dir.iterdir():
            if not item.is_dir():
                continue
            try:
                dir_date = datetime.strptime(item.name, "%Y-%m-%d")
            except ValueError:
                continue  # not a dated folder
            if (now - dir_date).days > LOG_RETENTION_DAYS:
                for f in item.iterdir():
                    f.unlink()
                item.rmdir()
                deleted += 1

        if deleted > 0:
            print(f"[LOG CLEANUP] Removed {deleted} old log directories")

    # =========================================================================
    # Session Header
    # =========================================================================

    def _write_session_header(self) -> None:
        """Write a session start marker with the run ID."""
        header = f"""
============================================================
NEW SESSION - RUN ID: {self.run_id}
[{datetime.now(self.tz).strftime("%I:%M:%S %p %Z")}]
============================================================
"""
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(header)

    # =========================================================================
    # Core Logging
    # =========================================================================

    def _get_timestamp(self) -> str:
        """Formatted timestamp like "[02:30:45 PM UTC]"."""
        return datetime.now(self.tz).strftime("[%I:%M:%S %p %Z]")

    def _write(
        self,
        message: str,
        emoji: str = "",
        include_timestamp: bool = True,
        is_error: bool = False,
    ) -> None:
        """
        Write log message to console and file.

        Args:
            message: Log message content.
            emoji: Optional emoji prefix.
            include_timestamp: Whether to prepend timestamp.
            is_error: Whether to also write to error log.
        """
        if include_timestamp:
            timestamp = self._get_timestamp()
            full_message = f"{timestamp} {emoji} {message}" if emoji else f"{timestamp} {message}"
        else:
            full_message = f"{emoji} {message}" if emoji else message

        print(full_message)

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(f"{full_message}\n")

        if is_error:
            with open(self.error_file, "a", encoding="utf-8") as f:
                f.write(f"{full_message}\n")

    def _write_details(self, details: List[Tuple[str, str]], is_error: bool = False) -> None:
        """Write (key, value) pairs with tree connectors."""
        for i, (key, value) in enumerate(details):
            prefix = "└─" if i == len(details) - 1 else "├─"
            self._write(f"  {prefix} {key}: {value}", include_timestamp=False, is_error=is_error)

    def _log(self, msg: str, emoji: str, details: Details, is_error: bool = False) -> None:
        """Write a single-line entry, or a tree when details are given."""
        self._write(msg, emoji, is_error=is_error)
        if details:
            self._write_details(details, is_error=is_error)

    # =========================================================================
    # Tree Formatting
    # =========================================================================

    def tree(
        self,
        title: str,
        items: List[Tuple[str, str]],
        emoji: str = "📦",
    ) -> None:
        """
        Log structured data in tree format.

        Args:
            title: Main heading for the tree.
            items: List of (key, value) tuples to display.
            emoji: Emoji prefix for the title.

        Example output:
            [02:30:45 PM UTC] 🎫 Ticket Created
              ├─ Ticket ID: 3f2a...
              ├─ Server ID: 1234
              └─ Creator: alice
        """
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write("\n")

        self._write(title, emoji=emoji)
        self._write_details(items)

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write("\n")

    def tree_nested(
        self,
        title: str,
        sections: List[Tuple[str, List[Tuple[str, str]]]],
        emoji: str = "📦",
    ) -> None:
        """
        Log nested tree structure with sections.

        Args:
            title: Main heading for the tree.
            sections: List of (section_name, items) tuples.
            emoji: Emoji prefix for the title.
        """
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write("\n")

        self._write(title, emoji=emoji)

        for i, (section_name, items) in enumerate(sections):
            is_last_section = i == len(sections) - 1
            section_prefix = "└─" if is_last_section else "├─"
            self._write(f"  {section_prefix} {section_name}", include_timestamp=False)

            for j, (key, value) in enumerate(items):
                connector = "   " if is_last_section else "│  "
                item_prefix = "└─" if j == len(items) - 1 else "├─"
                self._write(f"  {connector} {item_prefix} {key}: {value}", include_timestamp=False)

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write("\n")

    # =========================================================================
    # Log Levels
    # =========================================================================

    def debug(self, msg: str, details: Details = None) -> None:
        """Log debug message (only if DEBUG env var set)."""
        if os.getenv("DEBUG"):
            self._log(msg, "🔍", details)

    def info(self, msg: str, details: Details = None) -> None:
        """Log informational message."""
        self._log(msg, "ℹ️", details)

    def success(self, msg: str, details: Details = None) -> None:
        """Log success message."""
        self._log(msg, "✅", details)

    def warning(self, msg: str, details: Details = None) -> None:
        """Log warning message."""
        self._log(msg, "⚠️", details)

    def error(self, msg: str, details: Details = None) -> None:
        """
        Log error message with optional structured details.

        DESIGN:
            Errors with details use tree format for visibility.
            Sends to the webhook if configured and an event loop is running.
            Always written to both main and error log files.

        Args:
            msg: Error message or title.
            details: Optional list of (key, value) detail tuples.
        """
        if details:
            self._write("", is_error=True)
            self._log(msg, "❌", details, is_error=True)
            self._write("", include_timestamp=False, is_error=True)
            self._schedule_webhook(msg, details)
        else:
            self._write(msg, "❌", is_error=True)

    def critical(self, msg: str, details: Details = None) -> None:
        """Log critical error message."""
        self._log(msg, "🚨", details, is_error=True)
        if details:
            self._schedule_webhook(msg, details)

    # =========================================================================
    # Webhook Integration
    # =========================================================================

    def _schedule_webhook(self, title: str, details: List[Tuple[str, str]]) -> None:
        """Fire-and-forget webhook delivery on the running loop, if any."""
        if not self._webhook_url:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return  # called from sync code outside the server loop
        loop.create_task(self._send_webhook_error(title, details))

    async def _send_webhook_error(
        self,
        title: str,
        details: List[Tuple[str, str]],
    ) -> None:
        """
        Send error notification to Discord webhook.

        Args:
            title: Error title for the embed.
            details: List of (key, value) detail tuples.
        """
        if not self._webhook_url:
            return

        try:
            description = "\n".join([f"**{k}:** {v}" for k, v in details])
            payload = {
                "embeds": [{
                    "title": f"❌ {title}",
                    "description": description,
                    "color": 0xFF0000,
                    "timestamp": datetime.now(self.tz).isoformat(),
                    "footer": {"text": f"Run ID: {self.run_id}"},
                }]
            }

            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self._webhook_url,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=10),
                ) as resp:
                    if resp.status != 204:
                        print(f"Webhook error: {resp.status}")

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            print(f"Failed to send webhook: {e}")


# =============================================================================
# Global Instance
# =============================================================================

logger = TreeLogger()
"""Global logger instance for use throughout the application."""


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "logger",
    "TreeLogger",
]
