"""
Zyx Dashboard - Health Router
=============================

Health check and system status endpoints.
"""

import os
import time
from datetime import datetime, timezone
from typing import Optional

import psutil
from fastapi import APIRouter, Depends

from zyx.core.logger import logger
from zyx.core.database import DatabaseManager
from zyx.api.dependencies import get_db
from zyx.api.models.base import APIResponse, SystemHealth


router = APIRouter(prefix="/health", tags=["Health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=APIResponse[dict])
async def health_check() -> APIResponse[dict]:
    """
    Basic health check endpoint.

    Returns simple status for load balancers and monitoring.
    """
    return APIResponse(
        success=True,
        data={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


@router.get("/detailed", response_model=APIResponse[SystemHealth])
async def detailed_health(db: DatabaseManager = Depends(get_db)) -> APIResponse[SystemHealth]:
    """Process and database health."""
    process = psutil.Process(os.getpid())

    uptime = int(time.time() - _start_time)
    memory_mb = process.memory_info().rss / (1024 * 1024)
    cpu_percent = process.cpu_percent(interval=0.1)

    db_connected = db.ping()
    db_size: Optional[float] = None
    if db_connected and os.path.exists(db.path):
        db_size = os.path.getsize(db.path) / (1024 * 1024)

    health = SystemHealth(
        status="healthy" if db_connected else "degraded",
        uptime_seconds=uptime,
        memory_mb=round(memory_mb, 2),
        cpu_percent=round(cpu_percent, 2),
        db_connected=db_connected,
        db_size_mb=round(db_size, 2) if db_size is not None else None,
        run_id=logger.run_id,
    )

    logger.debug("Health Check (Detailed)", [
        ("Status", health.status),
        ("Memory", f"{health.memory_mb}MB"),
        ("CPU", f"{health.cpu_percent}%"),
        ("Database", "Connected" if db_connected else "Disconnected"),
    ])

    return APIResponse(success=True, data=health)


__all__ = ["router"]
