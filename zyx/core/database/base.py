"""
Zyx Dashboard - Database Base Module
====================================

Shared helpers for row encoding and decoding.
"""

import json
import sqlite3
import uuid
from typing import Any, Dict, Iterable, Optional

from zyx.core.logger import logger


# =============================================================================
# Helper Functions
# =============================================================================

def _safe_json_loads(value: Optional[str], default: Any = None) -> Any:
    """Safely parse JSON, returning default on error."""
    if not value:
        return default if default is not None else []
    try:
        return json.loads(value)
    except (json.JSONDecodeError, ValueError):
        logger.warning(f"Corrupted JSON in database: {value[:50] if len(value) > 50 else value}")
        return default if default is not None else []


def _new_id() -> str:
    """Random identifier for new rows."""
    return str(uuid.uuid4())


def _decode_row(
    row: Optional[sqlite3.Row],
    json_fields: Iterable[str] = (),
    bool_fields: Iterable[str] = (),
) -> Optional[Dict[str, Any]]:
    """
    Convert a sqlite3.Row into a plain dict.

    JSON text columns become lists and 0/1 integer columns become bools.
    """
    if row is None:
        return None
    record = dict(row)
    for name in json_fields:
        if name in record:
            record[name] = _safe_json_loads(record[name])
    for name in bool_fields:
        if name in record and record[name] is not None:
            record[name] = bool(record[name])
    return record


def _encode_value(name: str, value: Any, json_fields: Iterable[str], bool_fields: Iterable[str]) -> Any:
    """Convert a Python value into its stored form."""
    if name in json_fields:
        return json.dumps(list(value) if value is not None else [])
    if name in bool_fields:
        return int(bool(value))
    return value


__all__ = ["_safe_json_loads", "_new_id", "_decode_row", "_encode_value"]
