"""Shared utilities for schema validation."""

from datetime import datetime, timezone
from typing import Any

from loguru import logger

RECORDING_FIELDS = ("resource_id", "session_id", "uid")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_mongo_datetime(v: Any) -> Any:
    """Parse MongoDB Extended JSON datetime format or return as-is if already datetime.

    MongoDB Extended JSON format: {'$date': '2024-11-01T08:00:00Z'}
    This can occur when data is inserted via mongoimport or other tools.
    """
    if isinstance(v, datetime):
        return v
    if isinstance(v, dict) and "$date" in v:
        return datetime.fromisoformat(v["$date"].replace("Z", "+00:00"))
    return v


def parse_recording_triple(v: Any) -> Any:
    """Collapse a stored recording triple to ``None`` unless all three parts are set.

    Documents written by hand or by older deployments may carry only some of
    ``resource_id``/``session_id``/``uid``; such a recording cannot be stopped
    and is treated as absent.
    """
    if not isinstance(v, dict):
        return v
    present = [name for name in RECORDING_FIELDS if v.get(name) not in (None, "", 0)]
    if len(present) == len(RECORDING_FIELDS):
        return v
    if present:
        logger.warning(f"Ignoring partial recording state, present fields: {present}")
    return None
