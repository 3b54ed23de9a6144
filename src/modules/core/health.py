"""Service probes shared by the ``/health`` endpoint and the heartbeat task."""

from __future__ import annotations

import time
from typing import Any, Dict, Tuple

import structlog
from django.core.cache import cache
from django.db import DatabaseError, connections

logger = structlog.get_logger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.monotonic() - start) * 1000, 2)


def probe_database() -> Dict[str, Any]:
    start = time.monotonic()
    try:
        conn = connections["default"]
        conn.ensure_connection()
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as exc:
        logger.error("health.database_down", error=str(exc))
        return {"status": "down"}
    return {"status": "up", "response_time_ms": _elapsed_ms(start)}


def probe_cache() -> Dict[str, Any]:
    start = time.monotonic()
    try:
        cache.set("_health_check", "ok", 10)
        if cache.get("_health_check") != "ok":
            raise ConnectionError("Cache read failed")
    except Exception as exc:  # cache backends raise client-specific errors
        logger.error("health.cache_down", error=str(exc))
        return {"status": "down"}
    return {"status": "up", "response_time_ms": _elapsed_ms(start)}


def check_services() -> Tuple[bool, Dict[str, Dict[str, Any]]]:
    """Probe every backing service; returns ``(healthy, details)``."""
    services = {
        "database": probe_database(),
        "cache": probe_cache(),
    }
    healthy = all(service["status"] == "up" for service in services.values())
    return healthy, services
