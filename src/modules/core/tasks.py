"""Periodic infrastructure tasks."""

import structlog
from celery import shared_task

from modules.core.health import check_services

logger = structlog.get_logger(__name__)


@shared_task(name="core.log_health_status")
def log_health_status() -> dict:
    """Heartbeat: probe backing services and log one line per service."""
    healthy, services = check_services()
    for name, details in services.items():
        if details["status"] == "up":
            logger.info("heartbeat.service_up", service=name, **details)
        else:
            logger.warning("heartbeat.service_down", service=name)
    return {"status": "healthy" if healthy else "unhealthy", "services": services}
