import structlog
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils import timezone

from modules.core.health import check_services

logger = structlog.get_logger(__name__)


def health_check(request: HttpRequest) -> JsonResponse:
    healthy, services = check_services()
    overall = "healthy" if healthy else "unhealthy"

    logger.info("health_check_completed", status=overall)

    return JsonResponse(
        {
            "status": overall,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )


def root(request: HttpRequest) -> HttpResponse:
    return HttpResponse(
        "Order Processing System is running", content_type="text/plain"
    )
