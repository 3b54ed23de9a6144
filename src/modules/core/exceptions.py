"""Cross-module exceptions.

``StoreUnavailable`` is raised by repositories when the database cannot be
reached.  Views translate it into ``503``; ``api_exception_handler`` is the
fallback for code paths that let it escape.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)

STORE_UNAVAILABLE_DETAIL = "Storage is temporarily unavailable."


class StoreUnavailable(Exception):
    """The backing store could not be reached (transport or storage failure)."""


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """DRF's default handler, plus ``StoreUnavailable`` -> 503."""
    if isinstance(exc, StoreUnavailable):
        view = context.get("view")
        logger.error(
            "api.store_unavailable",
            view=type(view).__name__ if view is not None else None,
            error=str(exc),
        )
        return Response(
            {"detail": STORE_UNAVAILABLE_DETAIL},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return exception_handler(exc, context)
