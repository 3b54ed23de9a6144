"""Translation of database transport failures into ``StoreUnavailable``."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar, cast

import structlog
from django.db import InterfaceError, OperationalError

from modules.core.exceptions import StoreUnavailable

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def translate_store_errors(func: F) -> F:
    """Re-raise connection-level database errors as ``StoreUnavailable``.

    Integrity and programming errors are left alone: they are bugs or
    constraint violations, not availability problems.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error(
                "store.unavailable",
                operation=func.__qualname__,
                error=str(exc),
            )
            raise StoreUnavailable(str(exc)) from exc

    return cast(F, wrapper)
