"""Reconciliation sweeper: PENDING -> PROCESSING in bulk.

A run has two phases.  First the store is asked for a snapshot of every
PENDING order; then each candidate is advanced and written on its own.
An order cancelled (or otherwise changed) between the two phases loses the
version check and is skipped.  A failure to write one order is logged and
counted and never stops the rest of the batch.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Dict

import structlog
from django.db import DatabaseError

from modules.core.exceptions import StoreUnavailable
from modules.orders.constants import OrderStatus
from modules.orders.exceptions import ConflictingTransition

if TYPE_CHECKING:
    from modules.orders.lifecycle import OrderLifecycle
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SweepResult:
    advanced: int = 0
    skipped: int = 0
    failed: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class OrderSweeper:
    def __init__(
        self,
        order_repository: IOrderRepository,
        lifecycle: OrderLifecycle,
    ) -> None:
        self._repo = order_repository
        self._lifecycle = lifecycle

    def run(self) -> SweepResult:
        """Advance every order that is still PENDING.

        Raises:
            StoreUnavailable: the candidate scan itself failed.
        """
        candidates = self._repo.scan_by_status(OrderStatus.PENDING)
        log = logger.bind(candidates=len(candidates))
        if not candidates:
            log.info("order.sweep_idle")
            return SweepResult()

        advanced = skipped = failed = 0
        for order in candidates:
            order_log = log.bind(order_id=str(order.id))
            try:
                if not self._lifecycle.advance_pending_to_processing(order):
                    skipped += 1
                    order_log.info("order.sweep_skipped", reason="not_pending")
                    continue
                self._repo.put(order)
            except ConflictingTransition:
                skipped += 1
                order_log.info("order.sweep_skipped", reason="conflict")
            except (StoreUnavailable, DatabaseError):
                failed += 1
                order_log.exception("order.sweep_failed")
            else:
                advanced += 1

        result = SweepResult(advanced=advanced, skipped=skipped, failed=failed)
        log.info("order.sweep_finished", **result.as_dict())
        return result
