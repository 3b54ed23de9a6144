"""Order repository interface (the Order Store).

The Service Layer, the lifecycle engine's callers and the sweeper depend
exclusively on this contract.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.lifecycle import OrderDraft
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The aggregate includes its OrderItem lines and OrderStatusHistory
    records.  Every write is atomic and publishes the aggregate's pending
    domain events only once it has committed.
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Order with its customer, lines and history, or ``None``."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """Orders matching *filters*, newest first."""

    @abstractmethod
    def add(self, draft: OrderDraft) -> Order:
        """Insert a new order together with all of its lines."""

    @abstractmethod
    def put(self, order: Order) -> Order:
        """Write the order's status if nobody else changed it since it was
        loaded.

        Raises:
            ConflictingTransition: the stored version no longer matches.
        """

    @abstractmethod
    def scan_by_status(self, status: str) -> List[Order]:
        """Point-in-time snapshot of every order currently in *status*."""
