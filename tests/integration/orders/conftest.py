import pytest

from modules.catalog.repositories import ItemDjangoRepository
from modules.customers.repositories import CustomerDjangoRepository
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.services import OrderService


@pytest.fixture()
def order_repo():
    return OrderDjangoRepository()


@pytest.fixture()
def service(order_repo):
    return OrderService(
        order_repository=order_repo,
        item_repository=ItemDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
    )


@pytest.fixture()
def place_order(service, keyboard):
    """Create a PENDING order through the service (one keyboard by default)."""

    def _place(lines=None, customer=None):
        lines = lines or [(keyboard, 1)]
        return service.create_order(
            CreateOrderDTO(
                customer_id=customer.id if customer else None,
                items=[
                    CreateOrderItemDTO(item_id=item.id, quantity=quantity)
                    for item, quantity in lines
                ],
            )
        )

    return _place
