from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.catalog.models import Item
from modules.customers.models import Customer
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.models import Order
from modules.orders.tasks import build_order_service

CATALOG = [
    ("Monitor 27\"", "Electronics", Decimal("1299.90")),
    ("Mechanical Keyboard", "Electronics", Decimal("399.90")),
    ("Gaming Mouse", "Electronics", Decimal("249.90")),
    ("Laptop 14\"", "Electronics", Decimal("3999.00")),
    ("Headset", "Electronics", Decimal("299.90")),
    ("Office Desk", "Furniture", Decimal("899.00")),
    ("Ergonomic Chair", "Furniture", Decimal("1499.00")),
    ("Bookshelf", "Furniture", Decimal("699.00")),
    ("A4 Paper", "Office", Decimal("29.90")),
    ("Blue Pen", "Office", Decimal("4.90")),
    ("Notebook", "Office", Decimal("19.90")),
    ("Stapler", "Office", Decimal("39.90")),
]

CUSTOMERS = [
    ("Ana Souza", "ana@example.com"),
    ("Bruno Lima", "bruno@example.com"),
    ("Carla Mendes", "carla@example.com"),
    ("Daniel Costa", "daniel@example.com"),
    ("Helena Ferreira", "helena@example.com"),
]


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=20)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        items = self._seed_items()
        customers = self._seed_customers()
        orders_created = self._seed_orders(customers, items, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"items={len(items)}, "
                f"customers={len(customers)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_items(self) -> list[Item]:
        items = []
        for name, category, price in CATALOG:
            item, _ = Item.objects.get_or_create(
                name=name,
                deleted_at=None,
                defaults={"description": category, "price": price},
            )
            items.append(item)
        return items

    def _seed_customers(self) -> list[Customer]:
        customers = []
        for name, email in CUSTOMERS:
            customer, _ = Customer.objects.get_or_create(
                email=email,
                defaults={"name": name, "is_active": True},
            )
            customers.append(customer)
        return customers

    def _seed_orders(
        self, customers: list[Customer], items: list[Item], count: int
    ) -> int:
        """Orders go through the real service so lines, history and events
        look exactly like API-created ones.  Some are cancelled, the rest
        stay PENDING for the sweeper.
        """
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        service = build_order_service()
        for _ in range(count):
            customer = random.choice(customers + [None])
            lines = [
                CreateOrderItemDTO(item_id=item.id, quantity=random.randint(1, 3))
                for item in random.sample(items, k=random.randint(1, 4))
            ]
            order = service.create_order(
                CreateOrderDTO(
                    customer_id=customer.id if customer else None,
                    items=lines,
                )
            )
            if random.random() < 0.2:
                service.cancel_order(str(order.id), notes="Seeded cancellation")

        pending = Order.objects.filter(status=OrderStatus.PENDING).count()
        self.stdout.write(f"{pending} orders left PENDING for the sweeper.")
        return count
