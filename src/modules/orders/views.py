"""Order API views.

Exposes ``OrderService`` via HTTP using a DRF ViewSet.  Domain exceptions
are caught and translated into status codes here; responses are rendered
from ``OrderOutputDTO``.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.catalog.repositories import ItemDjangoRepository
from modules.customers.repositories import CustomerDjangoRepository
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO, OrderOutputDTO
from modules.orders.exceptions import (
    ConflictingTransition,
    InvalidTransition,
    OrderNotFound,
    ReferenceNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    order_queryset,
)
from modules.orders.serializers import (
    CancelOrderSerializer,
    CreateOrderSerializer,
    UpdateOrderStatusSerializer,
)
from modules.orders.services import OrderService

ORDER_NOT_FOUND = {"detail": "Order not found."}


def _render(order) -> dict:
    return OrderOutputDTO.from_entity(order).model_dump(mode="json")


class OrderViewSet(GenericViewSet):
    """Create, inspect, cancel and ship/deliver orders.

    Orders are never deleted; there is no destroy action.
    """

    filterset_class = OrderFilter
    ordering_fields = ["created_at", "updated_at", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            item_repository=ItemDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
        )

    def get_queryset(self):
        return order_queryset()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        dto = CreateOrderDTO(
            customer_id=data.get("customer_id"),
            items=[
                CreateOrderItemDTO(item_id=line["item_id"], quantity=line["quantity"])
                for line in data["items"]
            ],
        )

        try:
            order = self._service.create_order(dto)
        except ReferenceNotFound as exc:
            return Response(
                {
                    "detail": str(exc),
                    "missing_item_ids": [str(i) for i in exc.missing_item_ids],
                    "customer_id": str(exc.customer_id) if exc.customer_id else None,
                },
                status=status.HTTP_404_NOT_FOUND,
            )

        return Response(_render(order), status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?status=pending

        Filtering and ordering come from ``filter_backends``; results are
        paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response([_render(order) for order in page])
        return Response([_render(order) for order in queryset])

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk)
        except OrderNotFound:
            return Response(ORDER_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(_render(order))

    # ------------------------------------------------------------------
    # Status changes
    # ------------------------------------------------------------------

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/

        Accepts ``{"status": "SHIPPED" | "DELIVERED", "notes": "..."}``.
        Cancellation has its own endpoint and PROCESSING is set by the
        sweeper only.
        """
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            order = self._service.update_status(pk, data["status"], data["notes"])
        except OrderNotFound:
            return Response(ORDER_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except InvalidTransition as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except ConflictingTransition as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(_render(order))

    @action(detail=True, methods=["post", "patch"])
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """POST/PATCH /api/v1/orders/{pk}/cancel/

        Only a PENDING order can be cancelled.
        """
        serializer = CancelOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.cancel_order(pk, serializer.validated_data["notes"])
        except OrderNotFound:
            return Response(ORDER_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except InvalidTransition as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except ConflictingTransition as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(_render(order))
