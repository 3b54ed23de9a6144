"""Catalog API views.

Exposes ``ItemService`` over HTTP.  Domain exceptions are caught and
translated into status codes here; nothing generic is swallowed.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.catalog.dtos import CreateItemBatchDTO, CreateItemDTO, UpdateItemDTO
from modules.catalog.exceptions import ItemNotFound
from modules.catalog.filters import ItemFilter
from modules.catalog.models import Item
from modules.catalog.repositories import ItemDjangoRepository
from modules.catalog.serializers import ItemSerializer
from modules.catalog.services import ItemService

ITEM_NOT_FOUND = {"detail": "Item not found."}


class ItemViewSet(ListModelMixin, GenericViewSet):
    """Catalog item CRUD plus batch create/delete.

    Listing goes through the filter backends on the live-item queryset;
    every write goes through ``ItemService``.
    """

    filterset_class = ItemFilter
    search_fields = ["name", "description"]
    ordering_fields = ["name", "price", "created_at"]
    ordering = ["name"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    serializer_class = ItemSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ItemService(repository=ItemDjangoRepository())

    def get_queryset(self):
        return Item.objects.alive()

    # ------------------------------------------------------------------
    # Retrieve
    # ------------------------------------------------------------------

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/items/{pk}/"""
        try:
            item = self._service.get_item(pk)
        except ItemNotFound:
            return Response(ITEM_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(ItemSerializer(item).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/items/"""
        data = request.data
        try:
            dto = CreateItemDTO(
                name=data.get("name", ""),
                price=data.get("price", 0),
                description=data.get("description", ""),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        item = self._service.create_item(dto)
        return Response(ItemSerializer(item).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/items/{pk}/

        Re-pricing an item only affects orders created afterwards.
        """
        data = request.data
        try:
            dto = UpdateItemDTO(
                name=data.get("name"),
                price=data.get("price"),
                description=data.get("description"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            item = self._service.update_item(pk, dto)
        except ItemNotFound:
            return Response(ITEM_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(ItemSerializer(item).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/items/{pk}/"""
        try:
            self._service.delete_item(pk)
        except ItemNotFound:
            return Response(ITEM_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    @action(detail=False, methods=["post", "delete"], url_path="batch")
    def batch(self, request: Request) -> Response:
        """POST/DELETE /api/v1/items/batch/

        POST takes a list of items (bare, or under ``"items"``); DELETE
        takes a list of ids (bare, or under ``"ids"``).  Unknown ids are
        ignored on delete.
        """
        payload = request.data
        if request.method == "DELETE":
            ids = payload.get("ids") if isinstance(payload, dict) else payload
            if not isinstance(ids, list) or not ids:
                return Response(
                    {"detail": "A non-empty list of ids is required."},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            self._service.delete_items([str(i) for i in ids])
            return Response(status=status.HTTP_204_NO_CONTENT)

        entries = payload.get("items") if isinstance(payload, dict) else payload
        try:
            dto = CreateItemBatchDTO(items=entries or [])
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        items = self._service.create_items(dto)
        return Response(
            ItemSerializer(items, many=True).data,
            status=status.HTTP_201_CREATED,
        )
