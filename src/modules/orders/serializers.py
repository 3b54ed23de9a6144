"""Order DRF serializers (request validation).

Responses are rendered from ``OrderOutputDTO``; these serializers only
validate incoming payloads before they become DTOs.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import OrderStatus


class CreateOrderItemSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    items = CreateOrderItemSerializer(many=True, allow_empty=False)


class CancelOrderSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    notes = serializers.CharField(required=False, default="", allow_blank=True)

    def validate_status(self, value: str) -> str:
        value = value.upper()
        if value not in OrderStatus.values:
            raise serializers.ValidationError(f"Unknown status '{value}'.")
        return value
