"""Catalog DRF serializers (read side)."""

from __future__ import annotations

from rest_framework import serializers

from modules.catalog.models import Item


class ItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = Item
        fields = [
            "id",
            "name",
            "description",
            "price",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
