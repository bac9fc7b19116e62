from rest_framework import serializers

from core_backend.base import BaseModelSerializer, TimestampedSerializer
from .models import CafeItem


class CafeItemSerializer(TimestampedSerializer):
    inStock = serializers.BooleanField(source="in_stock", read_only=True)

    class Meta:
        model = CafeItem
        fields = [
            "id",
            "name",
            "description",
            "price",
            "category",
            "quantity",
            "inStock",
        ] + TimestampedSerializer.TIMESTAMP_FIELDS


class CafeItemUpdateSerializer(CafeItemSerializer):
    """
    Edits the catalogue fields of a café item. Stock counts are left to
    InventoryLedger, so ``quantity`` is read-only here and only the fields
    that were sent are written back.
    """

    class Meta(CafeItemSerializer.Meta):
        read_only_fields = ["quantity"]

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save(update_fields=[*validated_data, "updated_at"])
        instance.refresh_from_db()
        return instance


class CafeItemSummarySerializer(BaseModelSerializer):
    """Compact representation embedded in order line items."""

    class Meta:
        model = CafeItem
        fields = ["id", "name", "price", "category"]


class RestockSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
