from rest_framework import serializers

from core_backend.base import TimestampedSerializer
from customers.serializers import CustomerSummarySerializer
from orders.models import Order

from .order_item_serializers import LineItemSerializer, OrderItemSerializer


class OrderSerializer(TimestampedSerializer):
    customer = CustomerSummarySerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    totalAmount = serializers.DecimalField(source="total_amount", max_digits=12, decimal_places=2, read_only=True)
    paymentStatus = serializers.CharField(source="payment_status", read_only=True)
    paidAt = serializers.DateTimeField(source="paid_at", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer",
            "items",
            "totalAmount",
            "paymentStatus",
            "paidAt",
        ] + TimestampedSerializer.TIMESTAMP_FIELDS
        select_related_fields = ["customer"]
        prefetch_related_fields = [
            "items__cafe_item",
            "items__game_session__game",
            "items__game_session__customer",
        ]


class _LineItemsMixin:
    def line_items(self):
        line_serializer = LineItemSerializer()
        return [line_serializer.to_line_item(line) for line in self.validated_data.get("items", [])]


class OrderCreateSerializer(_LineItemsMixin, serializers.Serializer):
    customerId = serializers.UUIDField()
    items = LineItemSerializer(many=True, required=False)


class AddItemsSerializer(_LineItemsMixin, serializers.Serializer):
    items = LineItemSerializer(many=True, allow_empty=False)
