from rest_framework import serializers

from core_backend.base import BaseModelSerializer
from games.serializers import GameSessionSerializer
from inventory.serializers import CafeItemSummarySerializer
from orders.models import OrderItem
from orders.services import LineItemRequest


class OrderItemSerializer(BaseModelSerializer):
    itemType = serializers.CharField(source="item_type", read_only=True)
    itemId = serializers.UUIDField(source="item_id", read_only=True)
    item = serializers.SerializerMethodField()
    priceAtSale = serializers.DecimalField(source="price_at_sale", max_digits=12, decimal_places=2, read_only=True)
    costAtSale = serializers.DecimalField(
        source="cost_at_sale", max_digits=12, decimal_places=2, read_only=True, allow_null=True
    )
    itemSequence = serializers.IntegerField(source="item_sequence", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "itemType",
            "itemId",
            "item",
            "quantity",
            "priceAtSale",
            "costAtSale",
            "itemSequence",
            "createdAt",
        ]
        select_related_fields = ["cafe_item", "game_session__game", "game_session__customer"]
        prefetch_related_fields = []

    def get_item(self, obj):
        """The billed entity, or None once it has been deleted."""
        if obj.item_type == OrderItem.ItemType.GAME_SESSION:
            if obj.game_session is None:
                return None
            return GameSessionSerializer(obj.game_session, context=self.context).data
        if obj.cafe_item is None:
            return None
        return CafeItemSummarySerializer(obj.cafe_item, context=self.context).data


class LineItemSerializer(serializers.Serializer):
    itemId = serializers.UUIDField()
    itemType = serializers.ChoiceField(choices=OrderItem.ItemType.choices)
    quantity = serializers.IntegerField(min_value=1, default=1)

    def to_line_item(self, data=None) -> LineItemRequest:
        data = data if data is not None else self.validated_data
        return LineItemRequest(
            item_id=data["itemId"],
            item_type=data["itemType"],
            quantity=data["quantity"],
        )


class UpdateOrderItemSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
