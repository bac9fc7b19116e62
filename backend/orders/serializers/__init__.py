"""
Orders serializers package.
"""

# Order item serializers
from .order_item_serializers import (
    LineItemSerializer,
    OrderItemSerializer,
    UpdateOrderItemSerializer,
)

# Order serializers
from .order_serializers import (
    AddItemsSerializer,
    OrderCreateSerializer,
    OrderSerializer,
)

__all__ = [
    # Order items
    'LineItemSerializer',
    'OrderItemSerializer',
    'UpdateOrderItemSerializer',
    # Orders
    'AddItemsSerializer',
    'OrderCreateSerializer',
    'OrderSerializer',
]
