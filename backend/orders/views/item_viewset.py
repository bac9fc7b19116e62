from rest_framework import status

from core_backend.base import BaseViewSet
from orders.models import OrderItem
from orders.serializers import AddItemsSerializer, OrderItemSerializer, UpdateOrderItemSerializer
from orders.services import OrderEngine

from .order_viewset import order_response


class OrderItemViewSet(BaseViewSet):
    """
    Lines of a single order. Every mutation goes through the order engine and
    answers with the whole updated order.
    """

    queryset = OrderItem.objects.all()
    serializer_class = OrderItemSerializer
    ordering = ["item_sequence"]
    resource_name = "Order item"

    @property
    def failure_messages(self):
        messages = super().failure_messages
        messages.update(
            {
                "list": "Failed to fetch order items",
                "create": "Failed to add items to order",
                "update": "Failed to update item quantity",
                "destroy": "Failed to remove items from order",
            }
        )
        return messages

    def get_queryset(self):
        """
        Only the lines of the order named in the URL. An unknown or malformed
        order id is a NotFoundError.
        """
        order = OrderEngine().get_order(self.kwargs["order_pk"])
        return super().get_queryset().filter(order=order)

    def create(self, request, *args, **kwargs):
        serializer = AddItemsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderEngine().add_items(self.kwargs["order_pk"], serializer.line_items())
        return order_response(order, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        serializer = UpdateOrderItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderEngine().update_item_quantity(
            self.kwargs["order_pk"], kwargs["pk"], serializer.validated_data["quantity"]
        )
        return order_response(order)

    def destroy(self, request, *args, **kwargs):
        order = OrderEngine().remove_item(self.kwargs["order_pk"], kwargs["pk"])
        return order_response(order)
