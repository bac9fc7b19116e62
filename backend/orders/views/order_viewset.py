from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from orders.models import Order
from orders.serializers import OrderCreateSerializer, OrderSerializer
from orders.services import OrderEngine


def order_response(order, status_code=status.HTTP_200_OK):
    """Serializes a freshly loaded order so its lines reflect the last mutation."""
    queryset = Order.objects.select_related(*OrderSerializer.Meta.select_related_fields).prefetch_related(
        *OrderSerializer.Meta.prefetch_related_fields
    )
    return Response(OrderSerializer(queryset.get(pk=order.pk)).data, status=status_code)


class OrderViewSet(BaseViewSet):
    """
    Orders are created and settled here; their lines are managed through
    OrderItemViewSet. Orders are never edited or deleted directly.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_fields = ["payment_status", "customer"]
    http_method_names = ["get", "post", "head", "options"]
    resource_name = "Order"

    @property
    def failure_messages(self):
        messages = super().failure_messages
        messages["pay"] = "Failed to process payment"
        return messages

    def create(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderEngine().create_order(
            serializer.validated_data["customerId"],
            serializer.line_items(),
        )
        return order_response(order, status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):
        order = OrderEngine().pay_for_order(pk)
        return order_response(order)
