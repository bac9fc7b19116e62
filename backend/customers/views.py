"""
Customer views.
"""
from rest_framework.decorators import action
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from games.serializers import GameSessionSerializer
from games.services import SessionTracker
from orders.serializers import OrderSerializer
from orders.services import OrderEngine

from .models import Customer
from .serializers import AssignMembershipSerializer, CustomerSerializer
from .services import CustomerDirectory


class CustomerViewSet(BaseViewSet):
    """
    CRUD for customers, plus search, history and membership linking.
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    filterset_fields = ["membership"]
    search_fields = ["name", "email", "phone"]
    ordering = ["name"]
    resource_name = "Customer"

    @property
    def failure_messages(self):
        messages = super().failure_messages
        messages.update(
            {
                "search": "Failed to search customers",
                "orders": "Failed to fetch customer orders",
                "game_sessions": "Failed to fetch customer game sessions",
                "assign_membership": "Failed to assign membership",
                "link_membership": "Failed to link membership",
            }
        )
        return messages

    @action(detail=False, methods=["get"])
    def search(self, request):
        customers = CustomerDirectory().search(request.query_params.get("query"))
        return Response(CustomerSerializer(customers, many=True).data)

    @action(detail=True, methods=["get"])
    def orders(self, request, pk=None):
        customer = CustomerDirectory().get_customer(pk)
        orders = OrderEngine().orders_for_customer(customer.pk)
        return Response(OrderSerializer(orders, many=True).data)

    @action(detail=True, methods=["get"], url_path="game-sessions")
    def game_sessions(self, request, pk=None):
        customer = CustomerDirectory().get_customer(pk)
        sessions = SessionTracker().sessions_for_customer(customer.pk)
        return Response(GameSessionSerializer(sessions, many=True).data)

    @action(detail=True, methods=["put"], url_path="assign-membership")
    def assign_membership(self, request, pk=None):
        return self._link(request, pk)

    @action(detail=True, methods=["put"], url_path="link-membership")
    def link_membership(self, request, pk=None):
        return self._link(request, pk)

    def _link(self, request, pk):
        serializer = AssignMembershipSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        customer = CustomerDirectory().assign_membership(pk, serializer.validated_data["membershipId"])
        return Response(CustomerSerializer(customer).data)
