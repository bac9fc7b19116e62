from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from .models import CafeItem
from .serializers import CafeItemSerializer, CafeItemUpdateSerializer, RestockSerializer
from .services import InventoryLedger


class CafeItemViewSet(BaseViewSet):
    """
    CRUD for café items plus the stock views of the inventory ledger.
    """

    queryset = CafeItem.objects.all()
    serializer_class = CafeItemSerializer
    filterset_fields = ["category", "in_stock"]
    search_fields = ["name", "category"]
    ordering = ["name"]
    resource_name = "Cafe item"

    @property
    def failure_messages(self):
        messages = super().failure_messages
        messages.update(
            {
                "low_stock": "Failed to fetch low stock items",
                "by_category": "Failed to fetch items by category",
                "restock": "Failed to restock cafe item",
            }
        )
        return messages

    def get_serializer_class(self):
        """
        Stock changes go through the restock action, never through an edit.
        """
        if self.action in ["update", "partial_update"]:
            return CafeItemUpdateSerializer
        return CafeItemSerializer

    @action(detail=False, methods=["get"], url_path="low-stock")
    def low_stock(self, request):
        items = InventoryLedger().low_stock()
        return Response(CafeItemSerializer(items, many=True).data)

    @action(detail=False, methods=["get"], url_path=r"category/(?P<category_name>[^/]+)")
    def by_category(self, request, category_name=None):
        items = InventoryLedger().by_category(category_name)
        return Response(CafeItemSerializer(items, many=True).data)

    @action(detail=True, methods=["post"], url_path="restock")
    def restock(self, request, pk=None):
        serializer = RestockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = InventoryLedger().restock(pk, serializer.validated_data["quantity"])
        return Response(CafeItemSerializer(item).data, status=status.HTTP_200_OK)
