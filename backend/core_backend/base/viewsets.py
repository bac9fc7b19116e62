from rest_framework import viewsets, filters, status
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from .mixins import OptimizedQuerysetMixin

# Any single path segment; ids that are not UUIDs are answered with the
# resource's not-found message by get_object and the services.
LOOKUP_VALUE_REGEX = "[^/.]+"


class BaseViewSet(OptimizedQuerysetMixin, viewsets.ModelViewSet):
    """
    Base ViewSet that provides standard configuration for all ModelViewSets.

    Features:
    - Automatic query optimization via OptimizedQuerysetMixin
    - Standard filtering, search and ordering
    - Enveloped delete confirmations
    - Per-action generic failure messages for the exception handler

    Usage:
        class CafeItemViewSet(BaseViewSet):
            queryset = CafeItem.objects.all()
            serializer_class = CafeItemSerializer
            resource_name = "Cafe item"
    """

    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter,
    ]

    ordering = ['-created_at']
    lookup_value_regex = LOOKUP_VALUE_REGEX
    http_method_names = ["get", "post", "put", "delete", "head", "options"]

    # Human-readable name used in not-found and failure messages
    resource_name = "Resource"
    resource_plural = None

    @property
    def not_found_message(self):
        return f"{self.resource_name} not found"

    @property
    def failure_messages(self):
        name = self.resource_name.lower()
        plural = self.resource_plural or f"{name}s"
        return {
            "list": f"Failed to fetch {plural}",
            "retrieve": f"Failed to fetch {name}",
            "create": f"Failed to create {name}",
            "update": f"Failed to update {name}",
            "destroy": f"Failed to delete {name}",
            "default": "Internal server error",
        }

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return Response(
            {"success": True, "message": f"{self.resource_name} deleted successfully"},
            status=status.HTTP_200_OK,
        )
