from django.urls import path, include
from rest_framework import routers
from rest_framework_nested import routers as nested_routers

from .views import OrderViewSet, OrderItemViewSet

app_name = "orders"

router = routers.SimpleRouter(trailing_slash=False)
router.register(r"orders", OrderViewSet, basename="order")

orders_router = nested_routers.NestedSimpleRouter(router, r"orders", lookup="order", trailing_slash=False)
orders_router.register(r"items", OrderItemViewSet, basename="order-item")

urlpatterns = [
    # Include the nested router URLs first for precedence.
    path("", include(orders_router.urls)),
    path("", include(router.urls)),
]
