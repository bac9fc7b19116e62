"""
Customer app URL configuration.
"""
from rest_framework import routers

from .views import CustomerViewSet

app_name = "customers"

router = routers.SimpleRouter(trailing_slash=False)
router.register(r"customers", CustomerViewSet, basename="customer")

urlpatterns = router.urls
