from rest_framework import routers

from .views import CafeItemViewSet

app_name = "inventory"

router = routers.SimpleRouter(trailing_slash=False)
router.register(r"cafe-items", CafeItemViewSet, basename="cafe-item")

urlpatterns = router.urls
