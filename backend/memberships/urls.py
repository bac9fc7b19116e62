from rest_framework import routers

from .views import MembershipViewSet

app_name = "memberships"

router = routers.SimpleRouter(trailing_slash=False)
router.register(r"memberships", MembershipViewSet, basename="membership")

urlpatterns = router.urls
