from core_backend.base import BaseViewSet
from .models import Membership
from .serializers import MembershipSerializer


class MembershipViewSet(BaseViewSet):
    queryset = Membership.objects.all()
    serializer_class = MembershipSerializer
    filterset_fields = ["active"]
    ordering = ["name"]
    resource_name = "Membership"
