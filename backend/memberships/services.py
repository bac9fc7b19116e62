from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DEFAULT_DB_ALIAS

from core_backend.exceptions import NotFoundError
from .models import Membership


class MembershipRegistry:
    """Keyed lookup of membership plans for the customer directory."""

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def get_membership(self, membership_id) -> Membership:
        try:
            return Membership.objects.using(self.using).get(pk=membership_id)
        except (Membership.DoesNotExist, DjangoValidationError):
            raise NotFoundError("Membership not found")
