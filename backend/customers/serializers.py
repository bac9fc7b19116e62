"""
Customer serializers.
"""
from rest_framework import serializers

from core_backend.base import BaseModelSerializer, TimestampedSerializer
from memberships.models import Membership
from memberships.serializers import MembershipSerializer

from .models import Customer


class CustomerSerializer(TimestampedSerializer):
    """
    Full customer representation. ``membership`` is written as a plan id and
    echoed back expanded under ``membershipDetail``.
    """

    membership = serializers.PrimaryKeyRelatedField(
        queryset=Membership.objects.all(),
        required=False,
        allow_null=True,
    )
    membershipDetail = MembershipSerializer(source="membership", read_only=True)

    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "membership",
            "membershipDetail",
        ] + TimestampedSerializer.TIMESTAMP_FIELDS
        select_related_fields = ["membership"]
        prefetch_related_fields = []


class CustomerSummarySerializer(BaseModelSerializer):
    """Compact representation embedded in orders and game sessions."""

    class Meta:
        model = Customer
        fields = ["id", "name", "email", "phone"]


class AssignMembershipSerializer(serializers.Serializer):
    membershipId = serializers.UUIDField()
