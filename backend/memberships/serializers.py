from rest_framework import serializers

from core_backend.base import TimestampedSerializer
from .models import Membership


class MembershipSerializer(TimestampedSerializer):
    expiryDate = serializers.DateTimeField(source="expiry_date", required=False, allow_null=True)

    class Meta:
        model = Membership
        fields = [
            "id",
            "name",
            "description",
            "duration",
            "price",
            "active",
            "expiryDate",
        ] + TimestampedSerializer.TIMESTAMP_FIELDS
