from decimal import Decimal

from rest_framework import serializers

from core_backend.base import BaseModelSerializer, TimestampedSerializer
from customers.serializers import CustomerSummarySerializer
from .models import BarGame, GameSession


class BarGameSerializer(TimestampedSerializer):
    pricePerHour = serializers.DecimalField(
        source="price_per_hour",
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0.01"),
    )

    class Meta:
        model = BarGame
        fields = [
            "id",
            "name",
            "description",
            "pricePerHour",
            "available",
        ] + TimestampedSerializer.TIMESTAMP_FIELDS


class BarGameSummarySerializer(BaseModelSerializer):
    pricePerHour = serializers.DecimalField(
        source="price_per_hour", max_digits=10, decimal_places=2, read_only=True
    )

    class Meta:
        model = BarGame
        fields = ["id", "name", "pricePerHour"]


class GameSessionSerializer(TimestampedSerializer):
    """
    Read representation of a session. Sessions are created by check-in and
    closed by checkout, never written through this serializer.
    """

    game = BarGameSummarySerializer(read_only=True)
    customer = CustomerSummarySerializer(read_only=True)
    startTime = serializers.DateTimeField(source="start_time", read_only=True)
    endTime = serializers.DateTimeField(source="end_time", read_only=True)
    cost = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    status = serializers.CharField(read_only=True)

    class Meta:
        model = GameSession
        fields = [
            "id",
            "game",
            "customer",
            "startTime",
            "endTime",
            "cost",
            "status",
        ] + TimestampedSerializer.TIMESTAMP_FIELDS
        select_related_fields = ["game", "customer"]
        prefetch_related_fields = []


class GameSessionUpdateSerializer(serializers.Serializer):
    """Administrative edit of an active session."""

    gameId = serializers.UUIDField(required=False)
    startTime = serializers.DateTimeField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide gameId and/or startTime")
        return attrs

    def to_changes(self):
        changes = {}
        if "gameId" in self.validated_data:
            changes["game"] = self.validated_data["gameId"]
        if "startTime" in self.validated_data:
            changes["start_time"] = self.validated_data["startTime"]
        return changes


class CheckInSerializer(serializers.Serializer):
    customerId = serializers.UUIDField()
