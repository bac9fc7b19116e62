from rest_framework import serializers


class BaseModelSerializer(serializers.ModelSerializer):
    """
    Base serializer that provides common functionality.

    Features:
    - Optimization hints read by OptimizedQuerysetMixin
    - A single place for project-wide validation
    """

    class Meta:
        # Default optimization fields (can be overridden)
        select_related_fields = []
        prefetch_related_fields = []

    def validate(self, data):
        """
        Base validation that can be extended by child classes.
        """
        data = super().validate(data)
        return data


class TimestampedSerializer(BaseModelSerializer):
    """
    Adds the read-only createdAt/updatedAt pair every venue entity carries.
    """

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    TIMESTAMP_FIELDS = ["createdAt", "updatedAt"]
