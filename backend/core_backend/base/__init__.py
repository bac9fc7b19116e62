"""
Core backend base components.

This package provides foundational classes that the venue apps build on for
consistency: viewsets, serializers and queryset mixins.
"""

from .viewsets import BaseViewSet, LOOKUP_VALUE_REGEX
from .serializers import (
    BaseModelSerializer,
    TimestampedSerializer
)
from .mixins import OptimizedQuerysetMixin

__all__ = [
    # ViewSets
    'BaseViewSet',
    'LOOKUP_VALUE_REGEX',

    # Serializers
    'BaseModelSerializer',
    'TimestampedSerializer',

    # Mixins
    'OptimizedQuerysetMixin',
]
