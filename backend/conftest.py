"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient


# ============================================================================
# CLIENTS & HELPERS
# ============================================================================

@pytest.fixture
def api_client():
    """Unauthenticated DRF client; the API has no authorization model."""
    return APIClient()


class FakeClock:
    """
    Deterministic stand-in for ``timezone.now``. Call it to read the time,
    ``advance`` to move it forward.
    """

    def __init__(self, start=None):
        self.now = start or timezone.now().replace(microsecond=0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


# ============================================================================
# DOMAIN FIXTURES
# ============================================================================

@pytest.fixture
def membership(db):
    from memberships.models import Membership

    return Membership.objects.create(
        name="Gold",
        description="Discounted game time",
        duration=30,
        price=Decimal("49.99"),
    )


@pytest.fixture
def customer(db):
    from customers.models import Customer

    return Customer.objects.create(name="Ada Lovelace", email="ada@example.com", phone="555-0100")


@pytest.fixture
def other_customer(db):
    from customers.models import Customer

    return Customer.objects.create(name="Grace Hopper", email="grace@example.com", phone="555-0199")


@pytest.fixture
def make_cafe_item(db):
    """Factory for café items: make_cafe_item(price="3.50", quantity=5)."""
    from inventory.models import CafeItem

    def _make(name="Espresso", price="3.50", quantity=20, category="Coffee", **extra):
        return CafeItem.objects.create(
            name=name,
            price=Decimal(price),
            quantity=quantity,
            category=category,
            **extra,
        )

    return _make


@pytest.fixture
def cafe_item(make_cafe_item):
    return make_cafe_item()


@pytest.fixture
def bar_game(db):
    from games.models import BarGame

    return BarGame.objects.create(name="Pool Table 1", price_per_hour=Decimal("10.00"))
