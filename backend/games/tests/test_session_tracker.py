"""
Session Tracker Tests

Check-in/check-out lifecycle and elapsed-time billing, driven by a fake clock.
"""
import uuid
from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.db.models import QuerySet

from core_backend.exceptions import (
    ConflictError,
    NotFoundError,
    UnavailableError,
    ValidationFailedError,
)
from games.models import BarGame, GameSession
from games.services import SessionTracker, compute_session_cost


@pytest.mark.django_db
class TestCheckIn:
    """Test opening sessions"""

    def test_check_in_starts_session_at_clock_time(self, bar_game, customer, clock):
        session = SessionTracker(clock=clock).check_in(bar_game.id, customer.id)

        assert session.game == bar_game
        assert session.customer == customer
        assert session.start_time == clock.now
        assert session.end_time is None
        assert session.cost is None
        assert session.status == GameSession.Status.ACTIVE

    def test_unknown_game(self, customer):
        with pytest.raises(NotFoundError, match="Bar game not found"):
            SessionTracker().check_in(uuid.uuid4(), customer.id)

    def test_unknown_customer(self, bar_game):
        with pytest.raises(NotFoundError, match="Customer not found"):
            SessionTracker().check_in(bar_game.id, uuid.uuid4())

    def test_unavailable_game(self, bar_game, customer):
        bar_game.available = False
        bar_game.save()

        with pytest.raises(UnavailableError, match="Game not available"):
            SessionTracker().check_in(bar_game.id, customer.id)

        assert not GameSession.objects.exists()

    def test_customer_cannot_hold_two_active_sessions(self, bar_game, customer):
        other_game = BarGame.objects.create(name="Air Hockey", price_per_hour=Decimal("6.00"))
        tracker = SessionTracker()
        tracker.check_in(bar_game.id, customer.id)

        with pytest.raises(ConflictError) as exc_info:
            tracker.check_in(other_game.id, customer.id)

        assert exc_info.value.reason == "AlreadyActive"
        assert GameSession.objects.filter(customer=customer, end_time__isnull=True).count() == 1

    def test_unique_index_catches_second_active_session(self, bar_game, customer):
        """Two check-ins that both see no open session: the index lets only one in"""
        other_game = BarGame.objects.create(name="Foosball", price_per_hour=Decimal("5.00"))
        tracker = SessionTracker()
        first = tracker.check_in(bar_game.id, customer.id)

        with mock.patch.object(QuerySet, "exists", return_value=False):
            with pytest.raises(ConflictError) as exc_info:
                tracker.check_in(other_game.id, customer.id)

        assert exc_info.value.reason == "AlreadyActive"
        active = GameSession.objects.filter(customer=customer, end_time__isnull=True)
        assert list(active) == [first]

    def test_customer_can_check_in_again_after_checkout(self, bar_game, customer, clock):
        tracker = SessionTracker(clock=clock)
        first = tracker.check_in(bar_game.id, customer.id)
        clock.advance(minutes=30)
        tracker.check_out(first.id)

        second = tracker.check_in(bar_game.id, customer.id)

        assert second.id != first.id
        assert second.is_active

    def test_two_customers_may_share_a_game(self, bar_game, customer, other_customer):
        tracker = SessionTracker()
        tracker.check_in(bar_game.id, customer.id)
        tracker.check_in(bar_game.id, other_customer.id)

        assert tracker.active_sessions().count() == 2


@pytest.mark.django_db
class TestCheckOut:
    """Test closing sessions and billing"""

    def test_ninety_minutes_at_ten_per_hour_costs_fifteen(self, bar_game, customer, clock):
        tracker = SessionTracker(clock=clock)
        session = tracker.check_in(bar_game.id, customer.id)

        clock.advance(minutes=90)
        closed = tracker.check_out(session.id)

        assert closed.end_time == clock.now
        assert closed.cost == Decimal("15.00")
        assert closed.status == GameSession.Status.CLOSED

    def test_second_checkout_is_rejected_and_changes_nothing(self, bar_game, customer, clock):
        tracker = SessionTracker(clock=clock)
        session = tracker.check_in(bar_game.id, customer.id)
        clock.advance(hours=1)
        tracker.check_out(session.id)
        clock.advance(hours=5)

        with pytest.raises(ConflictError) as exc_info:
            tracker.check_out(session.id)

        assert exc_info.value.reason == "AlreadyClosed"
        session.refresh_from_db()
        assert session.cost == Decimal("10.00")
        assert session.end_time == clock.now - timedelta(hours=5)

    def test_unknown_session(self):
        with pytest.raises(NotFoundError, match="Game session not found"):
            SessionTracker().check_out(uuid.uuid4())

    def test_deleted_game_bills_nothing(self, bar_game, customer, clock):
        tracker = SessionTracker(clock=clock)
        session = tracker.check_in(bar_game.id, customer.id)
        bar_game.delete()
        clock.advance(hours=2)

        closed = tracker.check_out(session.id)

        assert closed.game is None
        assert closed.cost == Decimal("0.00")

    def test_immediate_checkout_costs_zero(self, bar_game, customer, clock):
        tracker = SessionTracker(clock=clock)
        session = tracker.check_in(bar_game.id, customer.id)

        assert tracker.check_out(session.id).cost == Decimal("0.00")


class TestComputeSessionCost:
    """Billing is pro rata with no minimum charge"""

    @pytest.mark.parametrize(
        "elapsed, rate, expected",
        [
            (timedelta(minutes=90), "10.00", "15.00"),
            (timedelta(minutes=1), "12.00", "0.20"),
            (timedelta(seconds=45), "10.00", "0.13"),
            (timedelta(seconds=1), "10.00", "0.00"),
            (timedelta(seconds=2), "10.00", "0.01"),
            (timedelta(hours=25), "2.50", "62.50"),
        ],
    )
    def test_cost(self, elapsed, rate, expected):
        from django.utils import timezone

        start = timezone.now()
        assert compute_session_cost(start, start + elapsed, Decimal(rate)) == Decimal(expected)

    def test_end_before_start_costs_zero(self):
        from django.utils import timezone

        start = timezone.now()
        assert compute_session_cost(start, start - timedelta(minutes=5), Decimal("10.00")) == Decimal("0.00")


@pytest.mark.django_db
class TestAdministrativeUpdates:
    """Test update/delete and the session listings"""

    def test_update_active_session(self, bar_game, customer, clock):
        other_game = BarGame.objects.create(name="Foosball", price_per_hour=Decimal("4.00"))
        tracker = SessionTracker(clock=clock)
        session = tracker.check_in(bar_game.id, customer.id)
        earlier = clock.now - timedelta(minutes=15)

        updated = tracker.update_session(session.id, game=other_game.id, start_time=earlier)

        assert updated.game == other_game
        assert updated.start_time == earlier

    def test_closed_session_cannot_be_updated(self, bar_game, customer, clock):
        tracker = SessionTracker(clock=clock)
        session = tracker.check_in(bar_game.id, customer.id)
        clock.advance(minutes=30)
        tracker.check_out(session.id)

        with pytest.raises(ConflictError) as exc_info:
            tracker.update_session(session.id, start_time=clock.now - timedelta(hours=3))

        assert exc_info.value.reason == "AlreadyClosed"
        session.refresh_from_db()
        assert session.cost == Decimal("5.00")

    def test_only_game_and_start_time_are_updatable(self, bar_game, customer):
        tracker = SessionTracker()
        session = tracker.check_in(bar_game.id, customer.id)

        with pytest.raises(ValidationFailedError):
            tracker.update_session(session.id, cost=Decimal("1.00"))

    def test_start_time_cannot_be_in_the_future(self, bar_game, customer, clock):
        tracker = SessionTracker(clock=clock)
        session = tracker.check_in(bar_game.id, customer.id)

        with pytest.raises(ValidationFailedError):
            tracker.update_session(session.id, start_time=clock.now + timedelta(minutes=1))

    def test_delete_session(self, bar_game, customer):
        tracker = SessionTracker()
        session = tracker.check_in(bar_game.id, customer.id)

        tracker.delete_session(session.id)

        assert not GameSession.objects.filter(pk=session.pk).exists()

    def test_active_and_past_listings(self, bar_game, customer, other_customer, clock):
        tracker = SessionTracker(clock=clock)
        closed = tracker.check_in(bar_game.id, customer.id)
        clock.advance(minutes=10)
        tracker.check_out(closed.id)
        active = tracker.check_in(bar_game.id, other_customer.id)

        assert list(tracker.active_sessions()) == [active]
        assert list(tracker.past_sessions()) == [closed]
        assert list(tracker.sessions_for_customer(customer.id)) == [closed]
