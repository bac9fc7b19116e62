from decimal import Decimal, ROUND_HALF_UP
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction
from django.utils import timezone

from core_backend.exceptions import (
    ConflictError,
    NotFoundError,
    UnavailableError,
    ValidationFailedError,
)
from customers.services import CustomerDirectory
from .models import BarGame, GameSession

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = Decimal(3600)
CENT = Decimal("0.01")


def compute_session_cost(start_time, end_time, price_per_hour) -> Decimal:
    """
    Bills elapsed wall-clock time proportionally: fractional hours are charged
    pro rata, with no minimum charge. The result is rounded half up to
    currency precision (the cent), so at 10/h anything under 1.8 seconds
    bills 0.00.
    """
    elapsed = end_time - start_time
    seconds = Decimal(elapsed.days * 86400 + elapsed.seconds) + Decimal(elapsed.microseconds) / Decimal(1_000_000)
    seconds = max(seconds, Decimal(0))
    hours = seconds / SECONDS_PER_HOUR
    return (hours * Decimal(price_per_hour)).quantize(CENT, rounding=ROUND_HALF_UP)


class SessionTracker:
    """
    Runs game sessions through NotStarted -> Active -> Closed.

    Check-in is serialized per customer (customer row lock, backed by the
    one-active-session unique index); checkout locks the session row so the
    cost is captured exactly once.
    """

    # Fields the administrative update path may change on an Active session
    UPDATABLE_FIELDS = ("game", "start_time")

    def __init__(self, using=DEFAULT_DB_ALIAS, clock=None, directory=None):
        self.using = using
        self.clock = clock or timezone.now
        self.directory = directory or CustomerDirectory(using=using)

    def _sessions(self):
        return GameSession.objects.using(self.using)

    def get_game(self, game_id) -> BarGame:
        try:
            return BarGame.objects.using(self.using).get(pk=game_id)
        except (BarGame.DoesNotExist, DjangoValidationError):
            raise NotFoundError("Bar game not found")

    def get_session(self, session_id, lock=False) -> GameSession:
        queryset = self._sessions()
        if lock:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=session_id)
        except (GameSession.DoesNotExist, DjangoValidationError):
            raise NotFoundError("Game session not found")

    def check_in(self, game_id, customer_id) -> GameSession:
        """
        Starts a session for a customer on a game.

        Raises NotFoundError for an unknown game or customer, UnavailableError
        if the game is not rentable, and ConflictError(AlreadyActive) if the
        customer already has an open session anywhere in the venue.
        """
        game = self.get_game(game_id)

        with transaction.atomic(using=self.using):
            customer = self.directory.get_customer(customer_id, lock=True)

            if not game.available:
                raise UnavailableError("Game not available")

            if self._sessions().filter(customer=customer, end_time__isnull=True).exists():
                raise ConflictError(
                    "Customer is already in an active game session", reason="AlreadyActive"
                )

            try:
                with transaction.atomic(using=self.using):
                    session = self._sessions().create(
                        game=game,
                        customer=customer,
                        start_time=self.clock(),
                    )
            except IntegrityError:
                raise ConflictError(
                    "Customer is already in an active game session", reason="AlreadyActive"
                )

        logger.info(f"Customer {customer.id} checked in to {game.name} (session {session.id})")
        return session

    def check_out(self, session_id) -> GameSession:
        """
        Closes an Active session and captures its cost.

        Raises NotFoundError for an unknown session and
        ConflictError(AlreadyClosed) if it was already checked out. A session
        whose game has since been deleted closes with a cost of 0.
        """
        with transaction.atomic(using=self.using):
            session = self.get_session(session_id, lock=True)

            if session.end_time is not None:
                raise ConflictError("Game session already ended", reason="AlreadyClosed")

            end_time = self.clock()
            game = session.game
            if game is None:
                logger.warning(f"Game for session {session.id} no longer exists, billing 0")
                cost = Decimal("0.00")
            else:
                cost = compute_session_cost(session.start_time, end_time, game.price_per_hour)

            session.end_time = end_time
            session.cost = cost
            session.save(using=self.using, update_fields=["end_time", "cost", "updated_at"])

        logger.info(f"Session {session.id} checked out, cost {cost}")
        return session

    def update_session(self, session_id, **changes) -> GameSession:
        """
        Administrative edit of an Active session. Closed sessions are
        immutable.
        """
        unknown = set(changes) - set(self.UPDATABLE_FIELDS)
        if unknown:
            raise ValidationFailedError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )

        with transaction.atomic(using=self.using):
            session = self.get_session(session_id, lock=True)

            if not session.is_active:
                raise ConflictError(
                    "Cannot modify a game session that has already ended", reason="AlreadyClosed"
                )

            if "game" in changes:
                game = changes["game"]
                session.game = game if isinstance(game, BarGame) else self.get_game(game)

            if "start_time" in changes:
                start_time = changes["start_time"]
                if start_time > self.clock():
                    raise ValidationFailedError("Start time cannot be in the future")
                session.start_time = start_time

            session.save(using=self.using)

        logger.info(f"Session {session.id} updated: {', '.join(sorted(changes)) or 'no changes'}")
        return session

    def delete_session(self, session_id):
        with transaction.atomic(using=self.using):
            session = self.get_session(session_id, lock=True)
            session.delete()
        logger.info(f"Session {session_id} deleted")

    def active_sessions(self):
        return self._sessions().filter(end_time__isnull=True).select_related("game", "customer")

    def past_sessions(self):
        return self._sessions().filter(end_time__isnull=False).select_related("game", "customer")

    def sessions_for_customer(self, customer_id):
        return self._sessions().filter(customer_id=customer_id).select_related("game", "customer")
