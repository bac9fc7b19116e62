from dataclasses import dataclass
from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DEFAULT_DB_ALIAS
from django.db.models import Max

from core_backend.exceptions import NotFoundError, ValidationFailedError
from games.services import SessionTracker
from inventory.services import InventoryLedger
from orders.models import Order, OrderItem


@dataclass(frozen=True)
class LineItemRequest:
    """A requested order line: what to bill and how many."""

    item_id: object
    item_type: str
    quantity: int = 1

    @classmethod
    def from_payload(cls, payload: dict) -> "LineItemRequest":
        return cls(
            item_id=payload.get("item_id", payload.get("itemId")),
            item_type=payload.get("item_type", payload.get("itemType")),
            quantity=payload.get("quantity", 1),
        )


class OrderItemService:
    """
    Builds and looks up order lines. Café lines reserve stock through the
    inventory ledger; session lines copy the session's captured cost.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS, ledger=None, tracker=None):
        self.using = using
        self.ledger = ledger or InventoryLedger(using=using)
        self.tracker = tracker or SessionTracker(using=using)

    def next_sequence(self, order: Order) -> int:
        current = (
            OrderItem.objects.using(self.using)
            .filter(order=order)
            .aggregate(max_seq=Max("item_sequence"))["max_seq"]
        )
        return (current or 0) + 1

    def build_line(self, order: Order, line: LineItemRequest, sequence: int) -> OrderItem:
        """
        Creates one line on ``order`` and returns it. Must run inside the
        caller's transaction so a later failure undoes the reservation.
        """
        if line.item_type == OrderItem.ItemType.CAFE_ITEM:
            return self._build_cafe_line(order, line, sequence)
        if line.item_type == OrderItem.ItemType.GAME_SESSION:
            return self._build_session_line(order, line, sequence)
        raise ValidationFailedError(f"Unknown item type: {line.item_type}")

    def _build_cafe_line(self, order, line, sequence):
        price_at_sale = self.ledger.check_and_reserve(line.item_id, line.quantity)
        return OrderItem.objects.using(self.using).create(
            order=order,
            item_type=OrderItem.ItemType.CAFE_ITEM,
            cafe_item_id=line.item_id,
            quantity=int(line.quantity),
            price_at_sale=price_at_sale,
            item_sequence=sequence,
        )

    def _build_session_line(self, order, line, sequence):
        try:
            session = self.tracker.get_session(line.item_id)
        except NotFoundError:
            raise NotFoundError(f"Game session {line.item_id} not found")

        # An Active session has no cost yet and bills as 0
        cost = session.cost if session.cost is not None else Decimal("0.00")
        return OrderItem.objects.using(self.using).create(
            order=order,
            item_type=OrderItem.ItemType.GAME_SESSION,
            game_session=session,
            quantity=1,
            price_at_sale=cost,
            cost_at_sale=cost,
            item_sequence=sequence,
        )

    def get_line(self, order: Order, order_item_id) -> OrderItem:
        """Fetches a line, which must belong to ``order``."""
        try:
            return OrderItem.objects.using(self.using).get(pk=order_item_id, order=order)
        except (OrderItem.DoesNotExist, DjangoValidationError):
            raise NotFoundError("Order item not found")
