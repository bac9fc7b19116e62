from decimal import Decimal
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DEFAULT_DB_ALIAS, transaction
from django.utils import timezone

from core_backend.exceptions import ConflictError, NotFoundError, ValidationFailedError
from customers.services import CustomerDirectory
from orders.models import Order, OrderItem

from .calculation_service import OrderCalculationService
from .item_service import LineItemRequest, OrderItemService

logger = logging.getLogger(__name__)


class OrderEngine:
    """
    Order lifecycle: build an order from heterogeneous lines, resize or drop
    lines, and settle it.

    Every mutation locks the order row and moves ``total_amount`` by exactly
    the contribution of the line it touched, so the total always equals the
    sum of the lines. ``create_order`` and ``add_items`` are all-or-nothing:
    a failing line rolls back the lines and stock reservations made before it
    in the same call.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS, items=None, directory=None, clock=None):
        self.using = using
        self.items = items or OrderItemService(using=using)
        self.directory = directory or CustomerDirectory(using=using)
        self.clock = clock or timezone.now

    def _orders(self):
        return Order.objects.using(self.using)

    def get_order(self, order_id, lock=False) -> Order:
        queryset = self._orders()
        if lock:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=order_id)
        except (Order.DoesNotExist, DjangoValidationError):
            raise NotFoundError("Order not found")

    def orders_for_customer(self, customer_id):
        return (
            self._orders()
            .filter(customer_id=customer_id)
            .select_related("customer")
            .prefetch_related("items")
        )

    @staticmethod
    def _as_requests(line_items):
        return [
            line if isinstance(line, LineItemRequest) else LineItemRequest.from_payload(line)
            for line in line_items or []
        ]

    @staticmethod
    def _ensure_open(order: Order):
        if order.is_terminal:
            logger.warning(f"Rejected line change on {order.payment_status} order {order.id}")
            raise ConflictError(
                f"Cannot modify an order that is {order.payment_status.lower()}",
                reason="OrderClosed",
            )

    def _append_lines(self, order: Order, lines) -> Decimal:
        """Builds lines in the order given; returns the amount they add."""
        added = Decimal("0.00")
        sequence = self.items.next_sequence(order)
        for line in lines:
            order_item = self.items.build_line(order, line, sequence)
            added += order_item.contribution
            sequence += 1
        return added

    def create_order(self, customer_id, line_items) -> Order:
        """
        Creates a Pending order for a customer from ``line_items``.

        Raises NotFoundError for an unknown customer, café item or game
        session and InsufficientStockError when a café line cannot be covered.
        On any failure no order is persisted and no stock is consumed.
        """
        lines = self._as_requests(line_items)

        with transaction.atomic(using=self.using):
            customer = self.directory.get_customer(customer_id)
            order = self._orders().create(customer=customer)

            order.total_amount = OrderCalculationService.quantize(self._append_lines(order, lines))
            order.save(using=self.using, update_fields=["total_amount", "updated_at"])

        logger.info(
            f"Created order {order.id} for customer {customer.id}: "
            f"{len(lines)} line(s), total {order.total_amount}"
        )
        return order

    def add_items(self, order_id, line_items) -> Order:
        """
        Appends lines to an open order. Same per-line rules and
        all-or-nothing behaviour as ``create_order``.
        """
        lines = self._as_requests(line_items)

        with transaction.atomic(using=self.using):
            order = self.get_order(order_id, lock=True)
            self._ensure_open(order)

            added = self._append_lines(order, lines)
            order.total_amount = OrderCalculationService.quantize(order.total_amount + added)
            order.save(using=self.using, update_fields=["total_amount", "updated_at"])

        logger.info(f"Added {len(lines)} line(s) to order {order.id}, total now {order.total_amount}")
        return order

    def update_item_quantity(self, order_id, order_item_id, new_quantity: int) -> Order:
        """
        Resizes a café line and moves the total by
        ``(new - old) x price_at_sale``. Stock is not adjusted.
        """
        if new_quantity is None or int(new_quantity) < 1:
            raise ValidationFailedError("Quantity must be a positive integer")
        new_quantity = int(new_quantity)

        with transaction.atomic(using=self.using):
            order = self.get_order(order_id, lock=True)
            order_item = self.items.get_line(order, order_item_id)
            self._ensure_open(order)

            if order_item.item_type == OrderItem.ItemType.GAME_SESSION and new_quantity != 1:
                raise ValidationFailedError("Game session lines always have a quantity of 1")

            delta = OrderCalculationService.quantity_change_delta(order_item, new_quantity)
            old_quantity = order_item.quantity

            order_item.quantity = new_quantity
            order_item.save(using=self.using, update_fields=["quantity"])

            order.total_amount = OrderCalculationService.quantize(order.total_amount + delta)
            order.save(using=self.using, update_fields=["total_amount", "updated_at"])

        logger.info(
            f"Order {order.id} line {order_item.id}: quantity {old_quantity} -> {new_quantity}, "
            f"total now {order.total_amount}"
        )
        return order

    def remove_item(self, order_id, order_item_id) -> Order:
        """
        Drops a line and subtracts its full contribution. Stock is not
        restored.
        """
        with transaction.atomic(using=self.using):
            order = self.get_order(order_id, lock=True)
            order_item = self.items.get_line(order, order_item_id)
            self._ensure_open(order)

            contribution = order_item.contribution
            order_item.delete()

            order.total_amount = OrderCalculationService.quantize(order.total_amount - contribution)
            order.save(using=self.using, update_fields=["total_amount", "updated_at"])

        logger.info(
            f"Removed line {order_item_id} from order {order.id}, total now {order.total_amount}"
        )
        return order

    def pay_for_order(self, order_id) -> Order:
        """
        Settles an order. Paid is terminal: paying again is a conflict, as is
        paying a cancelled order.
        """
        with transaction.atomic(using=self.using):
            order = self.get_order(order_id, lock=True)

            if order.payment_status == Order.PaymentStatus.PAID:
                raise ConflictError("Order is already paid", reason="AlreadyPaid")
            if order.payment_status == Order.PaymentStatus.CANCELLED:
                raise ConflictError("Cannot pay for a cancelled order", reason="OrderCancelled")

            order.payment_status = Order.PaymentStatus.PAID
            order.paid_at = self.clock()
            order.save(using=self.using, update_fields=["payment_status", "paid_at", "updated_at"])

        logger.info(f"Order {order.id} paid: {order.total_amount}")
        return order
