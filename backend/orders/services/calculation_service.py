from decimal import Decimal, ROUND_HALF_UP
import logging

from django.db import DEFAULT_DB_ALIAS

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class OrderCalculationService:
    """Money arithmetic for order totals."""

    @staticmethod
    def quantize(amount) -> Decimal:
        return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)

    @staticmethod
    def quantity_change_delta(order_item, new_quantity: int) -> Decimal:
        """
        Amount the order total moves by when a café line is resized.
        """
        return (int(new_quantity) - order_item.quantity) * order_item.price_at_sale

    @staticmethod
    def calculate_total(order, using=DEFAULT_DB_ALIAS) -> Decimal:
        """
        Sum of line contributions read back from storage: ``price_at_sale x
        quantity`` for café lines and ``cost_at_sale`` for session lines.
        """
        total = Decimal("0.00")
        for item in order.items.using(using).all():
            total += item.contribution
        return OrderCalculationService.quantize(total)

    @staticmethod
    def recalculate_order_totals(order, using=DEFAULT_DB_ALIAS):
        """
        Rewrites ``total_amount`` from the lines. The engine keeps the total
        incrementally; this is the repair path for an order whose total has
        drifted (e.g. after a manual database edit).
        """
        total = OrderCalculationService.calculate_total(order, using=using)
        if total != order.total_amount:
            logger.warning(
                f"Order {order.id} total drifted: stored {order.total_amount}, lines sum to {total}"
            )
            order.total_amount = total
            order.save(using=using, update_fields=["total_amount", "updated_at"])
        return order
