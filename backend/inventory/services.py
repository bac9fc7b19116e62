from decimal import Decimal
import logging

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DEFAULT_DB_ALIAS, transaction
from django.db.models import F, Q

from core_backend.exceptions import InsufficientStockError, NotFoundError, ValidationFailedError
from .models import CafeItem

logger = logging.getLogger(__name__)


class InventoryLedger:
    """
    Single writer of café stock counts.

    Every reservation is a critical section per item id: the row is locked
    inside a transaction and the decrement itself is a conditional UPDATE that
    only applies while enough stock remains.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def _items(self):
        return CafeItem.objects.using(self.using)

    def get_item(self, item_id, lock=False) -> CafeItem:
        queryset = self._items()
        if lock:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=item_id)
        except (CafeItem.DoesNotExist, DjangoValidationError):
            raise NotFoundError(f"Cafe item {item_id} not found")

    def check_and_reserve(self, item_id, quantity: int) -> Decimal:
        """
        Reserves ``quantity`` units of a café item and returns its unit price.

        Raises NotFoundError if the item does not exist and
        InsufficientStockError if fewer than ``quantity`` units remain.
        When the enclosing transaction rolls back, so does the reservation.
        """
        if quantity is None or int(quantity) < 1:
            raise ValidationFailedError("Quantity must be a positive integer")
        quantity = int(quantity)

        with transaction.atomic(using=self.using):
            item = self.get_item(item_id, lock=True)

            if quantity > item.quantity:
                logger.warning(
                    f"Insufficient stock for {item.name}: requested {quantity}, available {item.quantity}"
                )
                raise InsufficientStockError(f"Insufficient stock for {item.name}")

            # Price captured before any further mutation of the row
            price_at_sale = item.price

            updated = self._items().filter(pk=item.pk, quantity__gte=quantity).update(
                quantity=F("quantity") - quantity
            )
            if not updated:
                # Another writer got there between our read and our update
                raise InsufficientStockError(f"Insufficient stock for {item.name}")

            self._items().filter(pk=item.pk, quantity=0).update(in_stock=False)

        logger.info(f"Reserved {quantity} x {item.name} ({item.pk}) at {price_at_sale}")
        return price_at_sale

    def restock(self, item_id, quantity: int) -> CafeItem:
        """
        Adds units back to a café item and marks it in stock again.
        """
        if quantity is None or int(quantity) < 1:
            raise ValidationFailedError("Restock quantity must be a positive integer")
        quantity = int(quantity)

        with transaction.atomic(using=self.using):
            item = self.get_item(item_id, lock=True)
            self._items().filter(pk=item.pk).update(
                quantity=F("quantity") + quantity, in_stock=True
            )
            item.refresh_from_db(using=self.using)

        logger.info(f"Restocked {item.name} ({item.pk}) by {quantity}, now {item.quantity}")
        return item

    def stock_level(self, item_id) -> int:
        return self.get_item(item_id).quantity

    def low_stock(self, threshold=None):
        """Items below the threshold or flagged out of stock."""
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        return self._items().filter(Q(quantity__lt=threshold) | Q(in_stock=False))

    def by_category(self, category_name):
        return self._items().filter(category=category_name)
