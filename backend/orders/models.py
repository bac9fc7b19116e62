import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class Order(models.Model):
    """
    A customer's bill. The running ``total_amount`` always equals the sum of
    its lines' contributions; the order services keep it that way.
    """

    class PaymentStatus(models.TextChoices):
        PENDING = "Pending", _("Pending")
        PAID = "Paid", _("Paid")
        CANCELLED = "Cancelled", _("Cancelled")

    # Paid and Cancelled orders no longer accept line changes
    TERMINAL_STATUSES = (PaymentStatus.PAID, PaymentStatus.CANCELLED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        db_index=True,
    )
    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "created_at"], name="order_customer_created_idx"),
        ]

    def __str__(self):
        return f"Order {self.id} ({self.payment_status})"

    @property
    def is_terminal(self):
        return self.payment_status in self.TERMINAL_STATUSES


class OrderItem(models.Model):
    """
    One line of an order. ``item_type`` says which of the two references is
    populated: café lines are priced per unit, session lines carry the
    session's captured cost and a fixed quantity of 1.
    """

    class ItemType(models.TextChoices):
        CAFE_ITEM = "CafeItem", _("Cafe item")
        GAME_SESSION = "GameSession", _("Game session")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    item_type = models.CharField(max_length=20, choices=ItemType.choices)
    cafe_item = models.ForeignKey(
        "inventory.CafeItem",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )
    game_session = models.ForeignKey(
        "games.GameSession",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    price_at_sale = models.DecimalField(max_digits=12, decimal_places=2)
    cost_at_sale = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    item_sequence = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["item_sequence"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(item_type="CafeItem", game_session__isnull=True)
                    | models.Q(item_type="GameSession", cafe_item__isnull=True)
                ),
                name="order_item_single_reference",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_item_quantity_positive",
            ),
        ]

    def __str__(self):
        return f"{self.item_type} x {self.quantity} on order {self.order_id}"

    @property
    def item_id(self):
        if self.item_type == self.ItemType.GAME_SESSION:
            return self.game_session_id
        return self.cafe_item_id

    @property
    def contribution(self) -> Decimal:
        """What this line adds to the order total."""
        if self.item_type == self.ItemType.GAME_SESSION:
            return self.cost_at_sale or Decimal("0.00")
        return self.price_at_sale * self.quantity
