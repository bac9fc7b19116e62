import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class CafeItem(models.Model):
    """
    A sellable café product together with its stock count.

    Stock is only ever decremented through InventoryLedger; ``in_stock`` is
    derived from ``quantity`` on every save.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
        help_text=_("Unit price"),
    )
    category = models.CharField(max_length=100, blank=True, default="", db_index=True)
    quantity = models.PositiveIntegerField(default=0, help_text=_("Units currently in stock"))
    in_stock = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="cafe_item_price_positive",
            ),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.in_stock = self.quantity > 0
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "quantity" in update_fields:
            kwargs["update_fields"] = set(update_fields) | {"in_stock"}
        super().save(*args, **kwargs)
