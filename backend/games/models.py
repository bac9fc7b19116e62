import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class BarGame(models.Model):
    """A rentable game station billed by the hour."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price_per_hour = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    available = models.BooleanField(default=True, help_text=_("Whether the game can be checked into"))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price_per_hour__gt=0),
                name="bar_game_price_per_hour_positive",
            ),
        ]

    def __str__(self):
        return self.name


class GameSession(models.Model):
    """
    A timed rental of a bar game by a customer.

    Active while ``end_time`` is unset; Closed (terminal) once checkout has
    stamped ``end_time`` and ``cost``.
    """

    class Status(models.TextChoices):
        ACTIVE = "Active", _("Active")
        CLOSED = "Closed", _("Closed")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Sessions outlive deleted games; checkout then bills nothing.
    game = models.ForeignKey(
        BarGame,
        on_delete=models.SET_NULL,
        null=True,
        related_name="sessions",
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="game_sessions",
    )
    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True)
    cost = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-start_time"]
        constraints = [
            models.UniqueConstraint(
                fields=["customer"],
                condition=models.Q(end_time__isnull=True),
                name="one_active_session_per_customer",
            ),
        ]
        indexes = [
            models.Index(fields=["end_time"], name="game_session_end_time_idx"),
        ]

    def __str__(self):
        return f"Session {self.id} ({self.status})"

    @property
    def is_active(self):
        return self.end_time is None

    @property
    def status(self):
        return self.Status.ACTIVE if self.is_active else self.Status.CLOSED
