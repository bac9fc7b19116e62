"""
Customer models - venue guests who order café items and rent games.
"""
import uuid

from django.db import models


class Customer(models.Model):
    """
    A venue customer. Email is optional and not unique: walk-in customers are
    often registered with a name only.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, help_text="Customer's display name")
    email = models.EmailField(blank=True, default="", help_text="Customer's email address")
    phone = models.CharField(max_length=20, blank=True, default="", help_text="Customer's phone number")
    membership = models.ForeignKey(
        "memberships.Membership",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="customers",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["email"], name="customer_email_idx"),
            models.Index(fields=["phone"], name="customer_phone_idx"),
        ]

    def __str__(self):
        return self.name
