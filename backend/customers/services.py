"""
Customer services.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DEFAULT_DB_ALIAS, transaction
from django.db.models import Q

from core_backend.exceptions import NotFoundError, ValidationFailedError
from memberships.services import MembershipRegistry

from .models import Customer

logger = logging.getLogger(__name__)


class CustomerDirectory:
    """
    Keyed lookup of customers for the order engine and session tracker, plus
    the search and membership-linking operations of the customer API.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS, memberships=None):
        self.using = using
        self.memberships = memberships or MembershipRegistry(using=using)

    def get_customer(self, customer_id, lock=False) -> Customer:
        """
        Fetch a customer by id. With ``lock=True`` the row is locked for the
        rest of the caller's transaction.
        """
        queryset = Customer.objects.using(self.using)
        if lock:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=customer_id)
        except (Customer.DoesNotExist, DjangoValidationError):
            raise NotFoundError("Customer not found")

    def search(self, query):
        """Case-insensitive substring match over name, email and phone."""
        query = (query or "").strip()
        if not query:
            raise ValidationFailedError("Search query is required")

        return (
            Customer.objects.using(self.using)
            .select_related("membership")
            .filter(
                Q(name__icontains=query)
                | Q(email__icontains=query)
                | Q(phone__icontains=query)
            )
        )

    def assign_membership(self, customer_id, membership_id) -> Customer:
        """
        Link a customer to a membership plan. The membership is checked
        first so an unknown plan is reported even for an unknown customer.
        """
        membership = self.memberships.get_membership(membership_id)

        with transaction.atomic(using=self.using):
            customer = self.get_customer(customer_id, lock=True)
            customer.membership = membership
            customer.save(using=self.using, update_fields=["membership", "updated_at"])

        logger.info(f"Assigned membership {membership.id} ({membership.name}) to customer {customer.id}")
        return customer
