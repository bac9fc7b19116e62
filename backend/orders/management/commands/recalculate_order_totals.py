from django.core.management.base import BaseCommand
from django.db import DEFAULT_DB_ALIAS, transaction

from orders.models import Order
from orders.services import OrderCalculationService


class Command(BaseCommand):
    help = "Recompute order totals from their lines and repair any that drifted"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report drifted orders without changing them",
        )
        parser.add_argument(
            "--database",
            default=DEFAULT_DB_ALIAS,
            help="Database alias to check",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        using = options["database"]

        if dry_run:
            self.stdout.write(self.style.WARNING("DRY RUN MODE - No changes will be made"))

        drifted = 0
        for order in Order.objects.using(using).iterator(chunk_size=500):
            expected = OrderCalculationService.calculate_total(order, using=using)
            if expected == order.total_amount:
                continue

            drifted += 1
            self.stdout.write(f"Order {order.id}: stored {order.total_amount}, lines sum to {expected}")
            if not dry_run:
                with transaction.atomic(using=using):
                    locked = Order.objects.using(using).select_for_update().get(pk=order.pk)
                    OrderCalculationService.recalculate_order_totals(locked, using=using)

        self.stdout.write(self.style.SUCCESS(f"{drifted} order(s) with drifted totals"))
