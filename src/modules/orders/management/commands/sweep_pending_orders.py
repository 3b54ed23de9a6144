from django.core.management.base import BaseCommand

from modules.orders.tasks import build_order_service


class Command(BaseCommand):
    help = "Run one reconciliation pass: advance PENDING orders to PROCESSING"

    def handle(self, *args, **options):
        result = build_order_service().sweep()
        self.stdout.write(
            self.style.SUCCESS(
                f"Sweep finished: {result.advanced} advanced, "
                f"{result.skipped} skipped, {result.failed} failed."
            )
        )
