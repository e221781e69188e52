from django.core.management.base import BaseCommand

from billing.services.pricing.expiry import expire_stale_transactions


class Command(BaseCommand):
    help = "Expires pending transactions whose payment window has passed"

    def handle(self, *args, **kwargs):
        expired = expire_stale_transactions()
        self.stdout.write(self.style.SUCCESS(f"Expired {expired} transactions"))
