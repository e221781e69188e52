# billing/services/pricing/expiry.py
"""
Expiry of unpaid transactions.

Moving a transaction out of ``pending`` also releases its settlement code.
"""

import logging
from datetime import datetime

from django.utils import timezone

from billing.models.choices import PaymentStatus

logger = logging.getLogger(__name__)


def expire_stale_transactions(now: datetime | None = None) -> int:
    """Mark open transactions whose expiry has passed as expired; return the count."""
    from billing.models import Transaction

    now = now or timezone.now()
    expired = Transaction.objects.filter(
        payment_status__in=PaymentStatus.open_statuses(),
        expires_at__isnull=False,
        expires_at__lt=now,
    ).update(payment_status=PaymentStatus.EXPIRED.value, updated_at=now)

    if expired:
        logger.info(f"Expired {expired} stale transactions")
    return expired
