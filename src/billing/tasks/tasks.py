from celery import shared_task

from billingutils.logging import CeleryLogger


@shared_task
def expire_stale_transactions_task():
    """
    Periodic task that expires unpaid transactions past their expiry time,
    releasing their settlement codes.
    """
    from billing.services.pricing.expiry import expire_stale_transactions

    logger = CeleryLogger.get_logger(__name__)
    expired = expire_stale_transactions()
    logger.info("stale_transactions_expired", count=expired)
    return {"expired": expired}
