# billing/signals.py

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from billing.models import RateLimitSettings
from billing.services.rate_limit import PurchaseRateLimiter


@receiver(post_save, sender=RateLimitSettings)
@receiver(post_delete, sender=RateLimitSettings)
def clear_rate_limit_policy_cache(sender, **kwargs):
    """Make edited rate limit settings take effect without waiting for the cache TTL."""
    PurchaseRateLimiter.clear_cached_policy()
