# billing/models/subscription.py
"""
Subscription catalog and subscription state.

Provides:
- SubscriptionPlan: Immutable catalog entry priced in whole currency units
- Subscription: A user's subscription period, read by the add-on duration pricer
"""

from django.db import models

from .base import BaseModel
from .choices import SubscriptionStatus


class SubscriptionPlan(BaseModel):
    """
    Catalog entry for a purchasable subscription plan.

    Prices are integers in the smallest whole currency unit.
    """

    plan_id = models.CharField(
        db_column="PlanID",
        primary_key=True,
        max_length=64,
        help_text="Stable plan identifier (e.g. 'basic-monthly')",
    )
    name = models.CharField(
        db_column="Name",
        max_length=100,
        help_text="Display name of the plan",
    )
    price = models.BigIntegerField(
        db_column="Price",
        help_text="Price per period in whole currency units",
    )
    original_price = models.BigIntegerField(
        db_column="OriginalPrice",
        blank=True,
        null=True,
        help_text="Strike-through list price, used as minimum-purchase basis when higher",
    )
    duration_days = models.IntegerField(
        db_column="DurationDays",
        default=30,
        help_text="Length of one subscription period in days",
    )

    class Meta:
        managed = True
        db_table = "SubscriptionPlans"
        verbose_name = "Subscription Plan"
        verbose_name_plural = "Subscription Plans"
        ordering = ["price"]
        app_label = "billing"

    def __str__(self) -> str:
        return f"{self.name} ({self.price})"

    @property
    def minimum_purchase_basis(self) -> int:
        """Amount compared against a voucher's minimum-purchase floor."""
        return max(self.price, self.original_price or 0)


class Subscription(BaseModel):
    """
    A user's subscription to a plan for a bounded period.
    """

    subscription_id = models.AutoField(
        db_column="SubscriptionID",
        primary_key=True,
        help_text="Unique identifier for the subscription",
    )
    user = models.ForeignKey(
        "User",
        on_delete=models.CASCADE,
        db_column="UserID",
        related_name="subscriptions",
        help_text="Subscribed user",
    )
    plan = models.ForeignKey(
        SubscriptionPlan,
        on_delete=models.PROTECT,
        db_column="PlanID",
        related_name="subscriptions",
        help_text="Plan the user is subscribed to",
    )
    start_date = models.DateTimeField(
        db_column="StartDate",
        help_text="When the subscription period started",
    )
    end_date = models.DateTimeField(
        db_column="EndDate",
        help_text="When the subscription period ends",
    )
    status = models.CharField(
        db_column="Status",
        max_length=20,
        choices=SubscriptionStatus.choices(),
        default=SubscriptionStatus.ACTIVE.value,
        help_text="Current subscription status",
    )

    class Meta:
        managed = True
        db_table = "Subscriptions"
        verbose_name = "Subscription"
        verbose_name_plural = "Subscriptions"
        indexes = [
            models.Index(fields=["user", "status"], name="subscriptions_user_status_idx"),
        ]
        ordering = ["-created_at"]
        app_label = "billing"

    def __str__(self) -> str:
        return f"{self.user_id} - {self.plan_id} ({self.status})"

    @classmethod
    def current_for(cls, user, now) -> "Subscription | None":
        """Latest active subscription of ``user`` that has not ended yet."""
        return (
            cls.objects.filter(
                user=user,
                status=SubscriptionStatus.ACTIVE.value,
                end_date__gt=now,
                is_deleted=0,
            )
            .order_by("-created_at", "-subscription_id")
            .first()
        )
