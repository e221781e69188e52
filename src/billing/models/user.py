# billing/models/user.py
"""
Buyer accounts.

Authentication itself (token issuance, password flows) lives outside this
service; the account here only needs to own subscriptions and transactions and
carry the affiliate attribution recorded on its first affiliate purchase.
"""

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.db import models

from .base import BaseModel


class Role:
    ADMIN = "Admin"
    USER = "User"

    CHOICES = [
        (ADMIN, "Administrator"),
        (USER, "Standard User"),
    ]


class UserManager(BaseUserManager):
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("An email address is required")

        defaults = {"role": Role.USER, "is_active": 1, "is_deleted": 0, "is_staff": False}
        user = self.model(email=self.normalize_email(email), **{**defaults, **extra_fields})
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Operator account for the Django admin (voucher and settings management)."""
        extra_fields = {"role": Role.ADMIN, "is_staff": True, "is_superuser": True, **extra_fields}
        if not (extra_fields["is_staff"] is True and extra_fields["is_superuser"] is True):
            raise ValueError("A superuser needs is_staff=True and is_superuser=True")
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, BaseModel):
    """
    Account that purchases subscriptions and add-ons.

    The affiliate attribution fields are written once, the first time the
    user pays with an affiliate voucher, and never overwritten afterwards.
    """

    user_id = models.AutoField(
        db_column="UserID",
        primary_key=True,
        help_text="Unique identifier for the user",
    )
    full_name = models.CharField(
        db_column="FullName",
        max_length=255,
        help_text="User's full name",
    )
    email = models.CharField(
        db_column="Email",
        unique=True,
        max_length=255,
        help_text="User's email address (used for login)",
    )
    password = models.CharField(
        db_column="PasswordHash",
        max_length=255,
        help_text="Hashed password",
    )
    role = models.CharField(
        db_column="Role",
        max_length=12,
        choices=Role.CHOICES,
        default=Role.USER,
        help_text="User role determining permissions",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Designates whether the user can log into the admin site.",
    )
    is_superuser = models.BooleanField(
        default=False,
        help_text="Designates that this user has all permissions.",
    )
    last_login = models.DateTimeField(
        db_column="LastLogin",
        blank=True,
        null=True,
        help_text="Last login timestamp",
    )
    referred_by_affiliate = models.CharField(
        db_column="ReferredByAffiliate",
        max_length=50,
        blank=True,
        null=True,
        help_text="Affiliate code that first referred this user",
    )
    referral_date = models.DateTimeField(
        db_column="ReferralDate",
        blank=True,
        null=True,
        help_text="When the affiliate attribution was recorded",
    )

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["full_name"]

    class Meta:
        managed = True
        db_table = "Users"
        verbose_name = "User"
        verbose_name_plural = "Users"
        indexes = [
            models.Index(fields=["email", "is_active"], name="users_email_active_idx"),
        ]
        app_label = "billing"

    def __str__(self) -> str:
        return f"{self.full_name} ({self.email})"

    @property
    def id(self) -> int:
        return self.user_id

    @property
    def is_operator(self) -> bool:
        return bool(self.is_superuser) or self.role == Role.ADMIN

    def has_perm(self, perm, obj=None) -> bool:
        return self.is_operator

    def has_module_perms(self, app_label) -> bool:
        return self.is_operator
