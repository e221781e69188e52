# billing/models/base.py
"""
Base model classes shared by the billing models.

This module provides:
- LiveQuerySet: Filters for rows that are active and not soft-deleted
- BaseModel: Common status flags and audit fields for catalog/config rows
- TimeStampedModel: Timestamps only, for append-only ledger rows
"""

from django.db import models


class LiveQuerySet(models.QuerySet):
    """QuerySet helpers for the integer is_active / is_deleted flags."""

    def live(self) -> "LiveQuerySet":
        """Rows that are active and not soft-deleted."""
        return self.filter(is_active=1, is_deleted=0)

    def not_deleted(self) -> "LiveQuerySet":
        return self.filter(is_deleted=0)


class BaseModel(models.Model):
    """
    Abstract base model with common fields for catalog and configuration rows.

    Provides:
    - is_active: Active status flag (1=active, 0=inactive)
    - is_deleted: Soft delete flag
    - created_at / updated_at: Audit timestamps
    - created_by / updated_by: IDs of the operators who touched the row
    """

    is_active = models.IntegerField(
        db_column="IsActive",
        blank=True,
        null=True,
        default=1,
        help_text="Flag indicating if the record is active (1=active, 0=inactive)",
    )
    is_deleted = models.IntegerField(
        db_column="IsDeleted",
        blank=True,
        null=True,
        default=0,
        help_text="Flag indicating if the record is soft-deleted (1=deleted, 0=not deleted)",
    )
    created_at = models.DateTimeField(
        db_column="CreatedAt",
        auto_now_add=True,
        null=True,
        help_text="Timestamp when the record was created",
    )
    updated_at = models.DateTimeField(
        db_column="UpdatedAt",
        auto_now=True,
        null=True,
        help_text="Timestamp when the record was last updated",
    )
    created_by = models.IntegerField(
        db_column="CreatedBy",
        blank=True,
        null=True,
        help_text="ID of the user who created this record",
    )
    updated_by = models.IntegerField(
        db_column="UpdatedBy",
        blank=True,
        null=True,
        help_text="ID of the user who last updated this record",
    )

    objects = LiveQuerySet.as_manager()

    class Meta:
        abstract = True
        get_latest_by = "created_at"

    @property
    def is_live(self) -> bool:
        return self.is_active == 1 and self.is_deleted != 1

    def soft_delete(self) -> None:
        """Mark the record as deleted without removing it from the database."""
        self.is_deleted = 1
        self.is_active = 0
        self.save(update_fields=["is_deleted", "is_active", "updated_at"])

    def deactivate(self) -> None:
        """Mark the record as inactive."""
        self.is_active = 0
        self.save(update_fields=["is_active", "updated_at"])


class TimeStampedModel(models.Model):
    """
    Abstract base for append-only rows (ledgers, transactions).
    """

    created_at = models.DateTimeField(
        db_column="CreatedAt",
        auto_now_add=True,
        null=True,
        help_text="Timestamp when the record was created",
    )
    updated_at = models.DateTimeField(
        db_column="UpdatedAt",
        auto_now=True,
        null=True,
        help_text="Timestamp when the record was last updated",
    )

    class Meta:
        abstract = True
        get_latest_by = "created_at"
