# accounting/models/journal.py

"""
======================================================
PATH: accounting/models/journal.py
======================================================
JOURNAL BATCH + JOURNAL LINE MODELS

JournalBatch: one per posted business document.
- UNIQUE (company_id, doc_type, doc_id) is the idempotency key
  ("uq_journal_batches_company_doc"). The database constraint is the only
  source of truth for "already posted"; save() does not pre-validate it.
- Created once, never updated, never deleted.

JournalLine: one debit-or-credit entry within a batch.
- Exactly one of debit/credit is > 0, the other is exactly 0 (DB CHECK).
- Created in bulk alongside its batch; immutable afterwards.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class DocType(models.TextChoices):
    SALES_INVOICE = "SALES_INVOICE", "Sales invoice"
    SALES_PAYMENT_IN = "SALES_PAYMENT_IN", "Sales payment in"
    DEPRECIATION = "DEPRECIATION", "Depreciation run"
    POS_SALE = "POS_SALE", "POS sale"


class JournalBatch(models.Model):
    BATCH_UNIQUE_CONSTRAINT = "uq_journal_batches_company_doc"

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="journal_batches",
    )
    outlet = models.ForeignKey(
        "companies.Outlet",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="journal_batches",
    )

    doc_type = models.CharField(max_length=64, choices=DocType.choices)
    doc_id = models.PositiveBigIntegerField(help_text="Id of the source document")

    posted_at = models.DateTimeField(help_text="Accounting effective timestamp")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "journal_batches"
        ordering = ["-posted_at", "-id"]
        indexes = [
            models.Index(fields=["company", "posted_at"], name="ix_jb_company_posted"),
            models.Index(
                fields=["company", "doc_type", "posted_at"],
                name="ix_jb_company_doctype_posted",
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "doc_type", "doc_id"],
                name="uq_journal_batches_company_doc",
            ),
        ]
        verbose_name_plural = "Journal batches"

    def __str__(self):
        return f"JournalBatch #{self.id} {self.doc_type}:{self.doc_id}"

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalBatch records are immutable once created")

        self.full_clean(validate_unique=False, validate_constraints=False)
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalBatch records are immutable and cannot be deleted")


class JournalLine(models.Model):
    journal_batch = models.ForeignKey(
        JournalBatch,
        on_delete=models.PROTECT,
        related_name="lines",
    )
    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="journal_lines",
    )
    outlet = models.ForeignKey(
        "companies.Outlet",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="journal_lines",
    )
    account = models.ForeignKey(
        "accounting.Account",
        on_delete=models.PROTECT,
        related_name="journal_lines",
    )

    line_date = models.DateField()
    debit = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    credit = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    description = models.CharField(max_length=255)

    class Meta:
        db_table = "journal_lines"
        ordering = ["journal_batch_id", "id"]
        indexes = [
            models.Index(fields=["company", "line_date"], name="ix_jl_company_date"),
            models.Index(fields=["account", "line_date"], name="ix_jl_account_date"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(Q(debit__gt=0) & Q(credit=0)) | (Q(credit__gt=0) & Q(debit=0)),
                name="ck_journal_lines_one_sided",
            ),
        ]

    def __str__(self):
        side = f"Dr {self.debit}" if self.debit else f"Cr {self.credit}"
        return f"{self.account_id} {side}"

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalLine records are immutable once created")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalLine records are immutable and cannot be deleted")
