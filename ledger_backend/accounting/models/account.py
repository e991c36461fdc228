# accounting/models/account.py

from __future__ import annotations

from django.db import models
from django.db.models import Q


class Account(models.Model):
    """
    A single ledger account, scoped to one company.

    Guarantees:
    - Account codes are unique per company
    - Journal lines reference accounts by id only (resolved via outlet mappings)
    """

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"

    ACCOUNT_TYPES = [
        (ASSET, "Asset"),
        (LIABILITY, "Liability"),
        (EQUITY, "Equity"),
        (REVENUE, "Revenue"),
        (EXPENSE, "Expense"),
    ]

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="accounts",
    )

    code = models.CharField(max_length=32)
    name = models.CharField(max_length=150)

    account_type = models.CharField(max_length=20, choices=ACCOUNT_TYPES)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "accounts"
        ordering = ["company_id", "code"]
        indexes = [
            models.Index(fields=["company", "account_type"], name="ix_accounts_company_type"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "code"],
                name="uq_accounts_company_code",
            ),
            models.CheckConstraint(
                condition=~Q(code=""),
                name="ck_accounts_code_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.code} - {self.name}"
