# accounting/models/tax.py

from __future__ import annotations

from django.db import models
from django.db.models import Q


class TaxRate(models.Model):
    """
    A company tax rate. rate_percent is a percentage (11.0000 == 11%).

    is_inclusive: the rate is already contained in item prices (extract it)
    rather than added on top.
    """

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="tax_rates",
    )
    code = models.CharField(max_length=32)
    name = models.CharField(max_length=120)
    rate_percent = models.DecimalField(max_digits=9, decimal_places=4)
    is_inclusive = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tax_rates"
        ordering = ["company_id", "name", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "code"],
                name="uq_tax_rates_company_code",
            ),
            models.CheckConstraint(
                condition=Q(rate_percent__gte=0) & Q(rate_percent__lte=100),
                name="ck_tax_rates_rate_percent_range",
            ),
        ]

    def __str__(self):
        kind = "incl" if self.is_inclusive else "excl"
        return f"{self.code} {self.rate_percent}% ({kind})"


class CompanyTaxDefault(models.Model):
    """Tax rates applied to POS sales that carry no per-transaction breakdown."""

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.CASCADE,
        related_name="tax_defaults",
    )
    tax_rate = models.ForeignKey(
        TaxRate,
        on_delete=models.CASCADE,
        related_name="company_defaults",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "company_tax_defaults"
        constraints = [
            models.UniqueConstraint(
                fields=["company", "tax_rate"],
                name="uq_company_tax_defaults",
            ),
        ]

    def __str__(self):
        return f"{self.company_id} default {self.tax_rate_id}"
