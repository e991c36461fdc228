# accounting/models/mapping.py

"""
OUTLET ACCOUNT MAPPINGS

Per (company, outlet) lookup from a logical role to a concrete account.
Configured by company admins; read-only from the posting engine.

- OutletAccountMapping: closed set of role keys (MappingKey).
- OutletPaymentMethodMapping: open set of payment method codes (uppercased).
  A row here always wins over the generic CASH/QRIS/CARD role mapping.
"""

from __future__ import annotations

from django.db import models


class MappingKey(models.TextChoices):
    CASH = "CASH", "Cash"
    QRIS = "QRIS", "QRIS"
    CARD = "CARD", "Card"
    SALES_REVENUE = "SALES_REVENUE", "Sales revenue"
    SALES_TAX = "SALES_TAX", "Sales tax payable"
    AR = "AR", "Accounts receivable"


class OutletAccountMapping(models.Model):
    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.CASCADE,
        related_name="outlet_account_mappings",
    )
    outlet = models.ForeignKey(
        "companies.Outlet",
        on_delete=models.CASCADE,
        related_name="account_mappings",
    )
    mapping_key = models.CharField(max_length=32, choices=MappingKey.choices)
    account = models.ForeignKey(
        "accounting.Account",
        on_delete=models.PROTECT,
        related_name="outlet_mappings",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "outlet_account_mappings"
        constraints = [
            models.UniqueConstraint(
                fields=["company", "outlet", "mapping_key"],
                name="uq_outlet_account_mappings_key",
            ),
        ]

    def __str__(self):
        return f"{self.outlet_id}:{self.mapping_key} -> {self.account_id}"


class OutletPaymentMethodMapping(models.Model):
    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.CASCADE,
        related_name="outlet_payment_method_mappings",
    )
    outlet = models.ForeignKey(
        "companies.Outlet",
        on_delete=models.CASCADE,
        related_name="payment_method_mappings",
    )
    method_code = models.CharField(max_length=32)
    account = models.ForeignKey(
        "accounting.Account",
        on_delete=models.PROTECT,
        related_name="payment_method_mappings",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "outlet_payment_method_mappings"
        constraints = [
            models.UniqueConstraint(
                fields=["company", "outlet", "method_code"],
                name="uq_outlet_payment_method_mappings_code",
            ),
        ]

    def __str__(self):
        return f"{self.outlet_id}:{self.method_code} -> {self.account_id}"

    def save(self, *args, **kwargs):
        self.method_code = (self.method_code or "").strip().upper()
        return super().save(*args, **kwargs)
