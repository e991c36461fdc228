"""
PATH: sales/models/sales_payment.py

SALES PAYMENT (IN) MODEL

Lifecycle: DRAFT -> POSTED, DRAFT -> VOID.
- A payment settles (part of) one POSTED invoice of the same outlet.
- Posting writes exactly one SALES_PAYMENT_IN journal batch.
"""

from decimal import Decimal

from django.db import models
from django.db.models import Q


class SalesPayment(models.Model):
    STATUS_DRAFT = "DRAFT"
    STATUS_POSTED = "POSTED"
    STATUS_VOID = "VOID"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_POSTED, "Posted"),
        (STATUS_VOID, "Void"),
    ]

    METHOD_CASH = "CASH"
    METHOD_QRIS = "QRIS"
    METHOD_CARD = "CARD"

    METHOD_CHOICES = [
        (METHOD_CASH, "Cash"),
        (METHOD_QRIS, "QRIS"),
        (METHOD_CARD, "Card"),
    ]

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="sales_payments",
    )
    outlet = models.ForeignKey(
        "companies.Outlet",
        on_delete=models.PROTECT,
        related_name="sales_payments",
    )
    invoice = models.ForeignKey(
        "sales.SalesInvoice",
        on_delete=models.PROTECT,
        related_name="payments",
    )

    payment_no = models.CharField(max_length=64)
    payment_at = models.DateTimeField()
    method = models.CharField(max_length=16, choices=METHOD_CHOICES)

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_DRAFT)
    amount = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "sales_payments"
        ordering = ["-payment_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "payment_no"],
                name="uq_sales_payments_company_no",
            ),
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="ck_sales_payments_amount_positive",
            ),
        ]

    def __str__(self):
        return f"Payment {self.payment_no} ({self.method} {self.amount})"
