"""
PATH: sales/models/sales_invoice.py

SALES INVOICE MODEL

Lifecycle: DRAFT -> POSTED, DRAFT -> VOID.
- Posting an invoice writes exactly one SALES_INVOICE journal batch.
- Totals are stored; tax_amount is authoritative for posting.
- paid_total / payment_status are maintained by payment posting.
"""

from decimal import Decimal

from django.db import models
from django.db.models import Q


class SalesInvoice(models.Model):
    STATUS_DRAFT = "DRAFT"
    STATUS_POSTED = "POSTED"
    STATUS_VOID = "VOID"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_POSTED, "Posted"),
        (STATUS_VOID, "Void"),
    ]

    PAYMENT_UNPAID = "UNPAID"
    PAYMENT_PARTIAL = "PARTIAL"
    PAYMENT_PAID = "PAID"

    PAYMENT_STATUS_CHOICES = [
        (PAYMENT_UNPAID, "Unpaid"),
        (PAYMENT_PARTIAL, "Partially paid"),
        (PAYMENT_PAID, "Paid"),
    ]

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="sales_invoices",
    )
    outlet = models.ForeignKey(
        "companies.Outlet",
        on_delete=models.PROTECT,
        related_name="sales_invoices",
    )

    invoice_no = models.CharField(max_length=64)
    invoice_date = models.DateField()

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_DRAFT)
    payment_status = models.CharField(
        max_length=16,
        choices=PAYMENT_STATUS_CHOICES,
        default=PAYMENT_UNPAID,
    )

    subtotal = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    grand_total = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    paid_total = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "sales_invoices"
        ordering = ["-invoice_date", "-id"]
        indexes = [
            models.Index(fields=["company", "status"], name="ix_sales_invoices_status"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "invoice_no"],
                name="uq_sales_invoices_company_no",
            ),
            models.CheckConstraint(
                condition=Q(subtotal__gte=0) & Q(tax_amount__gte=0) & Q(grand_total__gte=0),
                name="ck_sales_invoices_amounts_non_negative",
            ),
        ]

    def __str__(self):
        return f"Invoice {self.invoice_no} ({self.status})"
