"""
PATH: pos/models/pos_transaction.py

POS TRANSACTION (SYNCED FROM OFFLINE TERMINALS)

Rules:
- client_tx_id is the terminal-generated idempotency key (globally unique);
  a re-pushed transaction is a DUPLICATE, never a second row.
- Only COMPLETED transactions are posted (POS_SALE journal batch).
- Items / payments / taxes are snapshots written once with the transaction.
"""

from django.db import models


class PosTransaction(models.Model):
    STATUS_COMPLETED = "COMPLETED"
    STATUS_VOID = "VOID"
    STATUS_REFUND = "REFUND"

    STATUS_CHOICES = [
        (STATUS_COMPLETED, "Completed"),
        (STATUS_VOID, "Void"),
        (STATUS_REFUND, "Refund"),
    ]

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="pos_transactions",
    )
    outlet = models.ForeignKey(
        "companies.Outlet",
        on_delete=models.PROTECT,
        related_name="pos_transactions",
    )

    client_tx_id = models.CharField(max_length=64, unique=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES)
    trx_at = models.DateTimeField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pos_transactions"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["company", "status"], name="ix_pos_tx_company_status"),
            models.Index(fields=["company", "outlet", "trx_at"], name="ix_pos_tx_outlet_trx_at"),
        ]

    def __str__(self):
        return f"POS {self.client_tx_id} ({self.status})"


class PosTransactionItem(models.Model):
    pos_transaction = models.ForeignKey(
        PosTransaction,
        on_delete=models.CASCADE,
        related_name="items",
    )
    line_no = models.PositiveIntegerField()
    item_id = models.PositiveBigIntegerField(help_text="Catalog item id at sale time")
    name_snapshot = models.CharField(max_length=191)
    qty = models.DecimalField(max_digits=18, decimal_places=4)
    price_snapshot = models.DecimalField(max_digits=18, decimal_places=2)

    class Meta:
        db_table = "pos_transaction_items"
        ordering = ["pos_transaction_id", "line_no"]
        constraints = [
            models.UniqueConstraint(
                fields=["pos_transaction", "line_no"],
                name="uq_pos_transaction_items_line",
            ),
        ]


class PosTransactionPayment(models.Model):
    pos_transaction = models.ForeignKey(
        PosTransaction,
        on_delete=models.CASCADE,
        related_name="payments",
    )
    payment_no = models.PositiveIntegerField()
    method = models.CharField(max_length=32)
    amount = models.DecimalField(max_digits=18, decimal_places=2)

    class Meta:
        db_table = "pos_transaction_payments"
        ordering = ["pos_transaction_id", "payment_no"]
        constraints = [
            models.UniqueConstraint(
                fields=["pos_transaction", "payment_no"],
                name="uq_pos_transaction_payments_no",
            ),
        ]


class PosTransactionTax(models.Model):
    """Stored per-transaction tax breakdown; preferred over company defaults when posting."""

    pos_transaction = models.ForeignKey(
        PosTransaction,
        on_delete=models.CASCADE,
        related_name="taxes",
    )
    tax_rate = models.ForeignKey(
        "accounting.TaxRate",
        on_delete=models.PROTECT,
        related_name="pos_transaction_taxes",
    )
    amount = models.DecimalField(max_digits=18, decimal_places=2)

    class Meta:
        db_table = "pos_transaction_taxes"
        constraints = [
            models.UniqueConstraint(
                fields=["pos_transaction", "tax_rate"],
                name="uq_pos_transaction_taxes_rate",
            ),
        ]
