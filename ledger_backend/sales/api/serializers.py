# sales/api/serializers.py

from rest_framework import serializers

from sales.models import SalesInvoice, SalesPayment


class SalesInvoiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = SalesInvoice
        fields = (
            "id",
            "outlet",
            "invoice_no",
            "invoice_date",
            "status",
            "payment_status",
            "subtotal",
            "tax_amount",
            "grand_total",
            "paid_total",
        )
        read_only_fields = fields


class SalesPaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = SalesPayment
        fields = (
            "id",
            "outlet",
            "invoice",
            "payment_no",
            "payment_at",
            "method",
            "status",
            "amount",
        )
        read_only_fields = fields


def posting_payload(posting) -> dict:
    """journal_batch_id + already_posted for a PostingResult (None = document was already POSTED)."""
    if posting is None:
        return {"journal_batch_id": None, "already_posted": True}
    return {"journal_batch_id": posting.journal_batch_id, "already_posted": posting.already_posted}
