"""
PATH: sales/services/sales_posting.py

SALES POSTING WORKFLOWS (invoice post, payment post)

Each workflow runs in ONE transaction:
- lock the document row (select_for_update)
- apply the status transition
- post the journal batch via PostingService (transaction_owner="external")
Any posting failure rolls back the status change too.

Re-posting an already POSTED document is a no-op that returns it unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction

from accounting.services.money import normalize_money
from accounting.services.posting_rules import mapper_for_document
from accounting.services.posting_service import (
    TRANSACTION_OWNER_EXTERNAL,
    PostingResult,
    PostingService,
)
from sales.models import SalesInvoice, SalesPayment

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================
class SalesPostingError(Exception):
    code = "SALES_POSTING_ERROR"


class InvoiceStatusError(SalesPostingError):
    code = "INVOICE_STATUS_INVALID"


class PaymentStatusError(SalesPostingError):
    code = "PAYMENT_STATUS_INVALID"


class PaymentAllocationError(SalesPostingError):
    code = "PAYMENT_ALLOCATION_INVALID"


@dataclass(frozen=True)
class InvoicePostingOutcome:
    invoice: SalesInvoice
    posting: PostingResult | None


@dataclass(frozen=True)
class PaymentPostingOutcome:
    payment: SalesPayment
    posting: PostingResult | None


# ============================================================
# INVOICE
# ============================================================
@transaction.atomic
def post_sales_invoice(*, company_id: int, invoice_id: int) -> InvoicePostingOutcome:
    invoice = (
        SalesInvoice.objects.select_for_update()
        .filter(company_id=company_id, id=invoice_id)
        .first()
    )
    if invoice is None:
        raise SalesInvoice.DoesNotExist(f"Invoice {invoice_id} not found")

    if invoice.status == SalesInvoice.STATUS_POSTED:
        return InvoicePostingOutcome(invoice=invoice, posting=None)

    if invoice.status != SalesInvoice.STATUS_DRAFT:
        raise InvoiceStatusError(f"Invoice {invoice.invoice_no} cannot be posted from {invoice.status}")

    invoice.status = SalesInvoice.STATUS_POSTED
    invoice.save(update_fields=["status", "updated_at"])

    result = PostingService(mapper_for_document(invoice)).post(transaction_owner=TRANSACTION_OWNER_EXTERNAL)

    logger.info(
        "Sales invoice posted",
        extra={"invoice_id": invoice.id, "journal_batch_id": result.journal_batch_id},
    )
    return InvoicePostingOutcome(invoice=invoice, posting=result)


# ============================================================
# PAYMENT
# ============================================================
def _payment_status_for(paid_total, grand_total) -> str:
    if paid_total >= grand_total:
        return SalesInvoice.PAYMENT_PAID
    if paid_total > 0:
        return SalesInvoice.PAYMENT_PARTIAL
    return SalesInvoice.PAYMENT_UNPAID


@transaction.atomic
def post_sales_payment(*, company_id: int, payment_id: int) -> PaymentPostingOutcome:
    payment = (
        SalesPayment.objects.select_for_update()
        .filter(company_id=company_id, id=payment_id)
        .first()
    )
    if payment is None:
        raise SalesPayment.DoesNotExist(f"Payment {payment_id} not found")

    if payment.status == SalesPayment.STATUS_POSTED:
        return PaymentPostingOutcome(payment=payment, posting=None)

    if payment.status != SalesPayment.STATUS_DRAFT:
        raise PaymentStatusError(f"Payment {payment.payment_no} cannot be posted from {payment.status}")

    invoice = (
        SalesInvoice.objects.select_for_update()
        .filter(company_id=company_id, id=payment.invoice_id)
        .first()
    )
    if invoice is None:
        raise PaymentAllocationError("Invoice not found")
    if invoice.status == SalesInvoice.STATUS_VOID:
        raise PaymentAllocationError("Invoice is void")
    if invoice.status != SalesInvoice.STATUS_POSTED:
        raise PaymentAllocationError("Invoice is not posted")

    outstanding = normalize_money(invoice.grand_total - invoice.paid_total)
    if outstanding <= 0:
        raise PaymentAllocationError("Invoice is fully paid")
    if normalize_money(payment.amount) > outstanding:
        raise PaymentAllocationError("Payment amount exceeds invoice outstanding")

    payment.status = SalesPayment.STATUS_POSTED
    payment.save(update_fields=["status", "updated_at"])

    invoice.paid_total = normalize_money(invoice.paid_total + payment.amount)
    invoice.payment_status = _payment_status_for(invoice.paid_total, invoice.grand_total)
    invoice.save(update_fields=["paid_total", "payment_status", "updated_at"])

    # Label reads the locked invoice row.
    payment.invoice = invoice
    result = PostingService(mapper_for_document(payment)).post(transaction_owner=TRANSACTION_OWNER_EXTERNAL)

    logger.info(
        "Sales payment posted",
        extra={"payment_id": payment.id, "journal_batch_id": result.journal_batch_id},
    )
    return PaymentPostingOutcome(payment=payment, posting=result)
