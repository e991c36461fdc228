# accounting/services/posting_rules.py

"""
POSTING RULES (AUTHORITATIVE)

Defines HOW each business document maps to journal lines.

One mapper class per DocType variant; each is bound to its source record
and exposes map_to_journal(request) -> list[JournalLineDraft].

RESPONSIBILITIES:
- Resolve accounts through outlet mappings
- Construct one-sided debit / credit lines with normalized money

THIS MODULE DOES NOT:
- Write to the database
- Create JournalBatch / JournalLine rows
- Enforce debit == credit (PostingService does, before any write)

The POS sale mapper lives in posting_rules_pos.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from decimal import Decimal

from django.utils import timezone

from accounting.models.journal import DocType
from accounting.models.mapping import MappingKey
from accounting.services.account_mapping import (
    PAYMENT_METHOD_KEYS,
    SALES_REQUIRED_KEYS,
    normalize_method_code,
    resolve_outlet_account_mapping,
)
from accounting.services.exceptions import (
    PostingRuleError,
    UnsupportedPaymentMethodError,
)
from accounting.services.money import ZERO, normalize_money


@dataclass(frozen=True)
class PostingRequest:
    """Unit of work for PostingService. Never persisted."""

    doc_type: str
    doc_id: int
    company_id: int
    outlet_id: int | None = None


@dataclass(frozen=True)
class JournalLineDraft:
    account_id: int
    debit: Decimal
    credit: Decimal
    description: str


def debit_line(account_id: int, amount, description: str) -> JournalLineDraft:
    return JournalLineDraft(
        account_id=account_id,
        debit=normalize_money(amount),
        credit=ZERO,
        description=description,
    )


def credit_line(account_id: int, amount, description: str) -> JournalLineDraft:
    return JournalLineDraft(
        account_id=account_id,
        debit=ZERO,
        credit=normalize_money(amount),
        description=description,
    )


class PostingMapper:
    """Base class: one subclass per DocType."""

    doc_type: str = ""

    def map_to_journal(self, request: PostingRequest) -> list[JournalLineDraft]:
        raise NotImplementedError

    def posted_at(self) -> datetime | None:
        """Accounting effective timestamp; None means 'now'."""
        return None

    def build_request(self) -> PostingRequest:
        raise NotImplementedError


# ============================================================
# SALES INVOICE
# ============================================================
class SalesInvoicePostingMapper(PostingMapper):
    """
    Posted invoice -> ledger.

    Accounting Effect:
    - Debit  AR             (grand_total)
    - Credit Sales Revenue  (subtotal)
    - Credit Sales Tax      (tax_amount, only if > 0)

    The stored tax_amount is authoritative; no tax allocation here.
    """

    doc_type = DocType.SALES_INVOICE

    def __init__(self, invoice):
        self.invoice = invoice

    def build_request(self) -> PostingRequest:
        inv = self.invoice
        return PostingRequest(
            doc_type=self.doc_type,
            doc_id=inv.id,
            company_id=inv.company_id,
            outlet_id=inv.outlet_id,
        )

    def map_to_journal(self, request: PostingRequest) -> list[JournalLineDraft]:
        inv = self.invoice
        accounts = resolve_outlet_account_mapping(
            company_id=inv.company_id,
            outlet_id=inv.outlet_id,
            required_keys=SALES_REQUIRED_KEYS,
        )

        label = f"Invoice {inv.invoice_no}"
        lines = [
            debit_line(accounts[MappingKey.AR], inv.grand_total, f"{label} - AR"),
            credit_line(accounts[MappingKey.SALES_REVENUE], inv.subtotal, f"{label} - Revenue"),
        ]

        tax_amount = normalize_money(inv.tax_amount)
        if tax_amount > 0:
            lines.append(credit_line(accounts[MappingKey.SALES_TAX], tax_amount, f"{label} - Tax"))

        return lines


# ============================================================
# SALES PAYMENT (IN)
# ============================================================
class SalesPaymentPostingMapper(PostingMapper):
    """
    Posted payment -> ledger.

    Accounting Effect:
    - Debit  CASH / QRIS / CARD  (amount)
    - Credit AR                  (amount)

    The method account is resolved through outlet mappings (never read off
    the payment row).
    """

    doc_type = DocType.SALES_PAYMENT_IN

    def __init__(self, payment):
        self.payment = payment

    def build_request(self) -> PostingRequest:
        pay = self.payment
        return PostingRequest(
            doc_type=self.doc_type,
            doc_id=pay.id,
            company_id=pay.company_id,
            outlet_id=pay.outlet_id,
        )

    def map_to_journal(self, request: PostingRequest) -> list[JournalLineDraft]:
        pay = self.payment
        method_key = normalize_method_code(pay.method)
        if method_key not in PAYMENT_METHOD_KEYS:
            raise UnsupportedPaymentMethodError(pay.method)

        accounts = resolve_outlet_account_mapping(
            company_id=pay.company_id,
            outlet_id=pay.outlet_id,
            required_keys=SALES_REQUIRED_KEYS,
        )

        label = f"Payment {pay.payment_no} for Invoice {pay.invoice.invoice_no}"
        return [
            debit_line(accounts[method_key], pay.amount, f"{label} - {method_key}"),
            credit_line(accounts[MappingKey.AR], pay.amount, f"{label} - AR"),
        ]


# ============================================================
# DEPRECIATION RUN
# ============================================================
class DepreciationPostingMapper(PostingMapper):
    """
    Depreciation run -> ledger.

    Accounting Effect:
    - Debit  Depreciation Expense       (run.amount)
    - Credit Accumulated Depreciation   (run.amount)

    Accounts come from the plan, not from outlet mappings.
    """

    doc_type = DocType.DEPRECIATION

    def __init__(self, run):
        self.run = run

    def build_request(self) -> PostingRequest:
        run = self.run
        return PostingRequest(
            doc_type=self.doc_type,
            doc_id=run.id,
            company_id=run.company_id,
            outlet_id=run.plan.outlet_id,
        )

    def posted_at(self) -> datetime | None:
        return timezone.make_aware(
            datetime.combine(self.run.run_date, time.min),
            timezone.get_current_timezone(),
        )

    def map_to_journal(self, request: PostingRequest) -> list[JournalLineDraft]:
        run = self.run
        plan = run.plan
        period = f"{run.period_year:04d}-{run.period_month:02d}"
        return [
            debit_line(plan.expense_account_id, run.amount, f"Depreciation for period {period}"),
            credit_line(
                plan.accum_depr_account_id,
                run.amount,
                f"Accumulated depreciation for period {period}",
            ),
        ]


def mapper_for_document(document) -> PostingMapper:
    """
    Pick the mapper variant for a source record.

    Imports are local: source apps import accounting services, not the reverse.
    """
    from assets.models import DepreciationRun
    from pos.models import PosTransaction
    from sales.models import SalesInvoice, SalesPayment

    from accounting.services.posting_rules_pos import PosSalePostingMapper

    if isinstance(document, SalesInvoice):
        return SalesInvoicePostingMapper(document)
    if isinstance(document, SalesPayment):
        return SalesPaymentPostingMapper(document)
    if isinstance(document, DepreciationRun):
        return DepreciationPostingMapper(document)
    if isinstance(document, PosTransaction):
        return PosSalePostingMapper(document)

    raise PostingRuleError(f"No posting rule for {type(document).__name__}")
