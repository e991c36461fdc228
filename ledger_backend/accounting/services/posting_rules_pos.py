# accounting/services/posting_rules_pos.py

"""
POSTING RULES: POS SALES (AUTHORITATIVE)

Maps one synced POS transaction to journal lines.

Accounting Effect:
- Debit  <payment method account>  (per method: SUM(amount))
- Debit  AR                         (unpaid remainder, only if > 0)
- Credit Sales Revenue              (gross, minus extracted tax when inclusive)
- Credit Sales Tax                  (only if tax > 0)

Tax split:
1) Stored per-transaction breakdown (pos_transaction_taxes) is preferred.
2) Otherwise the company default tax rates (Tax Allocator).

Failure codes:
- POS_EMPTY_PAYMENT_SET          no positive payment
- UNSUPPORTED_PAYMENT_METHOD     blank method code
- OUTLET_PAYMENT_MAPPING_MISSING method has no account (specific or fallback)
- POS_OVERPAYMENT_NOT_SUPPORTED  payments exceed amount due
- UNBALANCED_JOURNAL             gross sales <= 0
- MIXED_TAX_INCLUSIVE            tax rows disagree on inclusivity
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from django.conf import settings
from django.db.models import Sum

from accounting.models.journal import DocType
from accounting.models.mapping import MappingKey
from accounting.services.account_mapping import (
    normalize_method_code,
    resolve_outlet_account_mapping,
    resolve_payment_method_accounts,
)
from accounting.services.exceptions import (
    MixedTaxInclusiveError,
    OutletPaymentMappingMissingError,
    PosEmptyPaymentSetError,
    PosOverpaymentNotSupportedError,
    UnbalancedJournalError,
    UnsupportedPaymentMethodError,
)
from accounting.services.money import (
    from_minor_units,
    normalize_money,
    sum_money,
    to_minor_units,
)
from accounting.services.posting_rules import (
    JournalLineDraft,
    PostingMapper,
    PostingRequest,
    credit_line,
    debit_line,
)
from accounting.services.taxes import (
    allocate_tax,
    combined_tax_config,
    list_company_default_tax_rates,
)

POS_REQUIRED_KEYS = (MappingKey.SALES_REVENUE, MappingKey.SALES_TAX, MappingKey.AR)


@dataclass(frozen=True)
class PosSaleSplit:
    gross: Decimal
    revenue: Decimal
    tax: Decimal
    inclusive: bool

    @property
    def total_due(self) -> Decimal:
        if self.inclusive:
            return self.gross
        return normalize_money(self.gross + self.tax)


def force_unbalanced_enabled() -> bool:
    """Test-only switch; never honored in production."""
    if getattr(settings, "APP_ENV", "") == "production":
        return False
    return bool(getattr(settings, "JP_SYNC_PUSH_POSTING_FORCE_UNBALANCED", False))


class PosSalePostingMapper(PostingMapper):
    doc_type = DocType.POS_SALE

    def __init__(self, pos_transaction, *, force_unbalanced: bool | None = None):
        self.pos_transaction = pos_transaction
        if force_unbalanced is None:
            force_unbalanced = force_unbalanced_enabled()
        self.force_unbalanced = force_unbalanced

    def build_request(self) -> PostingRequest:
        tx = self.pos_transaction
        return PostingRequest(
            doc_type=self.doc_type,
            doc_id=tx.id,
            company_id=tx.company_id,
            outlet_id=tx.outlet_id,
        )

    def posted_at(self) -> datetime | None:
        return self.pos_transaction.trx_at

    # --------------------------------------------------
    # READS
    # --------------------------------------------------
    def payment_totals(self) -> list[tuple[str, Decimal]]:
        """Positive per-method totals, ordered by method code."""
        from pos.models import PosTransactionPayment

        rows = (
            PosTransactionPayment.objects.filter(pos_transaction_id=self.pos_transaction.id)
            .values("method")
            .annotate(total=Sum("amount"))
            .order_by("method")
        )

        minor_by_method: dict[str, int] = {}
        for row in rows:
            code = normalize_method_code(row["method"])
            minor_by_method[code] = minor_by_method.get(code, 0) + to_minor_units(row["total"])

        totals = [
            (code, from_minor_units(minor))
            for code, minor in sorted(minor_by_method.items())
            if minor > 0
        ]
        if not totals:
            raise PosEmptyPaymentSetError(
                f"POS_EMPTY_PAYMENT_SET: transaction {self.pos_transaction.id} has no positive payments"
            )
        return totals

    def gross_sales(self) -> Decimal:
        from pos.models import PosTransactionItem

        items = PosTransactionItem.objects.filter(
            pos_transaction_id=self.pos_transaction.id
        ).values_list("qty", "price_snapshot")
        return sum_money(Decimal(qty) * Decimal(price) for qty, price in items)

    def sale_split(self, gross: Decimal) -> PosSaleSplit:
        from pos.models import PosTransactionTax

        taxes = list(
            PosTransactionTax.objects.filter(
                pos_transaction_id=self.pos_transaction.id,
                amount__gt=0,
            )
            .select_related("tax_rate")
            .order_by("tax_rate_id")
        )

        if taxes:
            flags = {bool(t.tax_rate.is_inclusive) for t in taxes}
            if len(flags) > 1:
                raise MixedTaxInclusiveError(
                    f"MIXED_TAX_INCLUSIVE: transaction {self.pos_transaction.id} "
                    "mixes inclusive and exclusive tax rows"
                )
            inclusive = flags.pop()
            tax = sum_money(t.amount for t in taxes)
        else:
            rates = list_company_default_tax_rates(company_id=self.pos_transaction.company_id)
            allocations = allocate_tax(gross, rates)
            inclusive = combined_tax_config(rates).inclusive
            tax = sum_money(a.amount for a in allocations)

        revenue = normalize_money(gross - tax) if inclusive else gross
        return PosSaleSplit(gross=gross, revenue=revenue, tax=tax, inclusive=inclusive)

    # --------------------------------------------------
    # MAPPING
    # --------------------------------------------------
    def map_to_journal(self, request: PostingRequest) -> list[JournalLineDraft]:
        tx = self.pos_transaction
        payments = self.payment_totals()

        gross = self.gross_sales()
        if gross <= 0:
            raise UnbalancedJournalError(
                f"UNBALANCED_JOURNAL: transaction {tx.id} has non-positive gross sales ({gross})"
            )
        split = self.sale_split(gross)

        accounts = resolve_outlet_account_mapping(
            company_id=tx.company_id,
            outlet_id=tx.outlet_id,
            required_keys=POS_REQUIRED_KEYS,
        )
        method_accounts = resolve_payment_method_accounts(
            company_id=tx.company_id,
            outlet_id=tx.outlet_id,
            method_codes=[code for code, _ in payments],
        )

        lines: list[JournalLineDraft] = []
        for code, amount in payments:
            if not code:
                raise UnsupportedPaymentMethodError(code)
            account_id = method_accounts.get(code)
            if account_id is None:
                raise OutletPaymentMappingMissingError(
                    code, company_id=tx.company_id, outlet_id=tx.outlet_id
                )
            lines.append(debit_line(account_id, amount, f"POS {code} receipt"))

        payment_total = sum_money(amount for _, amount in payments)
        receivable = normalize_money(split.total_due - payment_total)
        if receivable < 0:
            raise PosOverpaymentNotSupportedError(
                f"POS_OVERPAYMENT_NOT_SUPPORTED: transaction {tx.id} paid {payment_total} "
                f"against {split.total_due} due"
            )
        if receivable > 0:
            lines.append(debit_line(accounts[MappingKey.AR], receivable, "POS outstanding receivable"))

        lines.append(credit_line(accounts[MappingKey.SALES_REVENUE], split.revenue, "POS sales revenue"))
        if split.tax > 0:
            lines.append(credit_line(accounts[MappingKey.SALES_TAX], split.tax, "POS sales tax"))

        if self.force_unbalanced:
            first = lines[0]
            lines[0] = debit_line(
                first.account_id, first.debit + Decimal("0.01"), first.description
            )

        return lines
