# accounting/services/taxes.py

"""
======================================================
PATH: accounting/services/taxes.py
======================================================
TAX ALLOCATOR

Splits a gross (inclusive) or net (exclusive) amount across an ORDERED list
of tax rates that share one inclusive/exclusive flag.

GUARANTEES:
- sum(allocations) == expected total tax, to the cent
- the whole rounding remainder lands on the LAST rate in the list
- same ordered input -> same output (callers order by id, or name+id)

Rates are TaxRate rows (or anything exposing id, rate_percent, is_inclusive).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from accounting.models.tax import CompanyTaxDefault, TaxRate
from accounting.services.exceptions import MixedTaxInclusiveError
from accounting.services.money import ZERO, normalize_money, sum_money

_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class TaxAllocation:
    tax_rate_id: int
    amount: Decimal


@dataclass(frozen=True)
class TaxConfig:
    rate: Decimal
    inclusive: bool


def _rate_value(rate) -> Decimal:
    value = Decimal(str(rate.rate_percent or 0))
    if not value.is_finite() or value < 0:
        return Decimal("0")
    return value


def _shared_inclusivity(rates) -> bool:
    flags = {bool(r.is_inclusive) for r in rates}
    if len(flags) > 1:
        raise MixedTaxInclusiveError(
            "MIXED_TAX_INCLUSIVE: tax rates disagree on inclusive/exclusive"
        )
    return flags.pop()


def allocate_tax(gross_amount, rates) -> list[TaxAllocation]:
    rates = list(rates)
    if not rates:
        return []

    inclusive = _shared_inclusivity(rates)
    gross = normalize_money(gross_amount)
    total_rate = sum((_rate_value(r) for r in rates), Decimal("0"))

    if total_rate <= 0:
        return [TaxAllocation(tax_rate_id=r.id, amount=ZERO) for r in rates]

    if inclusive:
        base = normalize_money(gross / (1 + total_rate / _HUNDRED))
        expected_total = normalize_money(gross - base)
    else:
        base = gross
        expected_total = normalize_money(base * total_rate / _HUNDRED)

    raw = [normalize_money(base * _rate_value(r) / _HUNDRED) for r in rates]
    remainder = normalize_money(expected_total - sum_money(raw))
    raw[-1] = normalize_money(raw[-1] + remainder)

    return [
        TaxAllocation(tax_rate_id=r.id, amount=amount) for r, amount in zip(rates, raw)
    ]


def combined_tax_config(rates) -> TaxConfig:
    """Collapse rates to a single (rate, inclusive) pair; inclusivity follows the first rate."""
    rates = list(rates)
    if not rates:
        return TaxConfig(rate=Decimal("0"), inclusive=False)

    total = sum((normalize_money(_rate_value(r)) for r in rates), Decimal("0"))
    return TaxConfig(rate=normalize_money(total), inclusive=bool(rates[0].is_inclusive))


def list_company_default_tax_rates(*, company_id: int) -> list[TaxRate]:
    """Active default tax rates for POS sales, ordered by name then id."""
    rate_ids = CompanyTaxDefault.objects.filter(company_id=company_id).values("tax_rate_id")
    return list(
        TaxRate.objects.filter(
            company_id=company_id,
            id__in=rate_ids,
            is_active=True,
        ).order_by("name", "id")
    )
