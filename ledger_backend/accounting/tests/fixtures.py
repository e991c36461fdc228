# accounting/tests/fixtures.py

"""
ORM builders shared by the posting-engine tests (accounting, sales, assets, pos).

Each helper creates the minimum valid rows; nothing is cached between tests.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from django.utils import timezone

from accounting.models import (
    Account,
    CompanyTaxDefault,
    MappingKey,
    OutletAccountMapping,
    TaxRate,
)
from companies.models import Company, Outlet
from pos.models import (
    PosTransaction,
    PosTransactionItem,
    PosTransactionPayment,
    PosTransactionTax,
)

ACCOUNT_TYPE_BY_KEY = {
    MappingKey.CASH: Account.ASSET,
    MappingKey.QRIS: Account.ASSET,
    MappingKey.CARD: Account.ASSET,
    MappingKey.AR: Account.ASSET,
    MappingKey.SALES_REVENUE: Account.REVENUE,
    MappingKey.SALES_TAX: Account.LIABILITY,
}

CODE_BY_KEY = {
    MappingKey.CASH: "1100",
    MappingKey.QRIS: "1110",
    MappingKey.CARD: "1120",
    MappingKey.AR: "1200",
    MappingKey.SALES_TAX: "2100",
    MappingKey.SALES_REVENUE: "4000",
}


def make_company(code: str = "ACME") -> Company:
    return Company.objects.create(code=code, name=f"{code} Company")


def make_outlet(company: Company, code: str = "MAIN") -> Outlet:
    return Outlet.objects.create(company=company, code=code, name=f"{code} Outlet")


def make_account(company: Company, code: str, name: str = "", account_type: str = Account.ASSET) -> Account:
    return Account.objects.create(
        company=company,
        code=code,
        name=name or f"Account {code}",
        account_type=account_type,
    )


def map_outlet_accounts(company: Company, outlet: Outlet, keys=None) -> dict[str, Account]:
    """Create one account per mapping key and map it for the outlet."""
    keys = list(keys if keys is not None else CODE_BY_KEY.keys())
    accounts = {}
    for key in keys:
        code = f"{CODE_BY_KEY[key]}-{outlet.code}"
        account = Account.objects.filter(company=company, code=code).first()
        if account is None:
            account = make_account(company, code, str(key), ACCOUNT_TYPE_BY_KEY[key])
        OutletAccountMapping.objects.create(
            company=company,
            outlet=outlet,
            mapping_key=key,
            account=account,
        )
        accounts[str(key)] = account
    return accounts


def make_tax_rate(
    company: Company,
    code: str,
    rate_percent,
    *,
    inclusive: bool = False,
    default: bool = False,
    name: str = "",
    is_active: bool = True,
) -> TaxRate:
    rate = TaxRate.objects.create(
        company=company,
        code=code,
        name=name or code,
        rate_percent=Decimal(str(rate_percent)),
        is_inclusive=inclusive,
        is_active=is_active,
    )
    if default:
        CompanyTaxDefault.objects.create(company=company, tax_rate=rate)
    return rate


def make_pos_transaction(
    company: Company,
    outlet: Outlet,
    *,
    client_tx_id: str,
    items=(("1", "100.00"),),
    payments=(("CASH", "100.00"),),
    taxes=(),
    status: str = PosTransaction.STATUS_COMPLETED,
    trx_at: datetime | None = None,
) -> PosTransaction:
    """items: (qty, price); payments: (method, amount); taxes: (TaxRate, amount)."""
    tx = PosTransaction.objects.create(
        company=company,
        outlet=outlet,
        client_tx_id=client_tx_id,
        status=status,
        trx_at=trx_at or timezone.now(),
    )
    for line_no, (qty, price) in enumerate(items, start=1):
        PosTransactionItem.objects.create(
            pos_transaction=tx,
            line_no=line_no,
            item_id=line_no,
            name_snapshot=f"Item {line_no}",
            qty=Decimal(str(qty)),
            price_snapshot=Decimal(str(price)),
        )
    for payment_no, (method, amount) in enumerate(payments, start=1):
        PosTransactionPayment.objects.create(
            pos_transaction=tx,
            payment_no=payment_no,
            method=method,
            amount=Decimal(str(amount)),
        )
    for tax_rate, amount in taxes:
        PosTransactionTax.objects.create(
            pos_transaction=tx,
            tax_rate=tax_rate,
            amount=Decimal(str(amount)),
        )
    return tx
