# accounting/services/account_mapping.py

"""
======================================================
PATH: accounting/services/account_mapping.py
======================================================
OUTLET ACCOUNT MAPPING RESOLVER (AUTHORITATIVE)

Answers ONE question per (company, outlet):
"Which ledger account plays this role?"

Design goals:
- one query per resolution, restricted to the requested keys
- fail closed and fully: ALL missing keys are reported in one error
- payment methods: a specific outlet_payment_method_mappings row always wins;
  the generic CASH / QRIS / CARD role mapping is only a fallback
"""

from __future__ import annotations

import logging

from accounting.models.mapping import (
    MappingKey,
    OutletAccountMapping,
    OutletPaymentMethodMapping,
)
from accounting.services.exceptions import OutletAccountMappingMissingError

logger = logging.getLogger(__name__)

PAYMENT_METHOD_KEYS = (MappingKey.CASH, MappingKey.QRIS, MappingKey.CARD)

SALES_REQUIRED_KEYS = (
    MappingKey.CASH,
    MappingKey.QRIS,
    MappingKey.CARD,
    MappingKey.SALES_REVENUE,
    MappingKey.SALES_TAX,
    MappingKey.AR,
)


def normalize_method_code(method) -> str:
    return str(method or "").strip().upper()


def resolve_outlet_account_mapping(
    *, company_id: int, outlet_id: int, required_keys
) -> dict[str, int]:
    keys = [str(k) for k in dict.fromkeys(required_keys)]
    if not keys:
        return {}

    rows = OutletAccountMapping.objects.filter(
        company_id=company_id,
        outlet_id=outlet_id,
        mapping_key__in=keys,
    ).values_list("mapping_key", "account_id")

    resolved = {key: account_id for key, account_id in rows}
    missing = [k for k in keys if k not in resolved]
    if missing:
        logger.warning(
            "Outlet account mapping incomplete",
            extra={"company_id": company_id, "outlet_id": outlet_id, "missing_keys": missing},
        )
        raise OutletAccountMappingMissingError(
            missing, company_id=company_id, outlet_id=outlet_id
        )

    return resolved


def resolve_payment_method_accounts(
    *, company_id: int, outlet_id: int, method_codes
) -> dict[str, int]:
    """
    Map payment method codes to account ids.

    Codes that resolve to nothing are simply absent from the result; the
    caller decides which error that is.
    """
    codes = [c for c in dict.fromkeys(normalize_method_code(m) for m in method_codes) if c]
    if not codes:
        return {}

    specific = {
        code: account_id
        for code, account_id in OutletPaymentMethodMapping.objects.filter(
            company_id=company_id,
            outlet_id=outlet_id,
            method_code__in=codes,
        ).values_list("method_code", "account_id")
    }

    fallback_codes = [c for c in codes if c not in specific and c in PAYMENT_METHOD_KEYS]
    fallback = {}
    if fallback_codes:
        fallback = {
            key: account_id
            for key, account_id in OutletAccountMapping.objects.filter(
                company_id=company_id,
                outlet_id=outlet_id,
                mapping_key__in=fallback_codes,
            ).values_list("mapping_key", "account_id")
        }

    resolved = {}
    for code in codes:
        if code in specific:
            resolved[code] = specific[code]
        elif code in fallback:
            resolved[code] = fallback[code]
    return resolved
