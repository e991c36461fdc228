# accounting/models/__init__.py

"""
ACCOUNTING MODELS PACKAGE EXPORTS

Keep this file imports-only. Models never import services.
"""

from accounting.models.account import Account
from accounting.models.journal import DocType, JournalBatch, JournalLine
from accounting.models.mapping import (
    MappingKey,
    OutletAccountMapping,
    OutletPaymentMethodMapping,
)
from accounting.models.tax import CompanyTaxDefault, TaxRate

__all__ = [
    "Account",
    "DocType",
    "JournalBatch",
    "JournalLine",
    "MappingKey",
    "OutletAccountMapping",
    "OutletPaymentMethodMapping",
    "TaxRate",
    "CompanyTaxDefault",
]
