# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized, typed domain errors for the posting engine.

Every error carries a stable machine-readable `code` (surfaced by APIs,
commands and the sync-push hook). None of these are retried automatically.

"Already posted" is NOT an error: PostingService returns AlreadyPosted.
"""

from __future__ import annotations


class AccountingServiceError(Exception):
    """Base exception for all accounting service failures."""

    code = "ACCOUNTING_ERROR"


class PostingRuleError(AccountingServiceError):
    """Raised when a posting rule cannot be applied (programming/wiring error)."""

    code = "POSTING_RULE_ERROR"


class SourceDocumentNotFoundError(AccountingServiceError):
    """Raised when the document being posted cannot be read."""

    code = "SOURCE_DOCUMENT_NOT_FOUND"


# ------------------------------------------------------------
# Configuration errors (fix mapping data, then re-post)
# ------------------------------------------------------------
class OutletAccountMappingMissingError(AccountingServiceError):
    code = "OUTLET_ACCOUNT_MAPPING_MISSING"

    def __init__(self, missing_keys, *, company_id=None, outlet_id=None):
        self.missing_keys = list(missing_keys)
        self.company_id = company_id
        self.outlet_id = outlet_id
        super().__init__(
            f"{self.code}: outlet {outlet_id} of company {company_id} "
            f"is missing account mappings for {', '.join(self.missing_keys)}"
        )


class OutletPaymentMappingMissingError(AccountingServiceError):
    code = "OUTLET_PAYMENT_MAPPING_MISSING"

    def __init__(self, method_code, *, company_id=None, outlet_id=None):
        self.method_code = method_code
        self.company_id = company_id
        self.outlet_id = outlet_id
        super().__init__(
            f"{self.code}: no account mapped for payment method {method_code!r} "
            f"(company {company_id}, outlet {outlet_id})"
        )


class UnsupportedPaymentMethodError(AccountingServiceError):
    code = "UNSUPPORTED_PAYMENT_METHOD"

    def __init__(self, method_code):
        self.method_code = method_code
        super().__init__(f"{self.code}: {method_code!r}")


# ------------------------------------------------------------
# Structural violations in the source data
# ------------------------------------------------------------
class PosEmptyPaymentSetError(AccountingServiceError):
    code = "POS_EMPTY_PAYMENT_SET"


class PosOverpaymentNotSupportedError(AccountingServiceError):
    code = "POS_OVERPAYMENT_NOT_SUPPORTED"


class UnbalancedJournalError(AccountingServiceError):
    code = "UNBALANCED_JOURNAL"


class InvalidJournalLineShapeError(AccountingServiceError):
    code = "INVALID_JOURNAL_LINE_SHAPE"


class MixedTaxInclusiveError(AccountingServiceError):
    code = "MIXED_TAX_INCLUSIVE"
