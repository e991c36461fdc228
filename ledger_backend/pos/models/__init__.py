from .audit_log import SyncAuditLog
from .pos_transaction import (
    PosTransaction,
    PosTransactionItem,
    PosTransactionPayment,
    PosTransactionTax,
)

__all__ = [
    "PosTransaction",
    "PosTransactionItem",
    "PosTransactionPayment",
    "PosTransactionTax",
    "SyncAuditLog",
]
