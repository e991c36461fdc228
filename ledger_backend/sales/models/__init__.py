from .sales_invoice import SalesInvoice
from .sales_payment import SalesPayment

__all__ = ["SalesInvoice", "SalesPayment"]
