# sales/api/views.py

"""
PATH: sales/api/views.py

SALES POSTING ACTIONS

POST /api/sales/invoices/<id>/post/   DRAFT → POSTED + SALES_INVOICE batch
POST /api/sales/payments/<id>/post/   DRAFT → POSTED + SALES_PAYMENT_IN batch

Thin wrappers; rules live in sales/services/sales_posting.py.
Re-posting a POSTED document returns 200 with already_posted=true.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.errors import not_found_response, service_error_response
from accounting.services.exceptions import AccountingServiceError
from sales.api.serializers import SalesInvoiceSerializer, SalesPaymentSerializer, posting_payload
from sales.models import SalesInvoice, SalesPayment
from sales.services.sales_posting import (
    SalesPostingError,
    post_sales_invoice,
    post_sales_payment,
)
from users.permissions import CanPostLedger


class SalesInvoicePostView(APIView):
    permission_classes = [CanPostLedger]

    @extend_schema(tags=["sales"], request=None, responses=SalesInvoiceSerializer)
    def post(self, request, pk: int):
        try:
            outcome = post_sales_invoice(company_id=request.user.company_id, invoice_id=pk)
        except SalesInvoice.DoesNotExist:
            return not_found_response("Invoice not found")
        except (SalesPostingError, AccountingServiceError) as exc:
            return service_error_response(exc)

        data = SalesInvoiceSerializer(outcome.invoice).data
        data.update(posting_payload(outcome.posting))
        return Response(data, status=status.HTTP_200_OK)


class SalesPaymentPostView(APIView):
    permission_classes = [CanPostLedger]

    @extend_schema(tags=["sales"], request=None, responses=SalesPaymentSerializer)
    def post(self, request, pk: int):
        try:
            outcome = post_sales_payment(company_id=request.user.company_id, payment_id=pk)
        except SalesPayment.DoesNotExist:
            return not_found_response("Payment not found")
        except (SalesPostingError, AccountingServiceError) as exc:
            return service_error_response(exc)

        data = SalesPaymentSerializer(outcome.payment).data
        data.update(posting_payload(outcome.posting))
        return Response(data, status=status.HTTP_200_OK)
