# accounting/api/errors.py

"""
Service error → HTTP response.

Body shape is always {"detail": str, "code": str}.
- status-transition errors → 409
- everything else raised by a service (config / data invariants) → 400
"""

from rest_framework import status
from rest_framework.response import Response

CONFLICT_CODES = {
    "INVOICE_STATUS_INVALID",
    "PAYMENT_STATUS_INVALID",
    "DEPRECIATION_PLAN_STATUS_INVALID",
}


def service_error_response(exc: Exception) -> Response:
    code = getattr(exc, "code", "ERROR")
    http_status = status.HTTP_409_CONFLICT if code in CONFLICT_CODES else status.HTTP_400_BAD_REQUEST
    return Response({"detail": str(exc), "code": code}, status=http_status)


def not_found_response(detail: str) -> Response:
    return Response({"detail": detail, "code": "NOT_FOUND"}, status=status.HTTP_404_NOT_FOUND)
