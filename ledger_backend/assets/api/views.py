# assets/api/views.py

"""
PATH: assets/api/views.py

POST /api/assets/depreciation/run/
    {"plan_id": 1, "period_year": 2026, "period_month": 3, "run_date": "2026-03-31"?}

201 on a new run, 200 with duplicate=true when the period already ran.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.errors import not_found_response, service_error_response
from accounting.services.exceptions import AccountingServiceError
from assets.api.serializers import DepreciationRunRequestSerializer, DepreciationRunSerializer
from assets.models import DepreciationPlan
from assets.services.depreciation import DepreciationError, run_depreciation_plan
from users.permissions import CanPostLedger


class DepreciationRunView(APIView):
    permission_classes = [CanPostLedger]

    @extend_schema(
        tags=["assets"],
        request=DepreciationRunRequestSerializer,
        responses=DepreciationRunSerializer,
    )
    def post(self, request):
        serializer = DepreciationRunRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            outcome = run_depreciation_plan(
                company_id=request.user.company_id,
                plan_id=data["plan_id"],
                period_year=data["period_year"],
                period_month=data["period_month"],
                run_date=data.get("run_date"),
            )
        except DepreciationPlan.DoesNotExist:
            return not_found_response("Depreciation plan not found")
        except (DepreciationError, AccountingServiceError) as exc:
            return service_error_response(exc)

        body = DepreciationRunSerializer(outcome.run).data
        body["duplicate"] = outcome.duplicate
        return Response(
            body,
            status=status.HTTP_200_OK if outcome.duplicate else status.HTTP_201_CREATED,
        )
