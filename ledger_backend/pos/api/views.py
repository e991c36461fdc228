# pos/api/views.py

"""
PATH: pos/api/views.py

POST /api/pos/sync/push/

Offline terminals push completed/void/refund transactions for one outlet.
Company comes from the authenticated user; the outlet must belong to it.
Per-transaction results: OK | DUPLICATE | ERROR (HTTP 200 even when some fail).

Header X-Correlation-Id (optional) is echoed and threaded into logs/audit rows.
"""

import uuid

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from companies.models import Outlet
from pos.api.serializers import SyncPushRequestSerializer, SyncPushResponseSerializer
from pos.services.sync_push import accept_sync_push
from users.permissions import HasCompanyScope


class SyncPushView(APIView):
    permission_classes = [HasCompanyScope]

    @extend_schema(
        tags=["pos"],
        request=SyncPushRequestSerializer,
        responses=SyncPushResponseSerializer,
    )
    def post(self, request):
        serializer = SyncPushRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        company_id = request.user.company_id
        outlet_id = data["outlet_id"]
        if not Outlet.objects.filter(company_id=company_id, id=outlet_id, is_active=True).exists():
            return Response(
                {"detail": "Outlet not found for this company", "code": "OUTLET_NOT_FOUND"},
                status=status.HTTP_404_NOT_FOUND,
            )

        correlation_id = request.headers.get("X-Correlation-Id") or uuid.uuid4().hex
        results = accept_sync_push(
            company_id=company_id,
            outlet_id=outlet_id,
            transactions=data["transactions"],
            user_id=request.user.id,
            correlation_id=correlation_id,
        )

        return Response(
            SyncPushResponseSerializer({"correlation_id": correlation_id, "results": results}).data,
            status=status.HTTP_200_OK,
        )
