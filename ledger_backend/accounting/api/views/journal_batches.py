# accounting/api/views/journal_batches.py

"""
PATH: accounting/api/views/journal_batches.py

JOURNAL BATCH API (READ-ONLY / AUDIT SAFE)

GET /api/accounting/journal-batches/
    ?doc_type=POS_SALE&outlet=3&posted_from=2026-01-01&posted_to=2026-01-31
GET /api/accounting/journal-batches/<id>/   (includes lines)

Scoped to request.user.company_id. Batches are immutable; no write methods.
"""

import django_filters
from drf_spectacular.utils import extend_schema
from rest_framework.viewsets import ReadOnlyModelViewSet

from accounting.api.serializers import JournalBatchDetailSerializer, JournalBatchSerializer
from accounting.models.journal import DocType, JournalBatch
from users.permissions import HasCompanyScope


class JournalBatchFilter(django_filters.FilterSet):
    doc_type = django_filters.ChoiceFilter(choices=DocType.choices)
    doc_id = django_filters.NumberFilter()
    outlet = django_filters.NumberFilter(field_name="outlet_id")
    posted_from = django_filters.DateFilter(field_name="posted_at", lookup_expr="date__gte")
    posted_to = django_filters.DateFilter(field_name="posted_at", lookup_expr="date__lte")

    class Meta:
        model = JournalBatch
        fields = ["doc_type", "doc_id", "outlet", "posted_from", "posted_to"]


@extend_schema(tags=["accounting"])
class JournalBatchViewSet(ReadOnlyModelViewSet):
    permission_classes = [HasCompanyScope]
    filterset_class = JournalBatchFilter
    http_method_names = ["get", "head", "options"]

    def get_queryset(self):
        qs = JournalBatch.objects.filter(company_id=self.request.user.company_id)
        if self.action == "retrieve":
            qs = qs.prefetch_related("lines__account")
        return qs.order_by("-posted_at", "-id")

    def get_serializer_class(self):
        if self.action == "retrieve":
            return JournalBatchDetailSerializer
        return JournalBatchSerializer
