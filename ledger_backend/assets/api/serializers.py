# assets/api/serializers.py

from rest_framework import serializers

from assets.models import DepreciationRun


class DepreciationRunRequestSerializer(serializers.Serializer):
    plan_id = serializers.IntegerField(min_value=1)
    period_year = serializers.IntegerField(min_value=1900, max_value=9999)
    period_month = serializers.IntegerField(min_value=1, max_value=12)
    run_date = serializers.DateField(required=False)


class DepreciationRunSerializer(serializers.ModelSerializer):
    class Meta:
        model = DepreciationRun
        fields = (
            "id",
            "plan",
            "period_year",
            "period_month",
            "run_date",
            "amount",
            "status",
            "journal_batch",
        )
        read_only_fields = fields
