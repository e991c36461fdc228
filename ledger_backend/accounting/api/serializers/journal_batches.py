# accounting/api/serializers/journal_batches.py

from rest_framework import serializers

from accounting.models.journal import JournalBatch, JournalLine


class JournalLineSerializer(serializers.ModelSerializer):
    account_code = serializers.CharField(source="account.code", read_only=True)
    account_name = serializers.CharField(source="account.name", read_only=True)

    class Meta:
        model = JournalLine
        fields = (
            "id",
            "account",
            "account_code",
            "account_name",
            "outlet",
            "line_date",
            "debit",
            "credit",
            "description",
        )
        read_only_fields = fields


class JournalBatchSerializer(serializers.ModelSerializer):
    class Meta:
        model = JournalBatch
        fields = ("id", "company", "outlet", "doc_type", "doc_id", "posted_at", "created_at")
        read_only_fields = fields


class JournalBatchDetailSerializer(JournalBatchSerializer):
    lines = JournalLineSerializer(many=True, read_only=True)

    class Meta(JournalBatchSerializer.Meta):
        fields = JournalBatchSerializer.Meta.fields + ("lines",)
        read_only_fields = fields
