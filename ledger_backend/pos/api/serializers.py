# pos/api/serializers.py

from rest_framework import serializers

from pos.models import PosTransaction


class SyncPushItemSerializer(serializers.Serializer):
    item_id = serializers.IntegerField(min_value=1)
    name = serializers.CharField(max_length=191)
    qty = serializers.DecimalField(max_digits=18, decimal_places=4)
    price_snapshot = serializers.DecimalField(max_digits=18, decimal_places=2)


class SyncPushPaymentSerializer(serializers.Serializer):
    method = serializers.CharField(max_length=32, allow_blank=True)
    amount = serializers.DecimalField(max_digits=18, decimal_places=2)


class SyncPushTaxSerializer(serializers.Serializer):
    tax_rate_id = serializers.IntegerField(min_value=1)
    amount = serializers.DecimalField(max_digits=18, decimal_places=2)


class SyncPushTransactionSerializer(serializers.Serializer):
    client_tx_id = serializers.CharField(max_length=64)
    company_id = serializers.IntegerField(min_value=1)
    outlet_id = serializers.IntegerField(min_value=1)
    status = serializers.ChoiceField(choices=PosTransaction.STATUS_CHOICES)
    trx_at = serializers.DateTimeField()
    items = SyncPushItemSerializer(many=True)
    payments = SyncPushPaymentSerializer(many=True)
    taxes = SyncPushTaxSerializer(many=True, required=False, default=list)


class SyncPushRequestSerializer(serializers.Serializer):
    outlet_id = serializers.IntegerField(min_value=1)
    transactions = SyncPushTransactionSerializer(many=True, allow_empty=False)


class SyncPushResultSerializer(serializers.Serializer):
    client_tx_id = serializers.CharField()
    result = serializers.CharField()
    message = serializers.CharField(allow_null=True)
    pos_transaction_id = serializers.IntegerField(allow_null=True)


class SyncPushResponseSerializer(serializers.Serializer):
    correlation_id = serializers.CharField()
    results = SyncPushResultSerializer(many=True)
