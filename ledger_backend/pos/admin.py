# pos/admin.py

from django.contrib import admin

from pos.models import (
    PosTransaction,
    PosTransactionItem,
    PosTransactionPayment,
    PosTransactionTax,
    SyncAuditLog,
)


class PosTransactionItemInline(admin.TabularInline):
    model = PosTransactionItem
    extra = 0


class PosTransactionPaymentInline(admin.TabularInline):
    model = PosTransactionPayment
    extra = 0


class PosTransactionTaxInline(admin.TabularInline):
    model = PosTransactionTax
    extra = 0


@admin.register(PosTransaction)
class PosTransactionAdmin(admin.ModelAdmin):
    list_display = ("client_tx_id", "company", "outlet", "status", "trx_at")
    list_filter = ("status", "company", "outlet")
    search_fields = ("client_tx_id",)
    inlines = [PosTransactionItemInline, PosTransactionPaymentInline, PosTransactionTaxInline]


@admin.register(SyncAuditLog)
class SyncAuditLogAdmin(admin.ModelAdmin):
    list_display = ("action", "result", "company", "outlet", "user_id", "created_at")
    list_filter = ("action", "result")
    readonly_fields = ("company", "outlet", "user_id", "action", "result", "payload", "created_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
