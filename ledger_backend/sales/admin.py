# sales/admin.py

from django.contrib import admin

from sales.models import SalesInvoice, SalesPayment


@admin.register(SalesInvoice)
class SalesInvoiceAdmin(admin.ModelAdmin):
    list_display = ("invoice_no", "company", "outlet", "status", "payment_status", "grand_total", "paid_total")
    list_filter = ("status", "payment_status", "company")
    search_fields = ("invoice_no",)
    readonly_fields = ("status", "payment_status", "paid_total", "created_at", "updated_at")


@admin.register(SalesPayment)
class SalesPaymentAdmin(admin.ModelAdmin):
    list_display = ("payment_no", "invoice", "method", "status", "amount", "payment_at")
    list_filter = ("status", "method", "company")
    search_fields = ("payment_no", "invoice__invoice_no")
    readonly_fields = ("status", "created_at", "updated_at")
