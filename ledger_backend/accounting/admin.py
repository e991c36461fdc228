# accounting/admin.py

from django.contrib import admin

from accounting.models import (
    Account,
    CompanyTaxDefault,
    JournalBatch,
    JournalLine,
    OutletAccountMapping,
    OutletPaymentMethodMapping,
    TaxRate,
)


class ReadOnlyAdminMixin:
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# ACCOUNT
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "account_type", "company", "is_active")
    list_filter = ("company", "account_type", "is_active")
    search_fields = ("code", "name")
    ordering = ("company", "code")
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        ("Account Identity", {"fields": ("company", "code", "name", "account_type")}),
        ("Status", {"fields": ("is_active",)}),
        ("System Fields", {"fields": ("created_at", "updated_at")}),
    )


# ============================================================
# OUTLET MAPPINGS
# ============================================================


@admin.register(OutletAccountMapping)
class OutletAccountMappingAdmin(admin.ModelAdmin):
    list_display = ("company", "outlet", "mapping_key", "account")
    list_filter = ("company", "mapping_key")
    search_fields = ("outlet__code", "account__code")


@admin.register(OutletPaymentMethodMapping)
class OutletPaymentMethodMappingAdmin(admin.ModelAdmin):
    list_display = ("company", "outlet", "method_code", "account")
    list_filter = ("company",)
    search_fields = ("method_code", "outlet__code", "account__code")


# ============================================================
# TAX
# ============================================================


@admin.register(TaxRate)
class TaxRateAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "company", "rate_percent", "is_inclusive", "is_active")
    list_filter = ("company", "is_inclusive", "is_active")
    search_fields = ("code", "name")


@admin.register(CompanyTaxDefault)
class CompanyTaxDefaultAdmin(admin.ModelAdmin):
    list_display = ("company", "tax_rate", "created_at")
    list_filter = ("company",)


# ============================================================
# JOURNAL (STRICTLY IMMUTABLE)
# ============================================================


class JournalLineInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = JournalLine
    extra = 0
    fields = ("account", "outlet", "line_date", "debit", "credit", "description")
    readonly_fields = fields


@admin.register(JournalBatch)
class JournalBatchAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("id", "company", "outlet", "doc_type", "doc_id", "posted_at")
    list_filter = ("doc_type", "company")
    search_fields = ("doc_id",)
    ordering = ("-posted_at",)
    readonly_fields = ("company", "outlet", "doc_type", "doc_id", "posted_at", "created_at")
    inlines = [JournalLineInline]


@admin.register(JournalLine)
class JournalLineAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("id", "journal_batch", "account", "debit", "credit", "line_date")
    list_filter = ("account",)
    search_fields = ("description", "account__code")
    readonly_fields = (
        "journal_batch",
        "company",
        "outlet",
        "account",
        "line_date",
        "debit",
        "credit",
        "description",
    )
